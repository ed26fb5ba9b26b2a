"""AsyncWriter protocol and the closed set of writer destinations."""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol, runtime_checkable


class WriterKind(StrEnum):
    STDOUT = "stdout"
    STDERR = "stderr"
    PIPE = "pipe"
    NULL = "null"


@runtime_checkable
class AsyncWriter(Protocol):
    """Where process output bytes get written.

    write() may accept fewer bytes than offered and may suspend until the
    destination can make progress. flush() and shutdown() likewise.
    """

    async def write(self, data: bytes) -> int: ...

    async def flush(self) -> None: ...

    async def shutdown(self) -> None: ...
