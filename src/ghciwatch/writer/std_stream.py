"""Standard stream sink: raw bytes to the process's stdout or stderr."""

from __future__ import annotations

import asyncio
import sys
from typing import Any


class StdStream:
    """Write to sys.stdout or sys.stderr.

    The stream is looked up on every call rather than captured at
    construction, so redirections (contextlib.redirect_stdout, pytest
    capture) are honoured. The blocking OS write runs in a worker thread.
    """

    def __init__(self, name: str) -> None:
        if name not in ("stdout", "stderr"):
            raise ValueError(f"Unknown standard stream: {name!r}")
        self._name = name

    @property
    def stream(self) -> Any:
        return getattr(sys, self._name)

    async def write(self, data: bytes) -> int:
        if not data:
            return 0
        return await asyncio.to_thread(self._write_blocking, bytes(data))

    def _write_blocking(self, data: bytes) -> int:
        stream = self.stream
        buffer = getattr(stream, "buffer", None)
        if buffer is None:
            # Text-only stream (io.StringIO and friends)
            encoding = getattr(stream, "encoding", None) or "utf-8"
            stream.write(data.decode(encoding, errors="replace"))
            return len(data)
        # Text layer may hold unflushed str output ahead of us
        stream.flush()
        written = buffer.write(data)
        return len(data) if written is None else written

    async def flush(self) -> None:
        await asyncio.to_thread(self._flush_blocking)

    def _flush_blocking(self) -> None:
        stream = self.stream
        stream.flush()
        buffer = getattr(stream, "buffer", None)
        if buffer is not None:
            buffer.flush()

    async def shutdown(self) -> None:
        # The process-wide stream outlives any one writer: flush, never close.
        await self.flush()

    def __repr__(self) -> str:
        return f"StdStream({self._name!r})"
