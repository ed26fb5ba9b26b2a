"""Shared pipe: one PipeWriter, many owners, one writer at a time.

Every GhciWriter cloned from the same GhciWriter.pipe() handle holds a
reference to the same SharedPipe. Each operation takes the lock, runs the
delegated call on the pipe, and releases the lock before returning, so no
two operations are ever in flight on the pipe together. Waiting for the
lock is an ordinary await: the caller's task suspends until the current
holder finishes. Cancelling a waiting or running operation releases the
lock on the way out.

No ordering is promised between owners beyond mutual exclusion, and
errors from the pipe (BrokenPipeError once the reader is gone) pass
through unchanged.
"""

from __future__ import annotations

import asyncio

from ghciwatch.pipe import PipeWriter


class SharedPipe:
    """Exclusive-access adapter around a PipeWriter."""

    def __init__(self, writer: PipeWriter) -> None:
        self._writer = writer
        self._lock = asyncio.Lock()

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    async def write(self, data: bytes) -> int:
        async with self._lock:
            return await self._writer.write(data)

    async def flush(self) -> None:
        async with self._lock:
            await self._writer.flush()

    async def shutdown(self) -> None:
        async with self._lock:
            await self._writer.shutdown()

    def __repr__(self) -> str:
        return f"SharedPipe({self._writer!r}, locked={self.locked})"
