"""In-process byte pipe: a bounded, unidirectional channel between two tasks.

pipe() returns a (PipeReader, PipeWriter) pair sharing one buffer.
The writer half is what GhciWriter.pipe() wraps; the reader half belongs
to whoever consumes the process output (a log capture, a test, ...).

Semantics:
    - flush() always succeeds: the pipe holds nothing back.
    - Writes suspend while the buffer is full and accept as many bytes
      as fit once space frees up (partial writes are normal).
    - Closing the reader breaks the pipe: pending and future writes
      raise BrokenPipeError.
    - Shutting down the writer is an EOF for the reader once the buffer
      has been drained.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

DEFAULT_CAPACITY = 64 * 1024


class _PipeState:
    """Buffer and close flags shared by both halves."""

    def __init__(self, capacity: int) -> None:
        self.buffer = bytearray()
        self.capacity = capacity
        self.write_closed = False
        self.read_closed = False
        self.changed = asyncio.Condition()

    def __repr__(self) -> str:
        return (
            f"_PipeState(buffered={len(self.buffer)}, capacity={self.capacity}, "
            f"write_closed={self.write_closed}, read_closed={self.read_closed})"
        )


class PipeWriter:
    """Write half of an in-process pipe."""

    def __init__(self, state: _PipeState) -> None:
        self._state = state

    @property
    def is_closing(self) -> bool:
        return self._state.write_closed or self._state.read_closed

    async def write(self, data: bytes) -> int:
        """Accept up to len(data) bytes, suspending while the pipe is full."""
        state = self._state
        async with state.changed:
            await state.changed.wait_for(
                lambda: state.write_closed
                or state.read_closed
                or len(state.buffer) < state.capacity
                or not data
            )
            self._check_open()
            n = min(len(data), state.capacity - len(state.buffer))
            if n:
                state.buffer += data[:n]
                state.changed.notify_all()
            return n

    async def flush(self) -> None:
        # Bytes land in the shared buffer on write; nothing is held back.
        pass

    async def shutdown(self) -> None:
        state = self._state
        async with state.changed:
            state.write_closed = True
            state.changed.notify_all()

    def _check_open(self) -> None:
        if self._state.read_closed:
            raise BrokenPipeError("pipe reader is closed")
        if self._state.write_closed:
            raise BrokenPipeError("write after pipe shutdown")

    async def __aenter__(self) -> PipeWriter:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.shutdown()

    def __repr__(self) -> str:
        return f"PipeWriter({self._state!r})"


class PipeReader:
    """Read half of an in-process pipe."""

    def __init__(self, state: _PipeState) -> None:
        self._state = state

    def at_eof(self) -> bool:
        return self._state.write_closed and not self._state.buffer

    async def read(self, n: int = -1) -> bytes:
        """Read up to n bytes; n < 0 reads until the writer shuts down.

        Returns b"" at EOF, after close(), and at once for n == 0.
        """
        if n == 0:
            return b""
        state = self._state
        async with state.changed:
            if n > 0:
                await state.changed.wait_for(self._readable)
                return self._take(n)
            # Drain as we go so a writer blocked on a full buffer can finish
            received = bytearray()
            while not state.read_closed:
                await state.changed.wait_for(self._readable)
                received += self._take(len(state.buffer))
                if state.write_closed and not state.buffer:
                    return bytes(received)
            return b""

    def _readable(self) -> bool:
        state = self._state
        return bool(state.buffer) or state.write_closed or state.read_closed

    async def readline(self) -> bytes:
        """Read through the next newline.

        Returns whatever is left at EOF, and a full buffer as-is when a line
        is longer than the pipe capacity.
        """
        state = self._state
        async with state.changed:
            await state.changed.wait_for(
                lambda: b"\n" in state.buffer
                or len(state.buffer) >= state.capacity
                or state.write_closed
                or state.read_closed
            )
            end = state.buffer.find(b"\n")
            return self._take(len(state.buffer) if end < 0 else end + 1)

    def _take(self, n: int) -> bytes:
        state = self._state
        if state.read_closed or n <= 0:
            return b""
        chunk = bytes(state.buffer[:n])
        del state.buffer[:n]
        state.changed.notify_all()
        return chunk

    async def close(self) -> None:
        """Drop the reader; the pipe is broken for the writer from now on."""
        state = self._state
        async with state.changed:
            state.read_closed = True
            state.buffer.clear()
            state.changed.notify_all()

    async def __aenter__(self) -> PipeReader:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self

    async def __anext__(self) -> bytes:
        line = await self.readline()
        if not line:
            raise StopAsyncIteration
        return line

    def __repr__(self) -> str:
        return f"PipeReader({self._state!r})"


def pipe(capacity: int = DEFAULT_CAPACITY) -> tuple[PipeReader, PipeWriter]:
    """Create a connected (reader, writer) pair holding at most capacity bytes."""
    if capacity <= 0:
        raise ValueError(f"pipe capacity must be positive, got {capacity}")
    state = _PipeState(capacity)
    return PipeReader(state), PipeWriter(state)
