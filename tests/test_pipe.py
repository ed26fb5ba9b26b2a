"""Tests for the in-process byte pipe.

Coverage:
- Construction: capacity validation
- Writes: partial writes, backpressure, empty writes
- Reads: read(n), read-to-EOF, readline, async iteration
- Closing: writer shutdown is EOF, reader close breaks the pipe
"""

from __future__ import annotations

import asyncio

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ghciwatch.pipe import DEFAULT_CAPACITY, pipe


class TestConstruction:
    def test_default_capacity(self):
        reader, writer = pipe()
        assert reader._state is writer._state
        assert writer._state.capacity == DEFAULT_CAPACITY

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_non_positive_capacity_raises(self, capacity):
        with pytest.raises(ValueError, match="must be positive"):
            pipe(capacity)


class TestWrites:
    @pytest.mark.asyncio
    async def test_write_then_read(self):
        reader, writer = pipe()
        assert await writer.write(b"Ok, one module loaded.\n") == 23
        assert await reader.read(100) == b"Ok, one module loaded.\n"

    @pytest.mark.asyncio
    async def test_partial_write_when_nearly_full(self):
        reader, writer = pipe(4)
        assert await writer.write(b"abcdef") == 4
        assert await reader.read(10) == b"abcd"

    @pytest.mark.asyncio
    async def test_empty_write_returns_zero(self):
        _, writer = pipe(1)
        await writer.write(b"x")
        # A full pipe does not block an empty write
        assert await asyncio.wait_for(writer.write(b""), 1) == 0

    @pytest.mark.asyncio
    async def test_write_suspends_while_full(self):
        reader, writer = pipe(2)
        await writer.write(b"ab")
        pending = asyncio.create_task(writer.write(b"cd"))
        await asyncio.sleep(0)
        assert not pending.done()

        assert await reader.read(1) == b"a"
        assert await asyncio.wait_for(pending, 1) == 1
        assert await reader.read(10) == b"bc"

    @pytest.mark.asyncio
    async def test_flush_is_immediate(self):
        _, writer = pipe()
        await writer.write(b"data")
        await asyncio.wait_for(writer.flush(), 1)


class TestReads:
    @pytest.mark.asyncio
    async def test_read_waits_for_data(self):
        reader, writer = pipe()
        pending = asyncio.create_task(reader.read(10))
        await asyncio.sleep(0)
        assert not pending.done()

        await writer.write(b"hi")
        assert await asyncio.wait_for(pending, 1) == b"hi"

    @pytest.mark.asyncio
    async def test_read_zero_returns_immediately(self):
        reader, _ = pipe()
        assert await asyncio.wait_for(reader.read(0), 1) == b""

    @pytest.mark.asyncio
    async def test_read_to_eof(self):
        reader, writer = pipe()
        await writer.write(b"one ")
        await writer.write(b"two")
        await writer.shutdown()
        assert await reader.read() == b"one two"
        assert await reader.read() == b""
        assert reader.at_eof()

    @pytest.mark.asyncio
    async def test_readline(self):
        reader, writer = pipe()
        await writer.write(b"first\nsecond\nrest")
        await writer.shutdown()
        assert await reader.readline() == b"first\n"
        assert await reader.readline() == b"second\n"
        assert await reader.readline() == b"rest"
        assert await reader.readline() == b""

    @pytest.mark.asyncio
    async def test_readline_waits_for_newline(self):
        reader, writer = pipe()
        await writer.write(b"no newline yet")
        pending = asyncio.create_task(reader.readline())
        await asyncio.sleep(0)
        assert not pending.done()

        await writer.write(b"\n")
        assert await asyncio.wait_for(pending, 1) == b"no newline yet\n"

    @pytest.mark.asyncio
    async def test_async_iteration_yields_lines(self):
        reader, writer = pipe()
        async with writer:
            await writer.write(b"a\nb\n")
        assert [line async for line in reader] == [b"a\n", b"b\n"]


class TestClosing:
    @pytest.mark.asyncio
    async def test_write_after_reader_closed_raises(self):
        reader, writer = pipe()
        await reader.close()
        with pytest.raises(BrokenPipeError):
            await writer.write(b"lost")
        await writer.flush()  # nothing buffered, nothing to lose

    @pytest.mark.asyncio
    async def test_flush_after_shutdown_succeeds(self):
        _, writer = pipe()
        await writer.shutdown()
        await asyncio.wait_for(writer.flush(), 1)

    @pytest.mark.asyncio
    async def test_pending_write_breaks_when_reader_closes(self):
        reader, writer = pipe(1)
        await writer.write(b"x")
        pending = asyncio.create_task(writer.write(b"y"))
        await asyncio.sleep(0)

        await reader.close()
        with pytest.raises(BrokenPipeError):
            await asyncio.wait_for(pending, 1)

    @pytest.mark.asyncio
    async def test_write_after_shutdown_raises(self):
        _, writer = pipe()
        await writer.shutdown()
        await writer.shutdown()  # idempotent
        with pytest.raises(BrokenPipeError, match="shutdown"):
            await writer.write(b"late")

    @pytest.mark.asyncio
    async def test_reader_context_manager_closes(self):
        reader, writer = pipe()
        async with reader:
            pass
        assert writer.is_closing
        assert await reader.read(1) == b""


class TestProperties:
    @given(
        chunks=st.lists(st.binary(min_size=1, max_size=64), max_size=20),
        capacity=st.integers(min_value=1, max_value=32),
    )
    @settings(max_examples=50, deadline=None)
    def test_bytes_arrive_in_order_under_backpressure(self, chunks, capacity):
        async def run() -> bytes:
            reader, writer = pipe(capacity)

            async def produce() -> None:
                for chunk in chunks:
                    view = memoryview(chunk)
                    while view:
                        n = await writer.write(view)
                        view = view[n:]
                await writer.shutdown()

            _, received = await asyncio.gather(produce(), reader.read())
            return received

        assert asyncio.run(run()) == b"".join(chunks)
