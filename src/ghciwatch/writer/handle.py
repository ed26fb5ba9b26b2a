"""GhciWriter: a clonable async sink for ghci process output.

A GhciWriter targets exactly one destination, fixed at construction:

    GhciWriter.stdout()       the process's standard output
    GhciWriter.stderr()       the process's standard error
    GhciWriter.pipe(writer)   the write half of an in-process pipe
    GhciWriter.null()         the void

Callers only see write/flush/shutdown; the destination kind is a closed
set and every operation switches on it. Reconfiguring means building a
new writer.

Cloning is cheap and never blocks. Standard stream and null writers
clone into fresh, independent writers over the same process-wide
resource. Pipe writers clone into new references to the same SharedPipe,
so writes from all clones are serialized against each other.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ghciwatch.observability.emitter import emit
from ghciwatch.observability.events import WriteFailed, WriterShutdown
from ghciwatch.writer.base import WriterKind
from ghciwatch.writer.shared_pipe import SharedPipe
from ghciwatch.writer.std_stream import StdStream

if TYPE_CHECKING:
    from ghciwatch.pipe import PipeWriter


# Kinds backed by a live resource. NULL has no backend and answers inline.
_FORWARDED = frozenset({WriterKind.STDOUT, WriterKind.STDERR, WriterKind.PIPE})


class GhciWriter:
    """Clonable async writer over one of a fixed set of destinations."""

    __slots__ = ("_kind", "_backend")

    def __init__(self, kind: WriterKind, backend: StdStream | SharedPipe | None = None) -> None:
        if (backend is None) != (kind is WriterKind.NULL):
            raise ValueError(f"{kind!s} writer can't hold backend {backend!r}")
        self._kind = kind
        self._backend = backend

    # -- construction -------------------------------------------------------

    @classmethod
    def stdout(cls) -> GhciWriter:
        """Write to `stdout`."""
        return cls(WriterKind.STDOUT, StdStream("stdout"))

    @classmethod
    def stderr(cls) -> GhciWriter:
        """Write to `stderr`."""
        return cls(WriterKind.STDERR, StdStream("stderr"))

    @classmethod
    def pipe(cls, writer: PipeWriter) -> GhciWriter:
        """Write to an in-process pipe, shared by every clone of the result."""
        return cls(WriterKind.PIPE, SharedPipe(writer))

    @classmethod
    def null(cls) -> GhciWriter:
        """Write to the void."""
        return cls(WriterKind.NULL)

    @classmethod
    def from_name(cls, name: str) -> GhciWriter:
        """Build a writer from a configured destination name.

        Only the zero-argument kinds can be named; a pipe writer needs the
        pipe itself and must be built with GhciWriter.pipe().
        """
        try:
            kind = WriterKind(name.lower())
        except ValueError:
            raise ValueError(
                f"Unknown writer destination: {name!r}. "
                f"Available: {[k.value for k in WriterKind if k is not WriterKind.PIPE]}."
            ) from None
        if kind is WriterKind.STDOUT:
            return cls.stdout()
        if kind is WriterKind.STDERR:
            return cls.stderr()
        if kind is WriterKind.NULL:
            return cls.null()
        raise ValueError("A pipe writer can't be built from a name; use GhciWriter.pipe()")

    @property
    def kind(self) -> WriterKind:
        return self._kind

    # -- write contract -----------------------------------------------------

    async def write(self, data: bytes) -> int:
        """Write some of `data`, returning how many bytes were accepted."""
        kind = self._kind
        if kind is WriterKind.NULL:
            return len(data)
        if kind not in _FORWARDED:
            raise AssertionError(f"unhandled writer kind: {kind!r}")
        try:
            return await self._backend.write(data)
        except OSError as e:
            self._failed("write", e)
            raise

    async def write_all(self, data: bytes) -> None:
        """Write every byte of `data`.

        Each underlying write is exclusive, but on a shared pipe another
        clone may write between two chunks of the same buffer.
        """
        view = memoryview(data)
        while view:
            n = await self.write(view)
            if n == 0:
                raise OSError(f"{self._kind} writer accepted 0 of {len(view)} bytes")
            view = view[n:]

    async def flush(self) -> None:
        kind = self._kind
        if kind is WriterKind.NULL:
            return
        if kind not in _FORWARDED:
            raise AssertionError(f"unhandled writer kind: {kind!r}")
        try:
            await self._backend.flush()
        except OSError as e:
            self._failed("flush", e)
            raise

    async def shutdown(self) -> None:
        """Close the destination.

        Standard streams are flushed but stay open. On a pipe writer this
        closes the pipe for every clone.
        """
        kind = self._kind
        if kind is WriterKind.NULL:
            return
        if kind not in _FORWARDED:
            raise AssertionError(f"unhandled writer kind: {kind!r}")
        try:
            await self._backend.shutdown()
        except OSError as e:
            self._failed("shutdown", e)
            raise
        emit(WriterShutdown(kind=str(kind)))

    def _failed(self, op: str, error: OSError) -> None:
        emit(
            WriteFailed(
                kind=str(self._kind),
                op=op,
                error=str(error),
                error_type=type(error).__name__,
            )
        )

    # -- cloning ------------------------------------------------------------

    def clone(self) -> GhciWriter:
        """A new writer to the same destination."""
        kind = self._kind
        if kind is WriterKind.STDOUT:
            return GhciWriter.stdout()
        if kind is WriterKind.STDERR:
            return GhciWriter.stderr()
        if kind is WriterKind.PIPE:
            return GhciWriter(WriterKind.PIPE, self._backend)
        if kind is WriterKind.NULL:
            return GhciWriter.null()
        raise AssertionError(f"unhandled writer kind: {kind!r}")

    __copy__ = clone

    async def __aenter__(self) -> GhciWriter:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            await self.flush()

    def __repr__(self) -> str:
        return f"GhciWriter(kind={self._kind.value!r}, backend={self._backend!r})"
