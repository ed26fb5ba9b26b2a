"""Writers: where ghci process output goes."""

from ghciwatch.writer.base import AsyncWriter, WriterKind
from ghciwatch.writer.handle import GhciWriter
from ghciwatch.writer.shared_pipe import SharedPipe
from ghciwatch.writer.std_stream import StdStream

__all__ = ["AsyncWriter", "GhciWriter", "SharedPipe", "StdStream", "WriterKind"]
