"""ghciwatch: clonable async sinks for ghci process output.

    from ghciwatch import GhciWriter, pipe

    reader, writer = pipe()
    out = GhciWriter.pipe(writer)
    err = out.clone()          # shares the pipe, writes serialize
    await out.write_all(b"Ok, one module loaded.\n")
"""

from ghciwatch.config import OutputConfig
from ghciwatch.pipe import PipeReader, PipeWriter, pipe
from ghciwatch.writer import AsyncWriter, GhciWriter, WriterKind

__all__ = [
    "AsyncWriter",
    "GhciWriter",
    "OutputConfig",
    "PipeReader",
    "PipeWriter",
    "WriterKind",
    "pipe",
]
