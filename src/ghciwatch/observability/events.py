"""Typed event dataclasses for ghciwatch observability.

All events are frozen (immutable) dataclasses. Writers emit these;
they don't know about logs. Subscribers handle routing.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WriterShutdown:
    kind: str  # "stdout" | "stderr" | "pipe"


@dataclass(frozen=True)
class WriteFailed:
    kind: str
    op: str  # "write" | "flush" | "shutdown"
    error: str
    error_type: str  # e.g. "BrokenPipeError"
