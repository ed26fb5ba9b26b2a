"""ghciwatch observability: writer events and structured logs.

Public API:
    emit(event)     -- Fire-and-forget event emission (no-op if not configured)
    configure(cfg)  -- Initialize logging + emitter + subscribers (call once at startup)
    reset()         -- Reset for testing
    get_logger(name) -- Get a structlog logger
"""

from ghciwatch.observability.config import ObservabilityConfig
from ghciwatch.observability.emitter import configure, emit, is_configured, reset
from ghciwatch.observability.events import WriteFailed, WriterShutdown
from ghciwatch.observability.logging import get_logger

__all__ = [
    "ObservabilityConfig",
    "WriteFailed",
    "WriterShutdown",
    "configure",
    "emit",
    "get_logger",
    "is_configured",
    "reset",
]
