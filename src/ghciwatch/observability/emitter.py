"""Singleton emitter: configure once, emit everywhere.

The global emit() function is the only API writers need.
It's a no-op when not configured (zero overhead in tests).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ghciwatch.observability.config import ObservabilityConfig

from pyventus.events import EventEmitter

_emitter: EventEmitter | None = None
_configured: bool = False


def emit(event: Any) -> None:
    """Fire-and-forget event emission. No-op if not configured."""
    if _emitter is not None:
        _emitter.emit(event)


def configure(config: ObservabilityConfig | None = None) -> EventEmitter:
    """Initialize logging, the global emitter and its subscribers.

    Called once at startup by whatever owns the ghci session.
    Idempotent -- second call returns existing emitter.
    """
    global _emitter, _configured

    if _configured and _emitter is not None:
        return _emitter

    from ghciwatch.observability.config import ObservabilityConfig

    cfg = config or ObservabilityConfig()

    from ghciwatch.observability.logging import get_logger, setup_logging

    setup_logging(cfg)

    from pyventus.core.processing.asyncio import AsyncIOProcessingService

    from ghciwatch.observability.linker import GhciwatchEventLinker

    _emitter = EventEmitter(
        event_linker=GhciwatchEventLinker,
        event_processor=AsyncIOProcessingService(),
    )

    from ghciwatch.observability.subscribers.structlog_sub import (
        register_structlog_subscriber,
    )

    register_structlog_subscriber()

    get_logger("ghciwatch.observability").debug(
        "observability.configured",
        destination=cfg.log_destination,
    )

    _configured = True
    return _emitter


def is_configured() -> bool:
    return _configured


def reset() -> None:
    """Reset for testing."""
    global _emitter, _configured

    from ghciwatch.observability.linker import GhciwatchEventLinker
    from ghciwatch.observability.logging import shutdown_logging

    shutdown_logging()
    GhciwatchEventLinker.remove_all()

    _emitter = None
    _configured = False
