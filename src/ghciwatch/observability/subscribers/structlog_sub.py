"""Routes writer events to structlog log lines.

Always-on subscriber. Called by emitter.configure() on every startup.
"""

from __future__ import annotations

from dataclasses import asdict

from ghciwatch.observability.events import WriteFailed, WriterShutdown
from ghciwatch.observability.linker import GhciwatchEventLinker
from ghciwatch.observability.logging import get_logger


def _get_logger():
    """Looked up per event so a reconfigured structlog is picked up."""
    return get_logger("ghciwatch.events")


def register_structlog_subscriber() -> None:
    """Register log handlers for all writer events on GhciwatchEventLinker."""

    @GhciwatchEventLinker.on(WriterShutdown)
    def _log_writer_shutdown(event: WriterShutdown) -> None:
        _get_logger().info("writer.shutdown", **asdict(event))

    @GhciwatchEventLinker.on(WriteFailed)
    def _log_write_failed(event: WriteFailed) -> None:
        _get_logger().error("writer.failed", **asdict(event))
