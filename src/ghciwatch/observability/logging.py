"""structlog setup for ghciwatch.

Writers never log directly: they emit events, and the structlog
subscriber turns those into log lines. This module only decides how
those lines are rendered and where they land.

    GHCIWATCH_LOG_DESTINATION=stderr (default) | jsonl
    GHCIWATCH_LOG_FORMAT=json (default) | console

Log output never goes through a GhciWriter: the writers carry the ghci
child's bytes, the logs describe what the writers did.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from ghciwatch.observability.config import ObservabilityConfig

_DEFAULT_JSONL_PATH = "/tmp/ghciwatch.jsonl"
_DESTINATIONS = ("stderr", "jsonl")

_handler: logging.Handler | None = None


def _renderer(config: ObservabilityConfig) -> Any:
    if config.log_format == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def _create_handler(config: ObservabilityConfig) -> logging.Handler:
    if config.log_destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    path = Path(config.jsonl_path or _DEFAULT_JSONL_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(str(path), mode="a", encoding="utf-8")


def setup_logging(config: ObservabilityConfig) -> None:
    """Route structlog through a stdlib handler on the root logger."""
    global _handler

    if config.log_destination not in _DESTINATIONS:
        raise ValueError(
            f"Unknown log destination: {config.log_destination!r}. "
            f"Available: {list(_DESTINATIONS)}."
        )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = _create_handler(config)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(config),
            ],
        )
    )

    # Swap out a previous ghciwatch handler, leave foreign ones (pytest caplog etc.)
    root_logger = logging.getLogger()
    if _handler is not None:
        root_logger.removeHandler(_handler)
        _handler.close()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    _handler = handler


def get_logger(name: str = "", **kwargs: Any) -> Any:
    return structlog.get_logger(name, **kwargs)


def shutdown_logging() -> None:
    """Detach and close the ghciwatch handler. Call on process exit."""
    global _handler

    if _handler is not None:
        logging.getLogger().removeHandler(_handler)
        _handler.close()
        _handler = None
