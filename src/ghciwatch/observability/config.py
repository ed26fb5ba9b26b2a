"""Observability configuration, env-var driven.

All settings have safe defaults. Zero config required for basic
structured logging.

    Destination: GHCIWATCH_LOG_DESTINATION=stderr (default) | jsonl
    Renderer: GHCIWATCH_LOG_FORMAT=json (default) | console
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class ObservabilityConfig:
    """Observability configuration, env-var driven."""

    log_destination: str = field(
        default_factory=lambda: os.environ.get("GHCIWATCH_LOG_DESTINATION", "stderr")
    )  # "stderr" | "jsonl"

    log_level: str = field(
        default_factory=lambda: os.environ.get("GHCIWATCH_LOG_LEVEL", "INFO")
    )

    log_format: str = field(
        default_factory=lambda: os.environ.get("GHCIWATCH_LOG_FORMAT", "json")
    )  # "json" | "console" (dev-friendly renderer)

    # JSONL file destination
    jsonl_path: str | None = field(
        default_factory=lambda: os.environ.get("GHCIWATCH_LOG_PATH")
    )
