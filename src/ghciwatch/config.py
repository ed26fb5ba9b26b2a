"""Output configuration: where the ghci child's stdout and stderr go.

Priority: env var > YAML file > default.
Env vars: GHCIWATCH_STDOUT, GHCIWATCH_STDERR, GHCIWATCH_PIPE_CAPACITY.
YAML file default: ~/.ghciwatch/output.yaml

Destinations are named by WriterKind value ("stdout", "stderr", "null").
A pipe destination can't be named: it needs a reader on the other end.
capture() builds one with the configured capacity and hands back both ends.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from ghciwatch.pipe import DEFAULT_CAPACITY, PipeReader, pipe
from ghciwatch.writer import GhciWriter, WriterKind

_DEFAULT_PATH = Path("~/.ghciwatch/output.yaml").expanduser()
_NAMED_KINDS = {WriterKind.STDOUT.value, WriterKind.STDERR.value, WriterKind.NULL.value}


@dataclass
class OutputConfig:
    stdout: str = WriterKind.STDOUT.value
    stderr: str = WriterKind.STDERR.value
    pipe_capacity: int = DEFAULT_CAPACITY

    def __post_init__(self) -> None:
        for name in ("stdout", "stderr"):
            value = getattr(self, name).lower()
            if value not in _NAMED_KINDS:
                raise ValueError(
                    f"Invalid {name} destination: {value!r}. "
                    f"Expected one of {sorted(_NAMED_KINDS)}."
                )
            setattr(self, name, value)
        if self.pipe_capacity <= 0:
            raise ValueError(f"pipe_capacity={self.pipe_capacity} must be positive.")

    @classmethod
    def load(cls, path: Path | None = None) -> OutputConfig:
        """Load from YAML file, then override with env vars."""
        file_path = path or _DEFAULT_PATH
        kwargs: dict[str, object] = {}

        if file_path.exists():
            raw = yaml.safe_load(file_path.read_text()) or {}
            if isinstance(raw, dict):
                for f in fields(cls):
                    if f.name in raw:
                        kwargs[f.name] = raw[f.name]

        for f in fields(cls):
            env_key = f"GHCIWATCH_{f.name.upper()}"
            if env_key in os.environ:
                kwargs[f.name] = os.environ[env_key]

        if "pipe_capacity" in kwargs:
            raw_capacity = kwargs["pipe_capacity"]
            try:
                kwargs["pipe_capacity"] = int(raw_capacity)  # type: ignore[arg-type]
            except (TypeError, ValueError):
                raise ValueError(
                    f"Invalid integer for pipe_capacity: {raw_capacity!r}."
                ) from None

        for name in ("stdout", "stderr"):
            if name in kwargs:
                # Unquoted `null` in YAML loads as None
                kwargs[name] = "null" if kwargs[name] is None else str(kwargs[name])

        return cls(**kwargs)  # type: ignore[arg-type]

    def writers(self) -> tuple[GhciWriter, GhciWriter]:
        """Fresh (stdout, stderr) writers for one ghci session."""
        return GhciWriter.from_name(self.stdout), GhciWriter.from_name(self.stderr)

    def capture(self) -> tuple[PipeReader, GhciWriter]:
        """A pipe of the configured capacity: the reader end and a writer over it."""
        reader, writer = pipe(self.pipe_capacity)
        return reader, GhciWriter.pipe(writer)

    def to_dict(self) -> dict[str, object]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
