"""Public logging configuration contract."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Console logging for the `resourcekit` logger namespace."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
