"""Runtime configuration sourced from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Immutable resource-loading runtime configuration."""

    log_level: str
    io_workers: int
    http_timeout_seconds: float
    log_silent_failures: bool
    pass_resolved_media_type: bool


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with package-prefixed override."""
    value = os.getenv("RESOURCEKIT_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def load_runtime_config() -> RuntimeConfig:
    """Load immutable runtime configuration from env vars."""
    timeout = _float("RESOURCEKIT_HTTP_TIMEOUT_SECONDS", 30.0)
    return RuntimeConfig(
        log_level=resolve_log_level_name(),
        io_workers=max(1, _int("RESOURCEKIT_IO_WORKERS", 4)),
        http_timeout_seconds=timeout if timeout > 0.0 else 30.0,
        log_silent_failures=_flag("RESOURCEKIT_LOG_SILENT_FAILURES", True),
        pass_resolved_media_type=_flag("RESOURCEKIT_PASS_RESOLVED_MEDIA_TYPE", True),
    )
