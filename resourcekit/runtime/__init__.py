"""Runtime plumbing: scheduling, I/O workers, settlement, config and logging."""

from resourcekit.runtime.config import RuntimeConfig, load_runtime_config
from resourcekit.runtime.errors import (
    DocumentDecodeError,
    DocumentEncodeError,
    ErrorKind,
    MediaDecodeError,
    ResourceKitError,
)
from resourcekit.runtime.io_executor import IoExecutor, get_default_executor
from resourcekit.runtime.logging import configure_logging, setup_logging
from resourcekit.runtime.operation import InFlightGuard, OperationSettlement
from resourcekit.runtime.scheduler import CoroutineScheduler

__all__ = [
    "CoroutineScheduler",
    "DocumentDecodeError",
    "DocumentEncodeError",
    "ErrorKind",
    "InFlightGuard",
    "IoExecutor",
    "MediaDecodeError",
    "OperationSettlement",
    "ResourceKitError",
    "RuntimeConfig",
    "configure_logging",
    "get_default_executor",
    "load_runtime_config",
    "setup_logging",
]
