"""Error taxonomy and shared exception policy helpers."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TypeAlias


class ErrorKind(Enum):
    """Failure categories reported by resource operations."""

    FORMAT_UNRECOGNIZED = "format_unrecognized"
    TRANSPORT_FAILURE = "transport_failure"
    FILE_ABSENT = "file_absent"
    IO_FAULT = "io_fault"
    IO_INDETERMINATE = "io_indeterminate"
    CODEC_FAILURE = "codec_failure"


class ResourceKitError(Exception):
    """Base class for package-raised exceptions."""


class MediaDecodeError(ResourceKitError):
    """Raised when a fetched media payload cannot be decoded."""


class DocumentEncodeError(ResourceKitError):
    """Raised when a document value cannot be serialized."""


class DocumentDecodeError(ResourceKitError):
    """Raised when document text cannot be converted to the target type."""


# Bounded set of exceptions tolerated at I/O boundaries.
RecoverableErrors: TypeAlias = tuple[type[BaseException], ...]
RECOVERABLE_IO_ERRORS: RecoverableErrors = (
    OSError,
    ValueError,
    TypeError,
    RuntimeError,
    ResourceKitError,
)


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Emit observability for tolerated recoverable exceptions."""
    logger.log(level, message, exc_info=True)
