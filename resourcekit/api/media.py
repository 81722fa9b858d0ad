"""Public media-loading API contracts."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol, TypeAlias

import numpy as np

if TYPE_CHECKING:
    from resourcekit.media.loader import MediaResource


class MediaType(Enum):
    """Audio container/codec tags resolved from file extensions."""

    UNKNOWN = "unknown"
    MPEG = "mpeg"
    OGGVORBIS = "oggvorbis"
    WAV = "wav"
    AIFF = "aiff"
    XMA = "xma"
    XM = "xm"
    IT = "it"
    MOD = "mod"
    AUDIOQUEUE = "audioqueue"
    S3M = "s3m"
    VAG = "vag"


class TransportResult(Enum):
    """Outcome classification of one transport request."""

    IN_PROGRESS = "in_progress"
    SUCCESS = "success"
    CONNECTION_ERROR = "connection_error"
    PROTOCOL_ERROR = "protocol_error"
    DATA_PROCESSING_ERROR = "data_processing_error"


@dataclass(frozen=True, slots=True)
class TransportRequest:
    """One media fetch: a URL (`file://` for local paths) and a type hint."""

    url: str
    media_type: MediaType


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Completed transport request."""

    result: TransportResult
    error: str | None = None
    payload: bytes = b""

    @property
    def succeeded(self) -> bool:
        return self.result is TransportResult.SUCCESS


@dataclass(frozen=True, slots=True, eq=False)
class MediaHandle:
    """Decoded in-memory audio payload."""

    media_type: MediaType
    location: str
    encoded: bytes
    samples: np.ndarray | None = None
    sample_rate: int | None = None
    channels: int | None = None

    @property
    def decoded(self) -> bool:
        return self.samples is not None

    @property
    def duration_seconds(self) -> float | None:
        if self.samples is None or not self.sample_rate:
            return None
        return self.samples.shape[0] / float(self.sample_rate)


MediaErrorCallback: TypeAlias = Callable[[TransportResult, str], None]


class Transport(Protocol):
    """Fetches media bytes for a request without blocking the caller."""

    def send(self, request: TransportRequest) -> Future[TransportResponse]:
        """Start the request and return a future for its response."""


class AudioDecoder(Protocol):
    """Turns a fetched payload into a media handle."""

    def decode(self, payload: bytes, media_type: MediaType, location: str) -> MediaHandle:
        """Decode payload; raises `MediaDecodeError` on malformed data."""


def create_media_resource(location: str, *, is_remote: bool) -> MediaResource:
    """Create a media resource backed by the default transport and decoder."""
    from resourcekit.media.loader import MediaResource

    return MediaResource(location, is_remote=is_remote)
