"""Media resource with a cooperative load operation."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from resourcekit.api.media import (
    AudioDecoder,
    MediaErrorCallback,
    MediaHandle,
    MediaType,
    Transport,
    TransportRequest,
    TransportResponse,
    TransportResult,
)
from resourcekit.api.operations import CompletionCallback, Operation
from resourcekit.media.decoder import WaveAudioDecoder
from resourcekit.media.format_resolver import resolve_media_type_for_location
from resourcekit.media.transport import RequestsTransport, local_file_url
from resourcekit.runtime.config import load_runtime_config
from resourcekit.runtime.errors import RECOVERABLE_IO_ERRORS, ErrorKind, MediaDecodeError
from resourcekit.runtime.io_executor import future_fault
from resourcekit.runtime.operation import InFlightGuard, OperationSettlement

_LOG = logging.getLogger("resourcekit.media")

UNRECOGNIZED_FORMAT_MESSAGE = (
    "Unrecognized file format. Does the filename have the correct extension?"
)


class MediaResource:
    """Audio asset reference that loads lazily from a path or URL.

    Construction performs no I/O. `handle` is `None` until `load` succeeds.
    Every load replaces it when it settles: the new handle on success, `None`
    on any failure. The previous handle stays readable while a reload is in
    flight.

    Operations on one resource are not serialized: running two loads at once
    is a caller error and only produces a warning.
    """

    def __init__(
        self,
        location: str,
        *,
        is_remote: bool,
        transport: Transport | None = None,
        decoder: AudioDecoder | None = None,
        pass_resolved_media_type: bool | None = None,
    ) -> None:
        self._location = location
        self._is_remote = is_remote
        self._transport = transport or RequestsTransport()
        self._decoder = decoder or WaveAudioDecoder()
        if pass_resolved_media_type is None:
            pass_resolved_media_type = load_runtime_config().pass_resolved_media_type
        self._pass_resolved_media_type = pass_resolved_media_type
        self._handle: MediaHandle | None = None
        self._in_flight = InFlightGuard(location, logger=_LOG)

    @property
    def location(self) -> str:
        return self._location

    @property
    def is_remote(self) -> bool:
        return self._is_remote

    @property
    def handle(self) -> MediaHandle | None:
        return self._handle

    @property
    def media_type(self) -> MediaType:
        return resolve_media_type_for_location(self._location, is_remote=self._is_remote)

    def load(
        self,
        on_load_finished: CompletionCallback,
        on_error: MediaErrorCallback | None = None,
    ) -> Operation:
        """Fetch and decode the asset; drive the returned generator on a scheduler."""
        self._in_flight.enter("load")
        try:
            yield from self._load(
                OperationSettlement(
                    f"media.load[{self._location}]",
                    on_complete=on_load_finished,
                    on_error=on_error,
                    logger=_LOG,
                )
            )
        finally:
            self._in_flight.exit()

    def _load(self, settlement: OperationSettlement) -> Operation:
        media_type = self.media_type
        if media_type is MediaType.UNKNOWN:
            self._set_handle(None)
            settlement.fail(
                ErrorKind.FORMAT_UNRECOGNIZED,
                TransportResult.DATA_PROCESSING_ERROR,
                UNRECOGNIZED_FORMAT_MESSAGE,
            )
            return

        request = self._build_request(media_type)
        try:
            pending = self._transport.send(request)
        except RECOVERABLE_IO_ERRORS as exc:
            self._set_handle(None)
            settlement.fail(
                ErrorKind.TRANSPORT_FAILURE,
                TransportResult.CONNECTION_ERROR,
                str(exc),
            )
            return
        settlement.awaiting()
        while not pending.done():
            yield pending

        fault = future_fault(pending)
        if fault is not None:
            self._set_handle(None)
            settlement.fail(
                ErrorKind.TRANSPORT_FAILURE,
                TransportResult.CONNECTION_ERROR,
                str(fault),
            )
            return
        if pending.cancelled():
            self._set_handle(None)
            settlement.fail(
                ErrorKind.IO_INDETERMINATE,
                TransportResult.CONNECTION_ERROR,
                f"Request for {self._location} was cancelled",
            )
            return

        response: TransportResponse = pending.result()
        if not response.succeeded:
            self._set_handle(None)
            settlement.fail(
                ErrorKind.TRANSPORT_FAILURE,
                response.result,
                response.error or f"Loading {self._location} failed",
            )
            return

        try:
            handle = self._decoder.decode(response.payload, media_type, self._location)
        except MediaDecodeError as exc:
            self._set_handle(None)
            settlement.fail(
                ErrorKind.CODEC_FAILURE,
                TransportResult.DATA_PROCESSING_ERROR,
                str(exc),
            )
            return
        self._set_handle(handle)
        settlement.complete()

    def _build_request(self, media_type: MediaType) -> TransportRequest:
        url = self._location if self._is_remote else local_file_url(self._location)
        hint = media_type if self._pass_resolved_media_type else MediaType.MPEG
        return TransportRequest(url=url, media_type=hint)

    def _set_handle(self, handle: MediaHandle | None) -> None:
        self._handle = handle
        _LOG.debug(
            "media_handle_set location=%s present=%s", self._location, handle is not None
        )

    def to_payload(self) -> dict[str, object]:
        """Serializable reference; the decoded handle is never persisted."""
        return {"location": self._location, "is_remote": self._is_remote}

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> MediaResource:
        location = payload.get("location")
        if not isinstance(location, str):
            raise ValueError("media payload requires a string 'location'")
        return cls(location, is_remote=bool(payload.get("is_remote", False)))

    def __repr__(self) -> str:
        return f"MediaResource(location={self._location!r}, is_remote={self._is_remote!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MediaResource):
            return NotImplemented
        return (self._location, self._is_remote) == (other._location, other._is_remote)

    def __hash__(self) -> int:
        return hash((self._location, self._is_remote))
