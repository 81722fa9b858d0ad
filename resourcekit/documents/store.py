"""Typed value bound to a JSON file, loaded and saved cooperatively."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Generic, TypeVar

from resourcekit.api.documents import DocumentCodec, FileSystem, WritableStream
from resourcekit.api.operations import CompletionCallback, MessageErrorCallback, Operation
from resourcekit.documents.codec import JsonDocumentCodec
from resourcekit.documents.filesystem import LocalFileSystem
from resourcekit.runtime.errors import (
    RECOVERABLE_IO_ERRORS,
    DocumentDecodeError,
    DocumentEncodeError,
    ErrorKind,
)
from resourcekit.runtime.io_executor import future_fault, future_succeeded
from resourcekit.runtime.operation import InFlightGuard, OperationSettlement

_LOG = logging.getLogger("resourcekit.documents")

TValue = TypeVar("TValue")


class DocumentStore(Generic[TValue]):
    """Holds one value of `value_type` persisted as `{"content": ...}` at `location`.

    `value` is `None` until the first successful load or explicit assignment.
    A load that fails after the file was found resets `value` to `None`; treat
    `None` after an error as unknown, not as stored data. A strict load that
    finds no file leaves `value` untouched. `save` never changes `value`.

    Operations on one store are not serialized. Running a load and a save at
    the same time races on `value` and on the file; callers must order them.
    """

    def __init__(
        self,
        location: str | Path,
        value_type: type[TValue],
        *,
        codec: DocumentCodec | None = None,
        file_system: FileSystem | None = None,
    ) -> None:
        self._location = Path(location)
        self._value_type = value_type
        self._codec = codec or JsonDocumentCodec()
        self._file_system = file_system or LocalFileSystem()
        self._value: TValue | None = None
        self._in_flight = InFlightGuard(str(self._location), logger=_LOG)

    @property
    def location(self) -> Path:
        return self._location

    @property
    def value_type(self) -> type[TValue]:
        return self._value_type

    @property
    def value(self) -> TValue | None:
        return self._value

    @value.setter
    def value(self, value: TValue | None) -> None:
        self._set_value(value)

    def load_strict(
        self,
        on_complete: CompletionCallback,
        on_error: MessageErrorCallback | None = None,
    ) -> Operation:
        """Read and decode the file; fails if it does not exist."""
        self._in_flight.enter("load_strict")
        try:
            yield from self._load(self._settlement("load_strict", on_complete, on_error))
        finally:
            self._in_flight.exit()

    def load_or_init(
        self,
        on_complete: CompletionCallback,
        on_error: MessageErrorCallback | None = None,
    ) -> Operation:
        """Like `load_strict`, but first persists `value_type()` when the file is missing.

        The value is always read back from disk, so after success it matches
        exactly what was written.
        """
        self._in_flight.enter("load_or_init")
        try:
            settlement = self._settlement("load_or_init", on_complete, on_error)
            if not self._file_system.exists(self._location):
                _LOG.info("document_init path=%s type=%s", self._location, self._value_type)
                self._set_value(self._value_type())
                yield from self._save(settlement, report_completion=False)
            yield from self._load(settlement)
        finally:
            self._in_flight.exit()

    def save(
        self,
        on_complete: CompletionCallback | None = None,
        on_error: MessageErrorCallback | None = None,
    ) -> Operation:
        """Serialize `value`, write, flush and close the file."""
        self._in_flight.enter("save")
        try:
            yield from self._save(
                self._settlement("save", on_complete, on_error),
                report_completion=True,
            )
        finally:
            self._in_flight.exit()

    def _load(self, settlement: OperationSettlement) -> Operation:
        location = self._location
        if not self._file_system.exists(location):
            settlement.fail(ErrorKind.FILE_ABSENT, f"File: [{location}] does not exist!")
            return

        try:
            pending = self._file_system.open_read(location).read_to_end_async()
        except RECOVERABLE_IO_ERRORS as exc:
            self._set_value(None)
            settlement.fail(ErrorKind.IO_FAULT, str(exc))
            return

        settlement.awaiting()
        while not pending.done():
            yield pending

        fault = future_fault(pending)
        if fault is not None:
            self._set_value(None)
            settlement.fail(ErrorKind.IO_FAULT, str(fault))
            return
        if not future_succeeded(pending):
            self._set_value(None)
            settlement.fail(
                ErrorKind.IO_INDETERMINATE,
                f"Loading file {location} failed for unknown reason",
            )
            return

        try:
            value = self._codec.decode(pending.result(), self._value_type)
        except DocumentDecodeError as exc:
            self._set_value(None)
            settlement.fail(ErrorKind.CODEC_FAILURE, f"Failed to parse document {location}: {exc}")
            return

        self._set_value(value)
        # Completion runs after assignment so a raising callback cannot undo the load.
        settlement.complete()

    def _save(self, settlement: OperationSettlement, *, report_completion: bool) -> Operation:
        location = self._location
        stream: WritableStream | None = None
        try:
            try:
                text = self._codec.encode(self._value)
                stream = self._file_system.open_write(location)
                pending = stream.write_async(text)
            except DocumentEncodeError as exc:
                _close(stream)
                settlement.fail(ErrorKind.CODEC_FAILURE, str(exc))
                return
            except RECOVERABLE_IO_ERRORS as exc:
                _close(stream)
                settlement.fail(ErrorKind.IO_FAULT, str(exc))
                return

            settlement.awaiting()
            while not pending.done():
                yield pending

            fault = future_fault(pending)
            if fault is not None:
                _close(stream)
                settlement.fail(ErrorKind.IO_FAULT, str(fault))
                return
            if not future_succeeded(pending):
                _close(stream)
                settlement.fail(
                    ErrorKind.IO_INDETERMINATE,
                    f"Failed to create a file at {location} for an unknown reason",
                )
                return

            flushing = stream.flush_async()
            while not flushing.done():
                yield flushing
            _close(stream)

            fault = future_fault(flushing)
            if fault is not None:
                settlement.fail(ErrorKind.IO_FAULT, str(fault))
                return
            if not future_succeeded(flushing):
                settlement.fail(
                    ErrorKind.IO_INDETERMINATE,
                    f"Failed to create a file at {location} for an unknown reason (flush failed)",
                )
                return

            _LOG.debug("document_saved path=%s", location)
            if report_completion:
                settlement.complete()
        finally:
            # Also reached when the driving scheduler abandons the operation.
            _close(stream)

    def _settlement(
        self,
        operation: str,
        on_complete: CompletionCallback | None,
        on_error: MessageErrorCallback | None,
    ) -> OperationSettlement:
        return OperationSettlement(
            f"documents.{operation}[{self._location}]",
            on_complete=on_complete,
            on_error=on_error,
            logger=_LOG,
        )

    def _set_value(self, value: TValue | None) -> None:
        self._value = value
        _LOG.debug("document_value_set path=%s present=%s", self._location, value is not None)


def _close(stream: WritableStream | None) -> None:
    if stream is not None:
        stream.close()
