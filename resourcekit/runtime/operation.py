"""Single-settlement bookkeeping for resource operations."""

from __future__ import annotations

import logging
from collections.abc import Callable

from resourcekit.api.operations import CompletionCallback, OperationState
from resourcekit.runtime.config import load_runtime_config
from resourcekit.runtime.errors import ErrorKind


class OperationSettlement:
    """Fires exactly one of the completion/error callbacks, at most once."""

    def __init__(
        self,
        name: str,
        *,
        on_complete: CompletionCallback | None,
        on_error: Callable[..., None] | None,
        logger: logging.Logger,
        log_silent_failures: bool | None = None,
    ) -> None:
        self._name = name
        self._on_complete = on_complete
        self._on_error = on_error
        self._logger = logger
        if log_silent_failures is None:
            log_silent_failures = load_runtime_config().log_silent_failures
        self._log_silent_failures = log_silent_failures
        self._state = OperationState.IDLE

    @property
    def state(self) -> OperationState:
        return self._state

    @property
    def settled(self) -> bool:
        return self._state in (OperationState.COMPLETED, OperationState.FAILED)

    def awaiting(self) -> None:
        """Mark that the operation is parked on external work."""
        if not self.settled:
            self._state = OperationState.AWAITING

    def complete(self) -> None:
        if self.settled:
            self._logger.debug("%s settle_ignored state=%s", self._name, self._state.name)
            return
        self._state = OperationState.COMPLETED
        self._logger.debug("%s completed", self._name)
        if self._on_complete is not None:
            self._on_complete()

    def fail(self, kind: ErrorKind, *error_args: object) -> None:
        """Report a failure; the last positional arg is the human-readable message."""
        if self.settled:
            self._logger.debug(
                "%s settle_ignored state=%s kind=%s", self._name, self._state.name, kind.value
            )
            return
        self._state = OperationState.FAILED
        message = error_args[-1] if error_args else ""
        if self._on_error is not None:
            self._logger.info(
                "%s failed: %s", self._name, message, extra={"error_kind": kind.value}
            )
            self._on_error(*error_args)
            return
        if self._log_silent_failures:
            self._logger.warning(
                "%s failed without error callback: %s",
                self._name,
                message,
                extra={"error_kind": kind.value},
            )


class InFlightGuard:
    """Counts overlapping operations on one resource and warns on overlap."""

    def __init__(self, resource_name: str, *, logger: logging.Logger) -> None:
        self._resource_name = resource_name
        self._logger = logger
        self._count = 0

    @property
    def count(self) -> int:
        return self._count

    def enter(self, operation_name: str) -> None:
        if self._count > 0:
            self._logger.warning(
                "overlapping_operation resource=%s op=%s in_flight=%d",
                self._resource_name,
                operation_name,
                self._count,
            )
        self._count += 1

    def exit(self) -> None:
        self._count = max(0, self._count - 1)
