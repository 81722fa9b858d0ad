"""Public asynchronous-operation contract shared by all resource kinds."""

from __future__ import annotations

from collections.abc import Callable, Generator
from concurrent.futures import Future
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from resourcekit.runtime.scheduler import CoroutineScheduler

# A suspension point yields the future it waits on, or None to resume next step.
Operation: TypeAlias = Generator[Future[Any] | None, None, None]

CompletionCallback: TypeAlias = Callable[[], None]
MessageErrorCallback: TypeAlias = Callable[[str], None]


class OperationState(Enum):
    """Lifecycle of one operation invocation."""

    IDLE = auto()
    AWAITING = auto()
    COMPLETED = auto()
    FAILED = auto()


def create_scheduler() -> CoroutineScheduler:
    """Create the default cooperative scheduler."""
    from resourcekit.runtime.scheduler import CoroutineScheduler

    return CoroutineScheduler()
