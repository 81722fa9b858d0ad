"""Cooperative scheduler that drives resource operations step by step."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future
from dataclasses import dataclass

from resourcekit.api.operations import Operation

_LOG = logging.getLogger("resourcekit.scheduler")


@dataclass(slots=True)
class _Task:
    task_id: int
    operation: Operation
    awaiting: Future[object] | None = None


class CoroutineScheduler:
    """Single-threaded driver for generator-based operations."""

    def __init__(self) -> None:
        self._next_task_id = 1
        self._tasks: dict[int, _Task] = {}

    @property
    def active_task_count(self) -> int:
        """Return count of tasks that have not finished."""
        return len(self._tasks)

    def is_running(self, task_id: int) -> bool:
        return task_id in self._tasks

    def start(self, operation: Operation) -> int:
        """Register an operation; it first runs on the next `step`."""
        task_id = self._next_task_id
        self._next_task_id += 1
        self._tasks[task_id] = _Task(task_id=task_id, operation=operation)
        return task_id

    def cancel(self, task_id: int) -> None:
        """Abandon a task, closing its generator so `finally` blocks run."""
        task = self._tasks.pop(task_id, None)
        if task is None:
            return
        task.operation.close()
        _LOG.debug("task_cancelled id=%d", task_id)

    def step(self) -> int:
        """Resume every ready task once and return how many were resumed."""
        resumed = 0
        for task in tuple(self._tasks.values()):
            if task.task_id not in self._tasks:
                continue
            if task.awaiting is not None and not task.awaiting.done():
                continue
            resumed += 1
            try:
                yielded = next(task.operation)
            except StopIteration:
                self._tasks.pop(task.task_id, None)
                continue
            except Exception:
                self._tasks.pop(task.task_id, None)
                _LOG.debug("task_raised id=%d", task.task_id)
                raise
            task.awaiting = yielded if isinstance(yielded, Future) else None
        return resumed

    def run_until_idle(
        self,
        *,
        max_steps: int | None = None,
        poll_interval_seconds: float = 0.0,
    ) -> int:
        """Step until no tasks remain and return the number of steps taken."""
        if max_steps is not None and max_steps <= 0:
            raise ValueError("max_steps must be > 0")
        if poll_interval_seconds < 0.0:
            raise ValueError("poll_interval_seconds must be >= 0")
        steps = 0
        while self._tasks:
            if max_steps is not None and steps >= max_steps:
                raise TimeoutError(f"tasks still running after {steps} steps")
            resumed = self.step()
            steps += 1
            if resumed == 0 and self._tasks:
                # Everything is parked on worker futures.
                time.sleep(poll_interval_seconds or 0.001)
        return steps

    def run(
        self,
        operation: Operation,
        *,
        max_steps: int | None = None,
        poll_interval_seconds: float = 0.0,
    ) -> int:
        """Start one operation and drive the scheduler until idle."""
        self.start(operation)
        return self.run_until_idle(
            max_steps=max_steps,
            poll_interval_seconds=poll_interval_seconds,
        )
