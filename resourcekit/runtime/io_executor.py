"""Worker-thread executor for blocking file and network I/O."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, TypeVar

from resourcekit.runtime.config import load_runtime_config

TResult = TypeVar("TResult")

_LOG = logging.getLogger("resourcekit.io")
_DEFAULT_EXECUTOR: IoExecutor | None = None
_DEFAULT_LOCK = threading.Lock()


class IoExecutor:
    """Runs blocking callables on worker threads and hands back futures."""

    def __init__(self, *, max_workers: int | None = None) -> None:
        if max_workers is None:
            max_workers = load_runtime_config().io_workers
        if max_workers <= 0:
            raise ValueError("max_workers must be > 0")
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="resourcekit-io",
        )
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, fn: Callable[..., TResult], *args: Any) -> Future[TResult]:
        """Schedule `fn(*args)` on a worker thread."""
        if self._closed:
            raise RuntimeError("executor is shut down")
        return self._pool.submit(fn, *args)

    def shutdown(self, *, wait: bool = True) -> None:
        """Stop accepting work and release worker threads."""
        if self._closed:
            return
        self._closed = True
        self._pool.shutdown(wait=wait, cancel_futures=not wait)
        _LOG.debug("io_executor_shutdown wait=%s", wait)

    def __enter__(self) -> IoExecutor:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)


def future_fault(future: Future[Any]) -> BaseException | None:
    """Return the exception of a finished future; cancelled futures carry none."""
    if not future.done() or future.cancelled():
        return None
    return future.exception()


def future_succeeded(future: Future[Any]) -> bool:
    """Return whether a future finished without fault or cancellation."""
    return future.done() and not future.cancelled() and future.exception() is None


def get_default_executor() -> IoExecutor:
    """Return the lazily created process-wide executor."""
    global _DEFAULT_EXECUTOR
    with _DEFAULT_LOCK:
        if _DEFAULT_EXECUTOR is None or _DEFAULT_EXECUTOR.closed:
            _DEFAULT_EXECUTOR = IoExecutor()
        return _DEFAULT_EXECUTOR
