"""Local file system with executor-backed reads, writes and flushes."""

from __future__ import annotations

import logging
import os
from concurrent.futures import Future
from pathlib import Path
from typing import TextIO

from resourcekit.runtime.io_executor import IoExecutor, get_default_executor

_LOG = logging.getLogger("resourcekit.fs")


class LocalReadStream:
    def __init__(self, handle: TextIO, executor: IoExecutor) -> None:
        self._handle = handle
        self._executor = executor

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def read_to_end_async(self) -> Future[str]:
        try:
            return self._executor.submit(self._read_and_close)
        except RuntimeError:
            self._handle.close()
            raise

    def _read_and_close(self) -> str:
        try:
            return self._handle.read()
        finally:
            self._handle.close()


class LocalWriteStream:
    def __init__(self, path: Path, handle: TextIO, executor: IoExecutor) -> None:
        self._path = path
        self._handle = handle
        self._executor = executor

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def write_async(self, text: str) -> Future[None]:
        return self._executor.submit(self._write, text)

    def flush_async(self) -> Future[None]:
        return self._executor.submit(self._flush)

    def close(self) -> None:
        if self._handle.closed:
            return
        self._handle.close()
        _LOG.debug("write_stream_closed path=%s", self._path)

    def _write(self, text: str) -> None:
        self._handle.write(text)

    def _flush(self) -> None:
        self._handle.flush()
        os.fsync(self._handle.fileno())


class LocalFileSystem:
    """Plain files on disk; text is always UTF-8."""

    def __init__(self, *, executor: IoExecutor | None = None) -> None:
        self._executor = executor

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def open_read(self, path: Path) -> LocalReadStream:
        handle = path.open("r", encoding="utf-8")
        return LocalReadStream(handle, self._resolve_executor())

    def open_write(self, path: Path) -> LocalWriteStream:
        path.parent.mkdir(parents=True, exist_ok=True)
        handle = path.open("w", encoding="utf-8")
        return LocalWriteStream(path, handle, self._resolve_executor())

    def _resolve_executor(self) -> IoExecutor:
        return self._executor or get_default_executor()
