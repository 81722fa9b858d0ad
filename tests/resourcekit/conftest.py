from __future__ import annotations

import io
import wave
from collections.abc import Iterator
from concurrent.futures import Future
from pathlib import Path

import numpy as np
import pytest

from resourcekit.api.media import TransportRequest, TransportResponse, TransportResult
from resourcekit.documents.filesystem import LocalFileSystem, LocalWriteStream
from resourcekit.runtime.io_executor import IoExecutor


def resolved(value: object) -> Future[object]:
    future: Future[object] = Future()
    future.set_result(value)
    return future


def faulted(exc: BaseException) -> Future[object]:
    future: Future[object] = Future()
    future.set_exception(exc)
    return future


def cancelled() -> Future[object]:
    future: Future[object] = Future()
    future.cancel()
    return future


def wav_bytes(samples: np.ndarray, *, sample_rate: int = 8000) -> bytes:
    """Encode float samples shaped (frames, channels) as 16-bit PCM WAV."""
    ints = np.clip(samples * 32767.0, -32768, 32767).astype("<i2")
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as writer:
        writer.setnchannels(samples.shape[1])
        writer.setsampwidth(2)
        writer.setframerate(sample_rate)
        writer.writeframes(ints.tobytes())
    return buffer.getvalue()


class FakeTransport:
    def __init__(self, *responses: Future[object]) -> None:
        self._responses = list(responses)
        self.requests: list[TransportRequest] = []

    def send(self, request: TransportRequest) -> Future[object]:
        self.requests.append(request)
        if not self._responses:
            return resolved(
                TransportResponse(result=TransportResult.CONNECTION_ERROR, error="no response")
            )
        return self._responses.pop(0)


class FaultInjectingWriteStream:
    def __init__(
        self,
        inner: LocalWriteStream,
        *,
        write_future: Future[object] | None,
        flush_future: Future[object] | None,
    ) -> None:
        self._inner = inner
        self._write_future = write_future
        self._flush_future = flush_future

    @property
    def closed(self) -> bool:
        return self._inner.closed

    def write_async(self, text: str) -> Future[object]:
        if self._write_future is not None:
            return self._write_future
        return self._inner.write_async(text)

    def flush_async(self) -> Future[object]:
        if self._flush_future is not None:
            return self._flush_future
        return self._inner.flush_async()

    def close(self) -> None:
        self._inner.close()


class FaultInjectingFileSystem(LocalFileSystem):
    """Local files whose write or flush step can be replaced by a canned future."""

    def __init__(
        self,
        executor: IoExecutor,
        *,
        write_future: Future[object] | None = None,
        flush_future: Future[object] | None = None,
        read_future: Future[object] | None = None,
    ) -> None:
        super().__init__(executor=executor)
        self._write_future = write_future
        self._flush_future = flush_future
        self._read_future = read_future
        self.write_streams: list[FaultInjectingWriteStream] = []

    def open_read(self, path: Path):
        if self._read_future is None:
            return super().open_read(path)
        read_future = self._read_future

        class _Stream:
            def read_to_end_async(self) -> Future[object]:
                return read_future

        return _Stream()

    def open_write(self, path: Path) -> FaultInjectingWriteStream:
        stream = FaultInjectingWriteStream(
            super().open_write(path),
            write_future=self._write_future,
            flush_future=self._flush_future,
        )
        self.write_streams.append(stream)
        return stream


@pytest.fixture
def io_executor() -> Iterator[IoExecutor]:
    executor = IoExecutor(max_workers=2)
    yield executor
    executor.shutdown(wait=True)
