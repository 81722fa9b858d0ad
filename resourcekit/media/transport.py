"""Default media transport: local `file://` reads and HTTP(S) via requests."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from pathlib import Path
from urllib.parse import urlsplit
from urllib.request import url2pathname

import requests

from resourcekit.api.media import TransportRequest, TransportResponse, TransportResult
from resourcekit.runtime.config import load_runtime_config
from resourcekit.runtime.errors import log_recoverable
from resourcekit.runtime.io_executor import IoExecutor, get_default_executor

_LOG = logging.getLogger("resourcekit.transport")


def local_file_url(location: str) -> str:
    """Wrap a local path in a percent-quoted `file://` URL.

    Relative paths are anchored at the working directory, and reserved URL
    characters in a file name are escaped so `_fetch_file` reads that file.
    """
    return Path(location).absolute().as_uri()


class RequestsTransport:
    """Fetches media bytes on the I/O executor."""

    def __init__(
        self,
        *,
        executor: IoExecutor | None = None,
        session: requests.Session | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self._executor = executor
        self._session = session
        if timeout_seconds is None:
            timeout_seconds = load_runtime_config().http_timeout_seconds
        self._timeout_seconds = timeout_seconds

    def send(self, request: TransportRequest) -> Future[TransportResponse]:
        executor = self._executor or get_default_executor()
        _LOG.debug("transport_send url=%s type=%s", request.url, request.media_type.value)
        return executor.submit(self.fetch, request)

    def fetch(self, request: TransportRequest) -> TransportResponse:
        """Blocking fetch; every failure is folded into the response."""
        scheme = urlsplit(request.url).scheme.lower()
        if scheme == "file":
            return self._fetch_file(request.url)
        if scheme in {"http", "https"}:
            return self._fetch_http(request.url)
        return TransportResponse(
            result=TransportResult.CONNECTION_ERROR,
            error=f"Unsupported URL: {request.url}",
        )

    def _fetch_file(self, url: str) -> TransportResponse:
        parts = urlsplit(url)
        # "file://" + relative path puts the first segment in netloc.
        raw_path = parts.netloc + parts.path if parts.netloc else parts.path
        path = Path(url2pathname(raw_path))
        try:
            payload = path.read_bytes()
        except FileNotFoundError:
            return TransportResponse(
                result=TransportResult.CONNECTION_ERROR,
                error="Cannot connect to destination host",
            )
        except OSError as exc:
            log_recoverable(_LOG, f"local media read failed: {path}")
            return TransportResponse(result=TransportResult.CONNECTION_ERROR, error=str(exc))
        return TransportResponse(result=TransportResult.SUCCESS, payload=payload)

    def _fetch_http(self, url: str) -> TransportResponse:
        session = self._session or requests.Session()
        try:
            response = session.get(url, timeout=self._timeout_seconds)
        except requests.exceptions.Timeout:
            return TransportResponse(
                result=TransportResult.CONNECTION_ERROR,
                error="Request timeout",
            )
        except requests.exceptions.RequestException as exc:
            log_recoverable(_LOG, f"media request failed: {url}")
            return TransportResponse(result=TransportResult.CONNECTION_ERROR, error=str(exc))
        finally:
            if self._session is None:
                session.close()
        if response.status_code >= 400:
            return TransportResponse(
                result=TransportResult.PROTOCOL_ERROR,
                error=f"HTTP/1.1 {response.status_code} {response.reason}",
            )
        return TransportResponse(result=TransportResult.SUCCESS, payload=response.content)
