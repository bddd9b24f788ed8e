"""HTTP client with a connection pool and asynchronous requests."""

from __future__ import annotations

import concurrent.futures
import threading
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Mapping, Optional, Union

import requests
from requests.adapters import HTTPAdapter

__all__ = ["HttpResponse", "SyncHttpResponse", "HttpClientModule"]

_DEFAULT_TIMEOUT = 5.0


@dataclass
class HttpResponse:
    """Result of one HTTP request."""

    status_code: int = 0
    status: str = ""
    header: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


class SyncHttpResponse:
    """A request running in the background whose result can be waited for."""

    def __init__(self, future: "concurrent.futures.Future[HttpResponse]") -> None:
        self._future = future

    def get(self, timeout_ms: int) -> HttpResponse:
        """Wait up to ``timeout_ms`` milliseconds for the response.

        Raises TimeoutError when it does not arrive in time, and the request's
        own error when it failed.
        """
        try:
            return self._future.result(timeout=timeout_ms / 1000)
        except concurrent.futures.TimeoutError:
            raise TimeoutError(
                f"Getting the return result timeout [{timeout_ms}]ms"
            ) from None


class HttpClientModule:
    """Pooled HTTP client that skips TLS certificate checks."""

    def __init__(self, max_pool: int, proxy_url: str = "") -> None:
        self.session = requests.Session()
        adapter = HTTPAdapter(pool_connections=max_pool, pool_maxsize=max_pool)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        self.session.verify = False
        if proxy_url:
            self.session.proxies = {"http": proxy_url, "https": proxy_url}
        self.timeout = _DEFAULT_TIMEOUT

    def set_timeout(self, value: Union[float, timedelta]) -> None:
        """Set the request timeout, in seconds or as a timedelta."""
        if isinstance(value, timedelta):
            value = value.total_seconds()
        self.timeout = float(value)

    def request(
        self,
        method: str,
        url: str,
        body: Optional[bytes] = None,
        header: Optional[Mapping[str, str]] = None,
    ) -> HttpResponse:
        """Send a request and read the whole response.

        Raises the request library's exceptions on failure.
        """
        resp = self.session.request(
            method,
            url,
            data=body if body else None,
            headers=dict(header) if header is not None else None,
            timeout=self.timeout,
        )
        with resp:
            content = resp.content
            return HttpResponse(
                status_code=resp.status_code,
                status=f"{resp.status_code} {resp.reason}".rstrip(),
                header=dict(resp.headers),
                body=content,
            )

    def sync_request(
        self,
        method: str,
        url: str,
        body: Optional[bytes] = None,
        header: Optional[Mapping[str, str]] = None,
    ) -> SyncHttpResponse:
        """Start a request in a background thread and return a handle to its result."""
        future: "concurrent.futures.Future[HttpResponse]" = concurrent.futures.Future()

        def run() -> None:
            try:
                future.set_result(self.request(method, url, body, header))
            except Exception as exc:
                future.set_exception(exc)

        threading.Thread(target=run, daemon=True).start()
        return SyncHttpResponse(future)