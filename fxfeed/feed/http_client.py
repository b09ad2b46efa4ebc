"""Shared HTTP client wrapper for single-shot downloads."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from requests import Response, Session
from requests.exceptions import RequestException

logger = logging.getLogger(__name__)


class HTTPClientError(RuntimeError):
    """Raised when the HTTP client cannot satisfy a request."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class HTTPClientConfig:
    """Configuration for the shared HTTP client."""

    base_url: str
    timeout: Optional[float] = None
    chunk_size: int = 8192


class HTTPClient:
    """Small HTTP client that streams a response body into bytes.

    One attempt per call; failures surface immediately as HTTPClientError.
    Without an injected session each call opens and closes its own, so one
    client can be shared by request threads.
    """

    def __init__(
        self,
        config: HTTPClientConfig,
        session: Optional[Session] = None,
    ) -> None:
        self._config = config
        self._session = session

    def get_content(self, path: str) -> bytes:
        url = self._build_url(path)
        try:
            if self._session is not None:
                return self._download(self._session, url)
            with requests.Session() as session:
                return self._download(session, url)
        except RequestException as exc:
            logger.warning("HTTP request to %s failed: %s", url, exc)
            raise HTTPClientError(f"Failed to fetch {url}: {exc}") from exc

    def _download(self, session: Session, url: str) -> bytes:
        with session.get(url, timeout=self._config.timeout, stream=True) as response:
            self._check_status(response)
            # Bytes are kept as-is; the document's own declaration names its encoding.
            return b"".join(response.iter_content(chunk_size=self._config.chunk_size))

    def _build_url(self, path: str) -> str:
        base = self._config.base_url.rstrip("/")
        suffix = path.lstrip("/")
        return f"{base}/{suffix}"

    @staticmethod
    def _check_status(response: Response) -> None:
        status = response.status_code
        if status >= 500:
            raise HTTPClientError(f"Server error {status}", status_code=status)
        if status >= 400:
            raise HTTPClientError(f"Client error {status}", status_code=status)
