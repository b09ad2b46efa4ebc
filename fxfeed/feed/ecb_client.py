"""Client for the ECB euro foreign exchange reference rate feed."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any

from config import DEFAULT_ECB_FEED_BASE_URL, DEFAULT_ECB_FEED_PATH
from fxfeed.errors import NetworkError
from fxfeed.feed.http_client import HTTPClient, HTTPClientConfig, HTTPClientError
from fxfeed.logging import feed_log_extra

logger = logging.getLogger(__name__)


class EcbFeedClientConfig:
    """Configuration parameters for the ECB daily feed client."""

    def __init__(
        self,
        base_url: str = DEFAULT_ECB_FEED_BASE_URL,
        path: str = DEFAULT_ECB_FEED_PATH,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url
        self.path = path
        self.timeout = timeout


class EcbFeedClient:
    """Downloads the ECB euro reference rate document."""

    def __init__(
        self,
        config: EcbFeedClientConfig,
        client: HTTPClient | None = None,
    ) -> None:
        self._config = config
        self._client = client or HTTPClient(
            HTTPClientConfig(base_url=config.base_url, timeout=config.timeout)
        )

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> EcbFeedClient:
        timeout = config.get("REQUEST_TIMEOUT_SECONDS")
        client_config = EcbFeedClientConfig(
            base_url=str(config.get("ECB_FEED_BASE_URL", DEFAULT_ECB_FEED_BASE_URL)),
            path=str(config.get("ECB_FEED_PATH", DEFAULT_ECB_FEED_PATH)),
            timeout=float(timeout) if timeout is not None else None,
        )
        return cls(client_config)

    @property
    def url(self) -> str:
        return f"{self._config.base_url.rstrip('/')}/{self._config.path.lstrip('/')}"

    def fetch(self) -> bytes:
        started = time.perf_counter()
        try:
            document = self._client.get_content(self._config.path)
        except HTTPClientError as exc:
            logger.warning(
                "ECB feed fetch failed",
                extra=feed_log_extra(
                    event="feed.fetch",
                    status="error",
                    url=self.url,
                    duration_ms=_elapsed_ms(started),
                    error=str(exc),
                ),
            )
            raise NetworkError(str(exc)) from exc

        logger.debug(
            "ECB feed fetched",
            extra=feed_log_extra(
                event="feed.fetch",
                status="ok",
                url=self.url,
                duration_ms=_elapsed_ms(started),
            ),
        )
        return document


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
