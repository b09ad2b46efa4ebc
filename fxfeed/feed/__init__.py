"""ECB feed retrieval and normalization."""

from .ecb_client import EcbFeedClient, EcbFeedClientConfig
from .http_client import HTTPClient, HTTPClientConfig, HTTPClientError
from .normalizer import normalize
from .schemas import BASE_CURRENCY, FeedSnapshot, RateTable

__all__ = [
    "BASE_CURRENCY",
    "EcbFeedClient",
    "EcbFeedClientConfig",
    "FeedSnapshot",
    "HTTPClient",
    "HTTPClientConfig",
    "HTTPClientError",
    "RateTable",
    "normalize",
]
