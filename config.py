"""Application configuration classes."""

from __future__ import annotations

import os
from urllib.parse import urlparse

DEFAULT_ECB_FEED_BASE_URL = "https://www.ecb.europa.eu"
DEFAULT_ECB_FEED_PATH = "/stats/eurofxref/eurofxref-daily.xml"


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _get_optional_float(name: str) -> float | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return float(value)


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "fxfeed"
    # SHA-256 hex digest of the shared bearer token, never the token itself.
    API_TOKEN: str | None = os.getenv("API_TOKEN") or None
    ECB_FEED_BASE_URL = _get_env("ECB_FEED_BASE_URL", DEFAULT_ECB_FEED_BASE_URL)
    ECB_FEED_PATH = _get_env("ECB_FEED_PATH", DEFAULT_ECB_FEED_PATH)
    REQUEST_TIMEOUT_SECONDS: float | None = _get_optional_float("REQUEST_TIMEOUT_SECONDS")
    SERVER_HOST = _get_env("SERVER_HOST", "0.0.0.0")
    SERVER_PORT = int(_get_env("SERVER_PORT", "3000"))
    LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
    LOG_JSON_ENABLED = _get_env("LOG_JSON_ENABLED", "false").lower() == "true"
    LOG_FORMAT = _get_env("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")
    CORS_ALLOWED_ORIGINS = _get_env("CORS_ALLOWED_ORIGINS", "")
    CORS_MAX_AGE = int(_get_env("CORS_MAX_AGE", "600"))


class DevelopmentConfig(BaseConfig):
    """Configuration for local development."""

    DEBUG = True
    TESTING = False


class ProductionConfig(BaseConfig):
    """Configuration for production deployments."""

    DEBUG = False
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test suite."""

    DEBUG = False
    TESTING = True
    API_TOKEN = None
    CORS_ALLOWED_ORIGINS = ""


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(config_name: str | None = None) -> type[BaseConfig]:
    """Return the config class for the requested environment.

    Args:
        config_name: Optional explicit config identifier. If omitted, the
            APP_ENV environment variable is consulted.

    Raises:
        KeyError: If the requested configuration is not defined.
        ValueError: If the feed URL is not an https URL.
    """

    env_candidate = config_name if config_name is not None else os.getenv("APP_ENV", "development")
    env_name = (env_candidate or "development").lower()
    try:
        config_cls = CONFIG_BY_ENV[env_name]
    except KeyError as exc:
        raise KeyError(f"Unknown APP_ENV '{env_name}'") from exc

    _validate_feed_url(config_cls)
    return config_cls


def _validate_feed_url(config_cls: type[BaseConfig]) -> None:
    parsed = urlparse(config_cls.ECB_FEED_BASE_URL)
    if parsed.scheme != "https" or not parsed.netloc:
        raise ValueError(
            f"ECB_FEED_BASE_URL must be an https URL, got '{config_cls.ECB_FEED_BASE_URL}'"
        )
