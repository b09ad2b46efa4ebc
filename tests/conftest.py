"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import responses as responses_lib

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from fxfeed import create_app  # noqa: E402
from fxfeed.feed import EcbFeedClient, EcbFeedClientConfig  # noqa: E402
from fxfeed.security import TokenVerifier, hash_token  # noqa: E402

GOOD_TOKEN = "goodtoken"


@pytest.fixture()
def feed_client() -> EcbFeedClient:
    return EcbFeedClient(EcbFeedClientConfig(timeout=2))


@pytest.fixture()
def app(feed_client):
    """Flask application with a known token hash and the default ECB URL."""

    flask_app = create_app(
        "testing",
        feed_client=feed_client,
        verifier=TokenVerifier(hash_token(GOOD_TOKEN)),
    )
    yield flask_app


@pytest.fixture()
def client(app):
    """Provide a Flask test client."""

    with app.test_client() as client:
        yield client


@pytest.fixture()
def mocked_feed() -> Iterator[responses_lib.RequestsMock]:
    """Intercept outbound requests; unmatched calls fail the test."""

    with responses_lib.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    """Return the path to bundled XML fixtures."""

    return ROOT_DIR / "tests" / "fixtures"


@pytest.fixture()
def load_fixture(fixtures_dir: Path) -> Callable[[str], str]:
    """Load a text fixture by filename."""

    def _loader(filename: str) -> str:
        return (fixtures_dir / filename).read_text(encoding="utf-8")

    return _loader


@pytest.fixture()
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {GOOD_TOKEN}"}
