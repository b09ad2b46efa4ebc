"""Bearer token hashing and verification."""

from __future__ import annotations

import hashlib
from typing import Any

BEARER_PREFIX = "Bearer "


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def verify_token(presented: Any, stored_hash: str | None) -> bool:
    """Return True when ``presented`` hashes to ``stored_hash``.

    Multi-valued header input (lists, tuples) is rejected outright.
    """

    if presented is None or stored_hash is None:
        return False
    if not isinstance(presented, str):
        return False
    return hash_token(presented) == stored_hash


def extract_bearer(header: str | None) -> str | None:
    """Return the credential following ``Bearer `` or None if the header is unusable."""

    if not isinstance(header, str) or not header.startswith(BEARER_PREFIX):
        return None
    return header[len(BEARER_PREFIX) :]


class TokenVerifier:
    """Holds the configured token hash and checks presented credentials against it."""

    def __init__(self, stored_hash: str | None) -> None:
        self._stored_hash = stored_hash or None

    @classmethod
    def from_config(cls, config) -> TokenVerifier:
        return cls(config.get("API_TOKEN"))

    @property
    def configured(self) -> bool:
        return self._stored_hash is not None

    def verify(self, presented: Any) -> bool:
        return verify_token(presented, self._stored_hash)
