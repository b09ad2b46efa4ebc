"""Dataclasses describing the normalized ECB feed payload."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

BASE_CURRENCY = "EUR"

RateTable = Dict[str, float]


def _normalize_code(code: str) -> str:
    if not isinstance(code, str) or len(code) != 3 or not code.isascii():
        raise ValueError(f"Currency code must be a 3-letter ASCII string: {code!r}")
    if not code.isalpha() or not code.isupper():
        raise ValueError(f"Currency code must be uppercase letters: {code!r}")
    return code


def _normalize_rates(rates: Mapping[str, float]) -> RateTable:
    normalized: RateTable = {}
    for code, value in rates.items():
        rate = float(value)
        if not math.isfinite(rate) or rate <= 0:
            raise ValueError(f"Rate for {code} must be a positive finite number, got {value!r}")
        normalized[_normalize_code(code)] = rate
    return normalized


@dataclass(frozen=True)
class FeedSnapshot:
    """Rates published by the feed for one day, expressed against EUR."""

    date: str
    rates: RateTable = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.date or not self.date.strip():
            raise ValueError("date must be provided for FeedSnapshot")
        rates = _normalize_rates(self.rates)
        if rates.get(BASE_CURRENCY) != 1.0:
            raise ValueError(f"{BASE_CURRENCY} must be present with rate 1.0")
        object.__setattr__(self, "rates", rates)

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "rates": dict(self.rates)}
