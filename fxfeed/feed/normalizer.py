"""Parse the ECB ``eurofxref-daily.xml`` document into a FeedSnapshot.

The document looks like::

    <gesmes:Envelope xmlns:gesmes="..." xmlns="...eurofxref">
        <gesmes:subject>Reference rates</gesmes:subject>
        <Cube>
            <Cube time="2024-05-17">
                <Cube currency="USD" rate="1.0844"/>
                ...
            </Cube>
        </Cube>
    </gesmes:Envelope>

Namespaces are matched by local name only. EUR is never listed by the feed
and is added with a rate of 1.0 after all entries are read.
"""

from __future__ import annotations

import logging
import math
import xml.etree.ElementTree as ET
from collections.abc import Iterable

from fxfeed.errors import ParseError

from .schemas import BASE_CURRENCY, FeedSnapshot, RateTable

logger = logging.getLogger(__name__)

ENVELOPE_TAG = "Envelope"
CUBE_TAG = "Cube"


def normalize(raw_document: str | bytes) -> FeedSnapshot:
    try:
        root = ET.fromstring(raw_document)
    except ET.ParseError as exc:
        raise ParseError(f"Feed is not well-formed XML: {exc}") from exc

    if _local_name(root.tag) != ENVELOPE_TAG:
        raise ParseError(f"Unexpected root element '{_local_name(root.tag)}'")

    wrapper = _single_cube(root, "wrapper")
    dated = _single_cube(wrapper, "dated")

    date = dated.get("time")
    if not date:
        raise ParseError("Dated Cube element has no 'time' attribute")

    entries = _cubes(dated)
    if not entries:
        raise ParseError(f"No currency rate entries for {date}")

    rates = _read_rates(entries)
    rates[BASE_CURRENCY] = 1.0

    try:
        snapshot = FeedSnapshot(date=date, rates=rates)
    except ValueError as exc:
        raise ParseError(str(exc)) from exc

    logger.debug("Normalized %d rates for %s", len(snapshot.rates), date)
    return snapshot


def _read_rates(entries: Iterable[ET.Element]) -> RateTable:
    rates: RateTable = {}
    for entry in entries:
        currency = entry.get("currency")
        raw_rate = entry.get("rate")
        if currency is None or raw_rate is None:
            raise ParseError("Rate entry is missing 'currency' or 'rate' attribute")
        try:
            rate = float(raw_rate)
        except ValueError as exc:
            raise ParseError(f"Rate for {currency} is not numeric: {raw_rate!r}") from exc
        if not math.isfinite(rate) or rate <= 0:
            raise ParseError(f"Rate for {currency} must be positive and finite: {raw_rate!r}")
        rates[currency] = rate
    return rates


def _single_cube(parent: ET.Element, label: str) -> ET.Element:
    cubes = _cubes(parent)
    if len(cubes) != 1:
        raise ParseError(f"Expected exactly one {label} Cube element, found {len(cubes)}")
    return cubes[0]


def _cubes(parent: ET.Element) -> list[ET.Element]:
    return [child for child in parent if _local_name(child.tag) == CUBE_TAG]


def _local_name(tag: object) -> str:
    # Comments and processing instructions carry a callable tag.
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]
