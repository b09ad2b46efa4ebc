from __future__ import annotations

import json

import pytest

from fxfeed.errors import ParseError
from fxfeed.feed import FeedSnapshot, normalize

ENVELOPE = (
    '<gesmes:Envelope xmlns:gesmes="http://www.gesmes.org/xml/2002-08-01" '
    'xmlns="http://www.ecb.int/vocabulary/2002-08-01/eurofxref">{body}</gesmes:Envelope>'
)


def _document(body: str) -> str:
    return ENVELOPE.format(body=body)


def test_normalize_reads_date_and_rates(load_fixture):
    snapshot = normalize(load_fixture("eurofxref-daily.xml"))

    assert snapshot.date == "2024-05-17"
    assert snapshot.rates["USD"] == 1.0844
    assert snapshot.rates["JPY"] == 169.04
    assert snapshot.rates["GBP"] == 0.85525
    assert len(snapshot.rates) == 19


def test_normalize_accepts_bytes(load_fixture):
    raw = load_fixture("eurofxref-daily.xml").encode("utf-8")

    assert normalize(raw).rates["EUR"] == 1.0


def test_normalize_injects_eur_when_absent():
    doc = _document('<Cube><Cube time="2024-01-02"><Cube currency="USD" rate="1.1"/></Cube></Cube>')

    snapshot = normalize(doc)

    assert snapshot.rates == {"USD": 1.1, "EUR": 1.0}


def test_normalize_overrides_listed_eur_with_base_rate():
    doc = _document(
        '<Cube><Cube time="2024-01-02">'
        '<Cube currency="EUR" rate="3.5"/><Cube currency="USD" rate="1.1"/>'
        "</Cube></Cube>"
    )

    assert normalize(doc).rates["EUR"] == 1.0


def test_normalize_matches_elements_by_local_name():
    doc = (
        '<Envelope><Cube><Cube time="2024-01-02">'
        '<Cube currency="CHF" rate="0.94"/>'
        "</Cube></Cube></Envelope>"
    )

    assert normalize(doc).rates == {"CHF": 0.94, "EUR": 1.0}


def test_snapshot_json_round_trip_preserves_rates(load_fixture):
    snapshot = normalize(load_fixture("eurofxref-daily.xml"))

    decoded = json.loads(json.dumps(snapshot.to_dict()))

    assert decoded["date"] == snapshot.date
    assert decoded["rates"] == snapshot.rates


def test_missing_rates_container_raises(load_fixture):
    with pytest.raises(ParseError):
        normalize(load_fixture("eurofxref-missing-rates.xml"))


@pytest.mark.parametrize(
    "doc",
    [
        "not xml at all",
        "<Envelope><Cube>",
        '<Other><Cube><Cube time="2024-01-02"><Cube currency="USD" rate="1"/></Cube></Cube></Other>',
        _document('<Cube><Cube time="2024-01-02"></Cube></Cube>'),
        _document('<Cube><Cube><Cube currency="USD" rate="1.1"/></Cube></Cube>'),
        _document(
            '<Cube><Cube time="2024-01-02"><Cube currency="USD" rate="1"/></Cube></Cube>'
            '<Cube><Cube time="2024-01-03"><Cube currency="USD" rate="1"/></Cube></Cube>'
        ),
        _document(
            '<Cube><Cube time="2024-01-02"><Cube currency="USD" rate="1"/></Cube>'
            '<Cube time="2024-01-03"><Cube currency="USD" rate="1"/></Cube></Cube>'
        ),
        _document('<Cube><Cube time="2024-01-02"><Cube currency="USD"/></Cube></Cube>'),
        _document('<Cube><Cube time="2024-01-02"><Cube rate="1.1"/></Cube></Cube>'),
        _document('<Cube><Cube time="2024-01-02"><Cube currency="USD" rate="abc"/></Cube></Cube>'),
        _document('<Cube><Cube time="2024-01-02"><Cube currency="USD" rate="nan"/></Cube></Cube>'),
        _document('<Cube><Cube time="2024-01-02"><Cube currency="USD" rate="-1"/></Cube></Cube>'),
        _document('<Cube><Cube time="2024-01-02"><Cube currency="usd" rate="1.1"/></Cube></Cube>'),
    ],
    ids=[
        "not-xml",
        "truncated",
        "wrong-root",
        "no-entries",
        "no-time",
        "two-wrappers",
        "two-dated",
        "no-rate",
        "no-currency",
        "non-numeric",
        "nan",
        "negative",
        "lowercase-code",
    ],
)
def test_malformed_documents_raise_parse_error(doc):
    with pytest.raises(ParseError):
        normalize(doc)


def test_feed_snapshot_requires_base_currency():
    with pytest.raises(ValueError):
        FeedSnapshot(date="2024-01-02", rates={"USD": 1.1})


def test_feed_snapshot_rejects_blank_date():
    with pytest.raises(ValueError):
        FeedSnapshot(date=" ", rates={"EUR": 1.0})
