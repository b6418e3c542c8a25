from __future__ import annotations

import pytest

from tori_scrape.models import Price
from tori_scrape.utils.text import parse_price, reformat_ws


def test_reformat_ws() -> None:
    assert reformat_ws("   foo      bar baz  ") == "foo bar baz"
    assert reformat_ws("\n\tfoo\xa0bar\n") == "foo bar"
    assert reformat_ws("") == ""
    assert reformat_ws(None) == ""


@pytest.mark.parametrize(
    "text, value",
    [
        ("1 €", 1.0),
        (" 1 599  €", 1599.0),
        ("1\xa0599 €", 1599.0),
        ("25€", 25.0),
        ("12,50 €", 12.5),
        ("1 250 000 €", 1250000.0),
    ],
)
def test_parse_price_amounts(text: str, value: float) -> None:
    price = parse_price(text)
    assert price.value == value
    assert price.unit == "€"


def test_parse_price_keeps_free_text() -> None:
    assert parse_price("  Sovittavissa ") == Price(text="Sovittavissa")


@pytest.mark.parametrize("text", ["1 2x9 €", "100 $", "noin 50 €", "12,5,0 €", "  "])
def test_parse_price_rejects_malformed(text: str) -> None:
    with pytest.raises(ValueError):
        parse_price(text)
