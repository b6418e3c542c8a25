from __future__ import annotations

import re
from typing import Optional

from tori_scrape.models import Price

# "1 599 €", "25 €", "12,50 €"; digit groups may be split by any whitespace
PRICE_PATT = re.compile(r"(\d[\d ]*\d|\d)(?:,(\d{1,2}))?\s*(€)")
_DIGIT = re.compile(r"\d")


def reformat_ws(text: Optional[str]) -> str:
    """Collapse runs of whitespace (including NBSP) into single spaces and trim."""
    if not text:
        return ""
    return " ".join(text.split())


def parse_price(text: str) -> Price:
    """Parse a price string such as ``"1 599 €"`` into a :class:`Price`.

    Text without any digits ("Sovittavissa", "Annetaan") is kept as a
    free-text price. Text that has digits but is not a plain amount raises
    ``ValueError`` so that a changed price format does not go unnoticed.
    """
    clean = reformat_ws(text)
    if not clean:
        raise ValueError("price text is empty")
    m = PRICE_PATT.fullmatch(clean)
    if m:
        intpart = m.group(1).replace(" ", "")
        dec = m.group(2)
        num = f"{intpart}.{dec}" if dec else intpart
        return Price(text=clean, value=float(num), unit=m.group(3))
    if _DIGIT.search(clean):
        raise ValueError(f"unrecognized price format: {clean!r}")
    return Price(text=clean)
