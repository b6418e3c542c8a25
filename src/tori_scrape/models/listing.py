"""Data models for parsed listings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class Price(BaseModel):
    """Listing price as shown on the site.

    ``value``/``unit`` are set when the text is a plain amount such as
    ``"1 599 €"``; free-text prices ("Sovittavissa") only carry ``text``.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    value: Optional[float] = None
    unit: Optional[str] = None


class Item(BaseModel):
    """Represents a single normalized listing from a search results page."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    title: str
    price: Optional[Price] = None
    location: str
    direction: str
    seller: Optional[str] = None
    is_company_ad: bool = False
    href: str
    thumbnail_url: Optional[str] = None
    posted_at_orig: str
    posted_at: datetime

    @field_validator("posted_at")
    @classmethod
    def _require_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None or v.utcoffset() is None:
            raise ValueError("posted_at must be timezone-aware")
        return v


@dataclass(frozen=True)
class RawListingFields:
    """Extracted but not yet normalized strings for one listing row.

    ``posted_at_text`` and ``price_text`` are the element text exactly as in
    the markup so that failures can quote them.
    """

    index: int
    item_id: str
    is_company_ad: bool
    href: str
    title: str
    posted_at_text: str
    location: str
    direction: str
    price_text: Optional[str] = None
    thumbnail_url: Optional[str] = None
    seller: Optional[str] = None
