"""Per-listing field extraction.

Every required field is read on its own, so a failure always names exactly
one field. Nothing is defaulted: a missing required attribute or an element
with only whitespace is a :class:`FieldError`.
"""

from __future__ import annotations

import re
from typing import Optional

from tori_scrape.errors import FieldError
from tori_scrape.models import RawListingFields
from tori_scrape.utils.text import reformat_ws

from .tree import Node

TITLE_SELECTOR = ".li-title"
PRICE_SELECTOR = ".list_price, .ineuros"
IMAGE_SELECTOR = "img.item_image[src]"
POSTED_AT_SELECTOR = ".date_image"
# location, direction, then zero or more seller paragraphs
COMBINED_SELECTOR = ".cat_geo > p"

ID_PATT = re.compile(r"item_(\d+)")


def extract_fields(node: Node, index: int) -> RawListingFields:
    """Pull the raw strings for one listing row or raise :class:`FieldError`."""
    raw_id = node.attr("id")
    if raw_id is None:
        raise FieldError("id", "missing", index)
    m = ID_PATT.fullmatch(raw_id.strip())
    if not m:
        raise FieldError("id", "unexpected-value", index, fragment=raw_id)
    item_id = m.group(1)

    company = node.attr("data-company-ad")
    if company is None:
        raise FieldError("company_ad", "missing", index, item_id=item_id)
    if company.strip() not in ("0", "1"):
        raise FieldError(
            "company_ad", "unexpected-value", index, fragment=company, item_id=item_id
        )

    href = node.attr("href")
    if href is None:
        raise FieldError("link", "missing", index, item_id=item_id)
    if not href.strip():
        raise FieldError("link", "empty", index, fragment=href, item_id=item_id)

    title = _required_text(node, TITLE_SELECTOR, "title", index, item_id)
    posted_at = _required_text(node, POSTED_AT_SELECTOR, "timestamp", index, item_id)

    combined = node.find_all(COMBINED_SELECTOR)
    if not combined:
        raise FieldError("location", "missing", index, item_id=item_id)
    location = _node_text(combined[0], "location", index, item_id)
    if len(combined) < 2:
        raise FieldError("direction", "missing", index, item_id=item_id)
    direction = _node_text(combined[1], "direction", index, item_id)
    sellers = [reformat_ws(n.text()) for n in combined[2:]]
    seller = " ".join(s for s in sellers if s) or None

    return RawListingFields(
        index=index,
        item_id=item_id,
        is_company_ad=company.strip() == "1",
        href=href.strip(),
        title=reformat_ws(title),
        posted_at_text=posted_at,
        location=location,
        direction=direction,
        price_text=_optional_text(node, PRICE_SELECTOR),
        thumbnail_url=_thumbnail(node),
        seller=seller,
    )


def _required_text(
    node: Node, selector: str, field: str, index: int, item_id: str
) -> str:
    found = node.find(selector)
    if found is None:
        raise FieldError(field, "missing", index, item_id=item_id)
    text = found.text()
    if not text.strip():
        raise FieldError(field, "empty", index, fragment=text, item_id=item_id)
    return text


def _node_text(node: Node, field: str, index: int, item_id: str) -> str:
    text = node.text()
    clean = reformat_ws(text)
    if not clean:
        raise FieldError(field, "empty", index, fragment=text, item_id=item_id)
    return clean


def _optional_text(node: Node, selector: str) -> Optional[str]:
    found = node.find(selector)
    if found is None:
        return None
    text = found.text()
    return text if reformat_ws(text) else None


def _thumbnail(node: Node) -> Optional[str]:
    img = node.find(IMAGE_SELECTOR)
    if img is None:
        return None
    return (img.attr("src") or "").strip() or None
