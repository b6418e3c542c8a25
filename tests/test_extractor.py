from __future__ import annotations

from typing import Callable

import pytest

from tori_scrape.errors import FieldError
from tori_scrape.services.extractor import extract_fields
from tori_scrape.services.tree import Node, SelectorTreeProvider


def row_node(html: str) -> Node:
    root = SelectorTreeProvider().build(f"<html><body>{html}</body></html>")
    node = root.find("a[data-row]")
    assert node is not None
    return node


def test_extracts_all_fields(row_factory: Callable[..., str]) -> None:
    html = row_factory(
        "117042301",
        title="  Sohva,   3-istuttava ",
        price="150 €",
        posted="\n  tänään\n  11:58 ",
        location="Helsinki",
        direction="Myydään",
        sellers=("Kodinkone Oy", "Vantaa"),
        company="1",
    )
    raw = extract_fields(row_node(html), 7)
    assert raw.index == 7
    assert raw.item_id == "117042301"
    assert raw.is_company_ad is True
    assert raw.href == "https://www.tori.fi/uusimaa/ilmoitus_117042301.htm"
    assert raw.title == "Sohva, 3-istuttava"
    assert raw.price_text == "150 €"
    assert raw.posted_at_text == "\n  tänään\n  11:58 "
    assert raw.location == "Helsinki"
    assert raw.direction == "Myydään"
    assert raw.seller == "Kodinkone Oy Vantaa"
    assert raw.thumbnail_url == "https://img.tori.net/thumbs/117042301.jpg"


def test_optional_fields_may_be_absent(row_factory: Callable[..., str]) -> None:
    raw = extract_fields(row_node(row_factory("5", price=None)), 0)
    assert raw.price_text is None
    assert raw.seller is None
    assert raw.is_company_ad is False


def test_empty_price_element_means_no_price(row_factory: Callable[..., str]) -> None:
    raw = extract_fields(row_node(row_factory("5", price="   ")), 0)
    assert raw.price_text is None


@pytest.mark.parametrize(
    "drop, field",
    [
        ("id", "id"),
        ("company", "company_ad"),
        ("href", "link"),
        ("title", "title"),
        ("date", "timestamp"),
        ("cat_geo", "location"),
    ],
)
def test_missing_required_field_names_the_field(
    row_factory: Callable[..., str], drop: str, field: str
) -> None:
    with pytest.raises(FieldError) as exc:
        extract_fields(row_node(row_factory("42", drop=[drop])), 3)
    assert exc.value.field == field
    assert exc.value.kind == "missing"
    assert exc.value.index == 3
    assert f"'{field}'" in str(exc.value)


def test_item_id_is_attached_once_known(row_factory: Callable[..., str]) -> None:
    with pytest.raises(FieldError) as exc:
        extract_fields(row_node(row_factory("42", drop=["title"])), 0)
    assert exc.value.item_id == "42"


def test_empty_title_is_an_error(row_factory: Callable[..., str]) -> None:
    with pytest.raises(FieldError) as exc:
        extract_fields(row_node(row_factory("42", title="   ")), 0)
    assert exc.value.field == "title"
    assert exc.value.kind == "empty"
    assert (exc.value.fragment or "").strip() == ""


def test_unexpected_id_format(row_factory: Callable[..., str]) -> None:
    html = row_factory("42", drop=["id"]).replace("<a ", '<a id="ad-42" ', 1)
    with pytest.raises(FieldError) as exc:
        extract_fields(row_node(html), 0)
    assert exc.value.field == "id"
    assert exc.value.kind == "unexpected-value"
    assert exc.value.fragment == "ad-42"


def test_non_numeric_item_id(row_factory: Callable[..., str]) -> None:
    html = row_factory("42", drop=["id"]).replace("<a ", '<a id="item_abc" ', 1)
    with pytest.raises(FieldError) as exc:
        extract_fields(row_node(html), 0)
    assert exc.value.field == "id"
    assert exc.value.kind == "unexpected-value"
    assert exc.value.fragment == "item_abc"


def test_unexpected_company_flag(row_factory: Callable[..., str]) -> None:
    with pytest.raises(FieldError) as exc:
        extract_fields(row_node(row_factory("42", company="yes")), 0)
    assert exc.value.field == "company_ad"
    assert exc.value.fragment == "yes"


def test_missing_direction(row_factory: Callable[..., str]) -> None:
    html = row_factory("42").replace("<p>Myydään</p>", "")
    with pytest.raises(FieldError) as exc:
        extract_fields(row_node(html), 0)
    assert exc.value.field == "direction"


def test_empty_link(row_factory: Callable[..., str]) -> None:
    with pytest.raises(FieldError) as exc:
        extract_fields(row_node(row_factory("42", href=" ")), 0)
    assert exc.value.field == "link"
    assert exc.value.kind == "empty"
