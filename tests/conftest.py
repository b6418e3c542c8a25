from __future__ import annotations

from datetime import datetime, timezone
from html import escape
from pathlib import Path
from typing import Callable, Iterable, Optional

import pytest

TESTDATA = Path(__file__).parent / "testdata"


def make_row(
    item_id: str = "100",
    *,
    title: str = "Sohva",
    price: Optional[str] = "150 €",
    posted: str = "tänään 12:00",
    location: str = "Helsinki",
    direction: str = "Myydään",
    sellers: Iterable[str] = (),
    company: str = "0",
    href: Optional[str] = None,
    drop: Iterable[str] = (),
) -> str:
    """HTML for one search result row in the site's markup."""
    drop = set(drop)
    attrs = [f'data-row="{escape(item_id)}"', 'class="item_row_flex"']
    if "id" not in drop:
        attrs.append(f'id="item_{escape(item_id)}"')
    if "company" not in drop:
        attrs.append(f'data-company-ad="{escape(company)}"')
    if "href" not in drop:
        link = href if href is not None else f"https://www.tori.fi/uusimaa/ilmoitus_{item_id}.htm"
        attrs.append(f'href="{escape(link)}"')
    title_html = "" if "title" in drop else f'<div class="li-title">{escape(title)}</div>'
    price_html = "" if price is None else f'<p class="list_price ineuros">{escape(price)}</p>'
    date_html = "" if "date" in drop else f'<div class="date_image">{escape(posted)}</div>'
    paras = "".join(f"<p>{escape(p)}</p>" for p in (location, direction, *sellers))
    geo_html = "" if "cat_geo" in drop else f'<div class="cat_geo clean_links">{paras}</div>'
    return f"""
    <a {' '.join(attrs)}>
      <div class="image_container">
        <img class="item_image" src="https://img.tori.net/thumbs/{escape(item_id)}.jpg">
      </div>
      <div class="desc_flex">
        <div class="ad-details-left">
          {title_html}
          {price_html}
        </div>
        <div class="ad-details-right">
          {date_html}
          {geo_html}
        </div>
      </div>
    </a>
    """


def make_page(rows: Iterable[str], *, wrapper: bool = True) -> str:
    body = "".join(rows)
    if wrapper:
        body = f'<div class="list_mode_thumb">{body}</div>'
    return (
        '<html><head><meta charset="utf-8"><title>Tori</title></head>'
        f"<body><div id=\"blocket\">{body}</div></body></html>"
    )


@pytest.fixture
def row_factory() -> Callable[..., str]:
    return make_row


@pytest.fixture
def page_factory() -> Callable[..., str]:
    return make_page


@pytest.fixture
def reference() -> datetime:
    # 2023-03-25 10:52:01 in Helsinki (UTC+2)
    return datetime(2023, 3, 25, 8, 52, 1, tzinfo=timezone.utc)


@pytest.fixture
def testdata() -> Path:
    return TESTDATA
