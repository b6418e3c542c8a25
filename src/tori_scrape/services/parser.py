"""Search results page parser."""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import List, Optional, Union
from urllib.parse import urljoin

from tori_scrape.errors import (
    FieldError,
    StructureNotFound,
    TimestampError,
    TreeBuildError,
)
from tori_scrape.models import (
    STAGE_STRUCTURE_NOT_FOUND,
    STAGE_TIMESTAMP,
    STAGE_TREE_BUILD_FAILED,
    Item,
    ParseError,
    ParseOutcome,
    RawListingFields,
    field_stage,
)
from tori_scrape.utils.text import parse_price, reformat_ws

from .dates import FINNISH, SITE_TIMEZONE, Locale, TimestampNormalizer
from .extractor import extract_fields
from .locator import locate_listings
from .tree import Node, SelectorTreeProvider, TreeProvider

logger = logging.getLogger(__name__)


class Parser:
    """Parse a tori.fi search results page into :class:`Item` records.

    ``reference`` is when the page was fetched; relative timestamps such as
    ``tänään 12:34`` are resolved against it. Create one parser per fetched
    page; the parser keeps no state between calls.

    Per-listing failures are collected next to the successful items. With
    ``strict=True`` the first one aborts the page instead.
    """

    def __init__(
        self,
        reference: datetime,
        *,
        timezone: Union[str, tzinfo] = SITE_TIMEZONE,
        locale: Locale = FINNISH,
        strict: bool = False,
        base_url: Optional[str] = None,
        tree_provider: Optional[TreeProvider] = None,
    ) -> None:
        self.normalizer = TimestampNormalizer(reference, timezone, locale)
        self.strict = strict
        self.base_url = base_url
        self.tree_provider: TreeProvider = tree_provider or SelectorTreeProvider()

    @property
    def reference(self) -> datetime:
        return self.normalizer.reference

    def parse(self, document_text: str) -> ParseOutcome:
        """Build the tree for ``document_text`` and parse it."""
        try:
            root = self.tree_provider.build(document_text)
        except TreeBuildError as e:
            logger.error("Could not build document tree: %s", e)
            return ParseOutcome(
                error=ParseError(stage=STAGE_TREE_BUILD_FAILED, detail=str(e))
            )
        return self.parse_node(root)

    def parse_node(self, root: Node) -> ParseOutcome:
        """Parse an already built document tree."""
        try:
            rows = locate_listings(root)
        except StructureNotFound as e:
            logger.error("Search results structure not found: %s", e)
            return ParseOutcome(
                error=ParseError(stage=STAGE_STRUCTURE_NOT_FOUND, detail=str(e))
            )

        items: List[Item] = []
        failures: List[ParseError] = []
        for index, row in enumerate(rows):
            raw: Optional[RawListingFields] = None
            try:
                raw = extract_fields(row, index)
                items.append(self._build_item(raw))
            except FieldError as e:
                failure = ParseError(
                    stage=field_stage(e.field),
                    kind=e.kind,
                    detail=e.detail,
                    fragment=e.fragment,
                    field=e.field,
                    index=e.index,
                    item_id=e.item_id,
                )
            except TimestampError as e:
                failure = ParseError(
                    stage=STAGE_TIMESTAMP,
                    kind=e.kind,
                    detail=f"listing #{index}: {e.detail}",
                    fragment=e.text,
                    field="timestamp",
                    index=index,
                    item_id=raw.item_id if raw is not None else None,
                )
            else:
                continue

            logger.warning(
                "Skipping listing #%d (%s): %s", index, failure.stage, failure.detail
            )
            if self.strict:
                return ParseOutcome(error=failure)
            failures.append(failure)

        logger.debug(
            "Parsed %d listings: %d items, %d failures",
            len(rows),
            len(items),
            len(failures),
        )
        return ParseOutcome(items=tuple(items), failures=tuple(failures))

    def normalize_timestamp(self, text: str) -> datetime:
        """Resolve a single listing timestamp against this parser's reference."""
        return self.normalizer.normalize(text)

    def _build_item(self, raw: RawListingFields) -> Item:
        price = None
        if raw.price_text is not None:
            try:
                price = parse_price(raw.price_text)
            except ValueError:
                raise FieldError(
                    "price",
                    "invalid-price",
                    raw.index,
                    fragment=raw.price_text,
                    item_id=raw.item_id,
                ) from None

        posted_at = self.normalizer.normalize(raw.posted_at_text)
        href = urljoin(self.base_url, raw.href) if self.base_url else raw.href

        return Item(
            item_id=raw.item_id,
            title=raw.title,
            price=price,
            location=raw.location,
            direction=raw.direction,
            seller=raw.seller,
            is_company_ad=raw.is_company_ad,
            href=href,
            thumbnail_url=raw.thumbnail_url,
            posted_at_orig=reformat_ws(raw.posted_at_text),
            posted_at=posted_at,
        )


def parse_document(document_text: str, reference: datetime, **kwargs: object) -> ParseOutcome:
    """Convenience wrapper: ``Parser(reference, **kwargs).parse(document_text)``."""
    return Parser(reference, **kwargs).parse(document_text)  # type: ignore[arg-type]
