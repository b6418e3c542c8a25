"""Exception types raised inside the parsing pipeline.

The :class:`~tori_scrape.services.parser.Parser` converts these into
:class:`~tori_scrape.models.ParseError` values; callers of ``Parser.parse``
never see them unless they ask for it via ``ParseOutcome.raise_for_error``.
"""

from __future__ import annotations

from typing import Optional


class ToriScrapeError(Exception):
    """Base class for all pipeline errors."""


class TreeBuildError(ToriScrapeError):
    """The tree provider could not turn the input into a document tree."""


class StructureNotFound(ToriScrapeError):
    """Neither listing rows nor the results container were found."""


class StructureError(ToriScrapeError):
    """Raised by ``ParseOutcome.raise_for_error`` for document-level failures."""

    def __init__(self, error: object) -> None:
        super().__init__(str(getattr(error, "detail", error)))
        self.error = error


class TimestampError(ToriScrapeError):
    """A listing timestamp could not be normalized.

    ``kind`` is one of ``unrecognized``, ``invalid-time``, ``invalid-day``,
    ``invalid-month`` or ``nonexistent-time``; ``text`` is always the complete
    input that was given to the normalizer.
    """

    def __init__(self, kind: str, text: str, detail: str) -> None:
        super().__init__(detail)
        self.kind = kind
        self.text = text
        self.detail = detail


class FieldError(ToriScrapeError):
    """A single field of a single listing is missing or malformed."""

    def __init__(
        self,
        field: str,
        kind: str,
        index: int,
        fragment: Optional[str] = None,
        item_id: Optional[str] = None,
    ) -> None:
        if fragment is None:
            detail = f"listing #{index}: field '{field}' is {kind}"
        else:
            detail = f"listing #{index}: field '{field}' is {kind}: {fragment!r}"
        super().__init__(detail)
        self.field = field
        self.kind = kind
        self.index = index
        self.fragment = fragment
        self.item_id = item_id
        self.detail = detail
