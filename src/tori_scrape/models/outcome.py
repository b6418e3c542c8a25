"""Result types returned by :meth:`Parser.parse`."""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from tori_scrape.errors import StructureError

from .listing import Item

STAGE_TREE_BUILD_FAILED = "tree-build-failed"
STAGE_STRUCTURE_NOT_FOUND = "structure-not-found"
STAGE_TIMESTAMP = "timestamp"


def field_stage(field: str) -> str:
    return f"field:{field}"


class ParseError(BaseModel):
    """What failed and where.

    Document-level errors leave ``index``/``field``/``item_id`` unset.
    ``fragment`` holds the offending raw text verbatim when there is one.
    """

    model_config = ConfigDict(frozen=True)

    stage: str
    detail: str
    kind: Optional[str] = None
    fragment: Optional[str] = None
    field: Optional[str] = None
    index: Optional[int] = None
    item_id: Optional[str] = None


class ParseOutcome(BaseModel):
    """Items and per-listing failures of one document, or a document-level error."""

    model_config = ConfigDict(frozen=True)

    items: Tuple[Item, ...] = ()
    failures: Tuple[ParseError, ...] = ()
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def complete(self) -> bool:
        return self.error is None and not self.failures

    def raise_for_error(self) -> "ParseOutcome":
        if self.error is not None:
            raise StructureError(self.error)
        return self
