"""Data models for parsed listings and parse results."""

from .listing import Item, Price, RawListingFields
from .outcome import (
    STAGE_STRUCTURE_NOT_FOUND,
    STAGE_TIMESTAMP,
    STAGE_TREE_BUILD_FAILED,
    ParseError,
    ParseOutcome,
    field_stage,
)

__all__ = [
    "Item",
    "Price",
    "RawListingFields",
    "ParseError",
    "ParseOutcome",
    "STAGE_STRUCTURE_NOT_FOUND",
    "STAGE_TIMESTAMP",
    "STAGE_TREE_BUILD_FAILED",
    "field_stage",
]
