"""Parse tori.fi search results pages into normalized listing records."""

from .errors import (
    FieldError,
    StructureError,
    StructureNotFound,
    TimestampError,
    ToriScrapeError,
    TreeBuildError,
)
from .models import Item, ParseError, ParseOutcome, Price
from .services import Parser, TimestampNormalizer, parse_document

__version__ = "0.1.0"

__all__ = [
    "FieldError",
    "Item",
    "ParseError",
    "ParseOutcome",
    "Parser",
    "Price",
    "StructureError",
    "StructureNotFound",
    "TimestampError",
    "TimestampNormalizer",
    "ToriScrapeError",
    "TreeBuildError",
    "parse_document",
]
