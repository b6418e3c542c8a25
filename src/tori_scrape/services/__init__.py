"""Service layer for the tori.fi search results parser."""

from .dates import ENGLISH, FINNISH, SWEDISH, Locale, TimestampNormalizer, get_locale
from .parser import Parser, parse_document
from .tree import Node, SelectorTreeProvider, TreeProvider

__all__ = [
    "ENGLISH",
    "FINNISH",
    "SWEDISH",
    "Locale",
    "Node",
    "Parser",
    "SelectorTreeProvider",
    "TimestampNormalizer",
    "TreeProvider",
    "get_locale",
    "parse_document",
]
