"""Document tree access.

The pipeline only talks to :class:`Node` and :class:`TreeProvider`; the
concrete implementation wraps scrapy's ``Selector`` (parsel over lxml).
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from scrapy import Selector

from tori_scrape.errors import TreeBuildError


class Node(Protocol):
    def find_all(self, pattern: str) -> List["Node"]:
        """Descendants matching a CSS pattern, in document order."""
        ...

    def find(self, pattern: str) -> Optional["Node"]:
        ...

    def attr(self, name: str) -> Optional[str]:
        ...

    def text(self) -> str:
        """All text content below this node, concatenated."""
        ...


class TreeProvider(Protocol):
    def build(self, text: str) -> Node:
        ...


class SelectorNode:
    """``Node`` backed by a ``scrapy.Selector``."""

    __slots__ = ("_sel",)

    def __init__(self, sel: Selector) -> None:
        self._sel = sel

    def find_all(self, pattern: str) -> List[Node]:
        return [SelectorNode(s) for s in self._sel.css(pattern)]

    def find(self, pattern: str) -> Optional[Node]:
        found = self._sel.css(pattern)
        return SelectorNode(found[0]) if found else None

    def attr(self, name: str) -> Optional[str]:
        return self._sel.attrib.get(name)

    def text(self) -> str:
        return "".join(self._sel.xpath(".//text()").getall())

    def __repr__(self) -> str:
        return f"<SelectorNode {self._sel.root!r}>"


class SelectorTreeProvider:
    """Builds HTML trees with ``scrapy.Selector``."""

    def build(self, text: str) -> Node:
        if not isinstance(text, str):
            raise TreeBuildError(
                f"document must be decoded text, got {type(text).__name__}"
            )
        if not text.strip():
            raise TreeBuildError("document is empty")
        try:
            sel = Selector(text=text, type="html")
        except (TypeError, ValueError) as e:
            raise TreeBuildError(f"could not build document tree: {e}") from e
        return SelectorNode(sel)
