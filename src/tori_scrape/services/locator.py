from __future__ import annotations

import logging
from typing import List

from tori_scrape.errors import StructureNotFound

from .tree import Node

logger = logging.getLogger(__name__)

# Each search hit is an <a data-row="..."> wrapping the whole card.
ROW_SELECTOR = "a[data-row]"
# Present on results pages even when the search has zero hits.
RESULTS_CONTAINER_SELECTOR = "div.list_mode_thumb, [data-row-list]"


def locate_listings(root: Node) -> List[Node]:
    """Return listing row nodes in document order.

    An empty list means a valid page with no hits; a page without rows and
    without the results container raises :class:`StructureNotFound`.
    """
    rows = root.find_all(ROW_SELECTOR)
    if rows:
        logger.debug("Located %d listing rows", len(rows))
        return rows
    if root.find(RESULTS_CONTAINER_SELECTOR) is not None:
        logger.debug("Results container present with no listing rows")
        return []
    raise StructureNotFound(
        f"no listing rows ({ROW_SELECTOR!r}) and no results container "
        f"({RESULTS_CONTAINER_SELECTOR!r}) found; the page layout may have changed"
    )
