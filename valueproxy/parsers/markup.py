from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from ..models import ExtractionRecord
from ..utils.logging import setup_logging
from .numbers import parse_number_token

setup_logging()
log = logging.getLogger("valueproxy.parsers.markup")

PRICE_SELECTORS = [
    "span.text-light.text-truncate",
    ".text-muted.text-truncate",
    ".value",
    ".price",
    ".item-price",
    ".limited-price",
    ".inventory-price",
    "td.price",
    "span.price",
    ".text-right .text-truncate",
]

# inventory limited + ugc limited sections
SECTION_SELECTORS = [
    "#inventoryugclimiteds",
    "#inventorylimiteds",
    "div[id*='inventory']",
    "div[id*='limited']",
]

CONTAINER_SELECTOR = ".card, .item-card, li, tr, .inventory-item, .media, .d-flex"
NAME_SELECTOR = ".item-name, .name, strong, .text-truncate"


def _closest(el: Tag, selector: str) -> Optional[Tag]:
    """Like jQuery .closest(): the element itself counts."""
    node = el
    while isinstance(node, Tag) and node.name != "[document]":
        if node.css.match(selector):
            return node
        node = node.parent
    return None


def _label_for(el: Tag) -> str:
    name = ""
    container = _closest(el, CONTAINER_SELECTOR)
    if container is not None:
        hit = container.select_one(NAME_SELECTOR)
        if hit is not None:
            name = hit.get_text().strip()
    if not name:
        prev = el.find_previous_sibling(True)
        name = prev.get_text().strip() if prev is not None else ""
    if not name and isinstance(el.parent, Tag):
        name = el.parent.get_text().strip()[:80]
    return name[:140]


def scan_markup(roots: Iterable[Tag], selectors: Sequence[str] = PRICE_SELECTORS) -> List[ExtractionRecord]:
    roots = list(roots)
    items: List[ExtractionRecord] = []
    for sel in selectors:
        seen = set()  # nested roots match the same element twice
        for root in roots:
            for el in root.select(sel):
                if id(el) in seen:
                    continue
                seen.add(id(el))
                try:
                    value = parse_number_token(el.get_text())
                    if value is None:
                        continue
                    items.append(ExtractionRecord(
                        source="markup", provenance=sel, label=_label_for(el), value=value,
                    ))
                except ValueError as e:
                    log.debug("skip %s match: %s", sel, e)
    return items


def scan_page_markup(soup: BeautifulSoup, selectors: Sequence[str] = PRICE_SELECTORS) -> List[ExtractionRecord]:
    """
    Scan the dedicated inventory sections first; only when they yield nothing
    fall back to the whole document (regular accessories live outside them).
    """
    items: List[ExtractionRecord] = []
    for sec in SECTION_SELECTORS:
        roots = soup.select(sec)
        if roots:
            items.extend(scan_markup(roots, selectors))
    if items:
        log.debug("markup: %d records from inventory sections", len(items))
        return items
    items = scan_markup([soup], selectors)
    log.debug("markup: %d records from whole document", len(items))
    return items
