from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional

from bs4 import BeautifulSoup

from ..models import ExtractionRecord
from ..utils.logging import setup_logging
from .jsonsearch import search_json

setup_logging()
log = logging.getLogger("valueproxy.parsers.blobs")

DATA_ISLAND_SELECTOR = "#__NEXT_DATA__"
LD_JSON_SELECTOR = 'script[type="application/ld+json"]'

INLINE_MIN_LENGTH = 60
INLINE_HINT_RE = re.compile(r"price|priceInRobux|value|inventory|items|limited", re.I)
# greedy: first opening bracket to the last closing one
INLINE_OBJECT_RE = re.compile(r"(\{[\s\S]*\})")
INLINE_ARRAY_RE = re.compile(r"(\[[\s\S]*\])")


def _loads(raw: Optional[str], where: str) -> Optional[Any]:
    if not raw or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as e:
        log.debug("skip %s: %s", where, e)
        return None


def _inline_payload(txt: str):
    """Return (context, decoded) for the first object literal, else the first array literal."""
    m = INLINE_OBJECT_RE.search(txt)
    if m:
        # a brace match that doesn't parse is not retried as an array
        return "inline-object", _loads(m.group(1), "inline object")
    ma = INLINE_ARRAY_RE.search(txt)
    if ma:
        return "inline-array", _loads(ma.group(1), "inline array")
    return None, None


def scan_json_blobs(soup: BeautifulSoup) -> List[ExtractionRecord]:
    items: List[ExtractionRecord] = []
    handled = set()

    island = soup.select_one(DATA_ISLAND_SELECTOR)
    if island is not None:
        handled.add(id(island))
        data = _loads(island.get_text(), "data island")
        if data is not None:
            items.extend(search_json(data, "data-island"))

    for el in soup.select(LD_JSON_SELECTOR):
        handled.add(id(el))
        data = _loads(el.get_text(), "ld+json")
        if data is not None:
            items.extend(search_json(data, "ld-json"))

    for el in soup.find_all("script"):
        if id(el) in handled:
            continue
        txt = el.get_text()
        if len(txt) <= INLINE_MIN_LENGTH or not INLINE_HINT_RE.search(txt):
            continue
        ctx, data = _inline_payload(txt)
        if data is not None:
            items.extend(search_json(data, ctx))

    log.debug("blobs: %d records", len(items))
    return items
