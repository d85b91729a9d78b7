from __future__ import annotations

import logging
import re
from typing import Iterable, List, Tuple

from bs4 import BeautifulSoup

from ..models import ExtractionRecord, PipelineResult
from ..utils.logging import setup_logging
from .blobs import scan_json_blobs
from .markup import scan_page_markup
from .numbers import NUMBER_TOKEN_RE, parse_number_token

setup_logging()
log = logging.getLogger("valueproxy.parsers.pipeline")

_WS_RE = re.compile(r"\s+")


def load_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def _dedupe_key(rec: ExtractionRecord) -> str:
    return _WS_RE.sub(" ", rec.label or "")[:80] + "::" + str(rec.value or 0)


def dedupe_records(records: Iterable[ExtractionRecord]) -> List[ExtractionRecord]:
    # first seen wins, order kept
    seen = set(); res = []
    for rec in records:
        k = _dedupe_key(rec)
        if k not in seen:
            seen.add(k); res.append(rec)
    return res


def fallback_total(soup: BeautifulSoup) -> int:
    """Largest number-looking token in the visible body text, 0 if none."""
    root = soup.body if soup.body is not None else soup
    text = root.get_text() or ""
    values = [parse_number_token(m.group(0)) for m in NUMBER_TOKEN_RE.finditer(text)]
    values = [v for v in values if v]
    return max(values) if values else 0


def aggregate(records: List[ExtractionRecord], soup: BeautifulSoup) -> Tuple[int, bool]:
    total = sum(r.value or 0 for r in records)
    if total:
        return total, False
    total = fallback_total(soup)
    log.info("structured scan summed to zero, fallback total=%d", total)
    return total, True


def run_pipeline(soup: BeautifulSoup) -> PipelineResult:
    found: List[ExtractionRecord] = []
    # markup first so its records win deduplication
    found.extend(scan_page_markup(soup))
    found.extend(scan_json_blobs(soup))
    deduped = dedupe_records(found)
    total, used_fallback = aggregate(deduped, soup)
    log.debug("pipeline: %d raw, %d deduped, total=%d", len(found), len(deduped), total)
    return PipelineResult(total=total, records=deduped, fallback=used_fallback)
