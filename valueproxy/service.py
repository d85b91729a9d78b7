from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from .models import CacheEntry, PlayerPage
from .parsers.pipeline import load_document, run_pipeline
from .state.cache import ValueCache, cache_key
from .utils.logging import setup_logging

setup_logging()
log = logging.getLogger("valueproxy.service")

Fetch = Callable[[str], Awaitable[PlayerPage]]


class UpstreamError(Exception):
    """The profile page could not be fetched; never cached."""

    def __init__(self, message: str, status: Optional[int] = None, reason: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.reason = reason

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"error": self.message}
        if self.reason is not None:
            out["reason"] = self.reason
        else:
            out["status"] = self.status
        return out


@dataclass
class ValueResult:
    total: int
    source: str
    diagnostics: Optional[Dict[str, Any]] = None
    cached: bool = False


async def estimate_value(
    user_id: str,
    *,
    fetch: Fetch,
    store: ValueCache,
    nocache: bool = False,
    debug_items_limit: int = 40,
) -> ValueResult:
    key = cache_key(user_id)
    if not nocache:
        hit = store.get(key)
        if hit is not None:
            log.info("cache hit %s (age %.0fs)", key, store.age(key) or 0)
            return ValueResult(hit.value, hit.origin or "cache", hit.diagnostics, cached=True)

    try:
        page = await fetch(user_id)
    except Exception as e:
        # transport errors, timeouts, bad URLs; nothing is cached
        log.warning("fetch failed for %s: %s", user_id, e)
        raise UpstreamError("Fetch failed", reason=str(e) or e.__class__.__name__) from e
    if page is None or page.status != 200:
        status = page.status if page is not None else None
        log.warning("profile page for %s returned %s", user_id, status)
        raise UpstreamError("Failed to fetch profile page", status=status)

    result = run_pipeline(load_document(page.html))
    diagnostics = result.diagnostics(debug_items_limit)
    store.set(key, CacheEntry(value=result.total, timestamp=store.now(), origin=page.url, diagnostics=diagnostics))
    log.info("user %s: total=%d from %d records%s", user_id, result.total, len(result.records),
             " (fallback)" if result.fallback else "")
    return ValueResult(result.total, page.url, diagnostics)
