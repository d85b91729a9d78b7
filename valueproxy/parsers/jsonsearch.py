from __future__ import annotations

import math
import re
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from ..models import ExtractionRecord, LABEL_LIMIT
from .numbers import looks_numeric, parse_number_token

PRICE_KEY_RE = re.compile(r"price|value|robux|cost", re.I)


def _label(obj: Dict[str, Any], keys: Sequence[str]) -> str:
    for k in keys:
        v = obj.get(k)
        if v:
            return str(v)[:LABEL_LIMIT]
    return ""


def _is_number(v: Any) -> bool:
    if isinstance(v, bool):
        return False
    return isinstance(v, int) or (isinstance(v, float) and math.isfinite(v))


def _round_half_up(v) -> int:
    if isinstance(v, int):
        return v
    return int(math.floor(v + 0.5))


def _children(node: Any) -> Iterator[Tuple[Optional[Dict[str, Any]], Optional[str], Any]]:
    """Yield (owning object, key, value); key is None for list members."""
    if isinstance(node, dict):
        for k, v in node.items():
            yield node, str(k), v
    elif isinstance(node, list):
        for v in node:
            yield None, None, v


def search_json(value: Any, context: str) -> List[ExtractionRecord]:
    """
    Walk a decoded JSON tree depth-first, in document order, and collect
    price-like quantities. Uses an explicit stack so deeply nested payloads
    can't hit the recursion limit.
    """
    out: List[ExtractionRecord] = []

    def emit(obj, key, n, label_keys):
        out.append(ExtractionRecord(
            source="embedded-json", provenance=context,
            label=_label(obj, label_keys), value=n, key=key,
        ))

    stack = [_children(value)]
    while stack:
        try:
            obj, key, v = next(stack[-1])
        except StopIteration:
            stack.pop()
            continue

        nested = isinstance(v, (dict, list))
        if key is None:
            # list members are only walked into
            if nested:
                stack.append(_children(v))
            continue

        if PRICE_KEY_RE.search(key):
            if _is_number(v):
                if v >= 0:
                    emit(obj, key, _round_half_up(v), ("name", "title", "Name"))
            elif isinstance(v, str):
                n = parse_number_token(v)
                if n is not None:
                    emit(obj, key, n, ("name", "title"))
            elif nested:
                stack.append(_children(v))
        elif nested:
            stack.append(_children(v))
        elif isinstance(v, str) and looks_numeric(v):
            # incidental numbers need to be positive to count
            n = parse_number_token(v)
            if n is not None and n > 0:
                emit(obj, key, n, ("name",))
    return out
