from __future__ import annotations

import re
from typing import Any, Optional

# digit followed by at least one more digit/grouping/space character
NUMBER_TOKEN_RE = re.compile(r"[0-9][0-9,.\s\u00a0]{1,}")

_JUNK_RE = re.compile(r"[^0-9,.\s\u00a0]")
_SPACE_RE = re.compile(r"[\s\u00a0]+")
_NON_DIGIT_RE = re.compile(r"[^0-9]")
# longest digit run that still fits a finite double
MAX_DIGITS = 309


def parse_number_token(token: Any) -> Optional[int]:
    """
    "25,000" -> 25000, "1.234.567" -> 1234567, "12.5" -> 125.
    Commas are always grouping; periods too once there are several of them.
    Quantities here are whole numbers, so a lone period is simply dropped.
    """
    if not token or not isinstance(token, str):
        return None
    cleaned = _JUNK_RE.sub("", token).strip()
    if not cleaned:
        return None
    tmp = _SPACE_RE.sub("", cleaned).replace(",", "")
    if tmp.count(".") > 1:
        tmp = tmp.replace(".", "")
    digits = _NON_DIGIT_RE.sub("", tmp)
    if not digits or len(digits) > MAX_DIGITS:
        return None
    return int(digits)


def looks_numeric(text: str) -> bool:
    return bool(NUMBER_TOKEN_RE.search(text or ""))
