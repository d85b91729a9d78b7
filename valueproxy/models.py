from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal, Optional

Source = Literal["markup", "embedded-json"]

LABEL_LIMIT = 140


@dataclass(frozen=True)
class ExtractionRecord:
    """One observed (label, value) pair and where it came from."""
    source: Source
    provenance: str
    label: str
    value: int
    key: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value < 0:
            raise ValueError(f"record value must be a non-negative int, got {self.value!r}")
        if len(self.label) > LABEL_LIMIT:
            object.__setattr__(self, "label", self.label[:LABEL_LIMIT])

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        if d["key"] is None:
            d.pop("key")
        return d


@dataclass
class PlayerPage:
    status: int
    url: str
    html: str
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class PipelineResult:
    total: int
    records: List[ExtractionRecord]
    method: str = "scan-wide"
    fallback: bool = False

    def diagnostics(self, limit: int = 40) -> Dict[str, Any]:
        return {
            "method": self.method,
            "count": len(self.records),
            "items": [r.to_dict() for r in self.records[:limit]],
        }


@dataclass
class CacheEntry:
    value: int
    timestamp: float
    origin: str
    diagnostics: Optional[Dict[str, Any]] = None
