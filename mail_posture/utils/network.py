from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class QueryLedgerEntry:
    timestamp: str
    query_name: str
    record_type: str
    success: bool
    error: str | None = None
    error_kind: str | None = None
    answers: int = 0
    duration_ms: int = 0


@dataclass
class QueryLedger:
    entries: list[QueryLedgerEntry] = field(default_factory=list)

    def add(self, **kwargs: Any) -> None:
        self.entries.append(QueryLedgerEntry(timestamp=datetime.now(timezone.utc).isoformat(), **kwargs))

    def to_dict(self) -> dict[str, Any]:
        return {"entries": [e.__dict__ for e in self.entries], "totals": self.totals()}

    def totals(self) -> dict[str, Any]:
        counts = defaultdict(int)
        failures = defaultdict(int)
        duration_ms = 0
        for entry in self.entries:
            counts[entry.record_type] += 1
            if not entry.success:
                failures[entry.error_kind or "error"] += 1
            duration_ms += entry.duration_ms
        return {
            "counts": dict(counts),
            "failures": dict(failures),
            "duration_ms": duration_ms,
            "total_entries": len(self.entries),
        }
