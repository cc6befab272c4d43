from __future__ import annotations

import json
import threading
from collections import deque
from datetime import datetime, timezone
from typing import List


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SearchHistory:
    """Bounded, thread-safe log of recent search queries"""

    def __init__(self, limit: int = 100):
        self.limit = limit
        self._entries: deque[str] = deque(maxlen=limit)
        self._lock = threading.Lock()

    def add(self, query: str) -> None:
        with self._lock:
            self._entries.append(f"[{_now()}] {query}")

    def entries(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def to_json(self) -> str:
        items = self.entries()
        return json.dumps(
            {"searchHistory": items, "totalSearches": len(items), "timestamp": _now()},
            ensure_ascii=False,
            indent=2,
        )
