"""Most-recent-first search history."""
from __future__ import annotations

from typing import List

from .config import MAX_HISTORY


class SearchHistory:
    def __init__(self, limit: int = MAX_HISTORY) -> None:
        self.limit = max(1, limit)
        self._entries: List[str] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    def add(self, query: str) -> None:
        query = query.strip()
        if not query:
            return
        lowered = query.lower()
        self._entries = [q for q in self._entries if q.lower() != lowered]
        self._entries.insert(0, query)
        if len(self._entries) > self.limit:
            self._entries = self._entries[: self.limit]

    def clear(self) -> None:
        self._entries = []
