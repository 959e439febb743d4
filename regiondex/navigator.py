"""Cyclic prev/next navigation over the currently displayed records."""
from __future__ import annotations

from typing import Sequence, Tuple

from .models import Record


class DetailNavigator:
    def __init__(self, records: Sequence[Record]) -> None:
        if not records:
            raise ValueError("cannot navigate an empty record sequence")
        self.records: Tuple[Record, ...] = tuple(records)
        self.index = 0

    def __len__(self) -> int:
        return len(self.records)

    @property
    def current(self) -> Record:
        return self.records[self.index]

    @property
    def position_label(self) -> str:
        return f"{self.index + 1} / {len(self.records)}"

    def open(self, record: Record) -> int:
        self.index = next(
            (idx for idx, candidate in enumerate(self.records) if candidate.id == record.id),
            0,
        )
        return self.index

    def navigate(self, direction: int) -> Record:
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction!r}")
        self.index = (self.index + direction) % len(self.records)
        return self.current
