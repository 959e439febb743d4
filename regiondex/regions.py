"""Region catalog: fixed, contiguous id ranges that partition the dataset."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class RegionBounds:
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 1 or self.start > self.end:
            raise ValueError(f"invalid region bounds {self.start}-{self.end}")

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    def contains(self, pokemon_id: int) -> bool:
        return self.start <= pokemon_id <= self.end

    def ids(self) -> range:
        return range(self.start, self.end + 1)

    def label(self) -> str:
        return f"#{self.start}-{self.end}"


REGIONS: Dict[str, RegionBounds] = {
    "kanto": RegionBounds(1, 151),
    "johto": RegionBounds(152, 251),
    "hoenn": RegionBounds(252, 386),
}

REGION_LABELS: Dict[str, str] = {
    "kanto": "Generation I · Kanto (#1-151)",
    "johto": "Generation II · Johto (#152-251)",
    "hoenn": "Generation III · Hoenn (#252-386)",
}

DEFAULT_REGION = next(iter(REGIONS))


def region_keys() -> List[str]:
    return list(REGIONS)


def normalize_region(region_key: str | None) -> str:
    key = (region_key or "").strip().lower()
    return key if key in REGIONS else DEFAULT_REGION


def bounds_for(region_key: str | None) -> RegionBounds:
    return REGIONS[normalize_region(region_key)]


def ids_for(region_key: str | None) -> range:
    return bounds_for(region_key).ids()


def region_label(region_key: str | None) -> str:
    key = normalize_region(region_key)
    return REGION_LABELS.get(key, key.title())
