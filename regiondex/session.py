"""
BrowsingSession: the single owner of pagination and search-mode state.

A session is scoped to one region. Selecting a region resets everything and
loads the first page. Every reset bumps ``generation``; a page load that
notices the generation moved on while it was fetching stops and discards
what it fetched, so results for an old region never land in a new one.
"""
from __future__ import annotations

import enum
import logging
from typing import List, Tuple

from .config import PAGE_SIZE
from .datasource import DataSource, fetch_sequentially
from .errors import InvalidRecordError
from .models import Record, SearchOutcome
from .navigator import DetailNavigator
from .regions import DEFAULT_REGION, RegionBounds, bounds_for, normalize_region
from .search import SearchResolver

logger = logging.getLogger(__name__)


class Mode(enum.Enum):
    LISTING = "listing"
    SEARCHING = "searching"


class BrowsingSession:
    def __init__(
        self,
        source: DataSource,
        region: str = DEFAULT_REGION,
        page_size: int = PAGE_SIZE,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.source = source
        self.page_size = page_size
        self.region = normalize_region(region)
        self.bounds: RegionBounds = bounds_for(self.region)
        self.offset = 0
        self.loaded_records: List[Record] = []
        self.mode = Mode.LISTING
        self.search_outcome: SearchOutcome | None = None
        self.generation = 0
        self.loading = False

    @property
    def total(self) -> int:
        return self.bounds.size

    @property
    def has_more(self) -> bool:
        return self.offset < self.total

    @property
    def displayed_records(self) -> Tuple[Record, ...]:
        if self.mode is Mode.SEARCHING and self.search_outcome is not None:
            return self.search_outcome.records
        return tuple(self.loaded_records)

    def _reset(self) -> None:
        self.generation += 1
        self.offset = 0
        self.loaded_records = []
        self.loading = False

    def select_region(self, region: str) -> bool:
        self.region = normalize_region(region)
        self.bounds = bounds_for(self.region)
        self.mode = Mode.LISTING
        self.search_outcome = None
        self._reset()
        logger.info("Selected region %s (%s)", self.region, self.bounds.label())
        return self.load_next_page()

    def load_next_page(self) -> bool:
        """Fetch the next page of ids; returns whether more pages remain.

        No-op while searching, while another load is in flight, or once the
        region is exhausted. Records that fail shape validation are dropped
        but still count as consumed id slots. Any other fetch failure keeps
        what was appended so far, moves ``offset`` past those ids and
        re-raises.
        """
        if self.mode is not Mode.LISTING or self.loading or not self.has_more:
            return self.has_more

        generation = self.generation
        start = self.offset
        end = min(start + self.page_size, self.total)
        page_ids = self.bounds.ids()[start:end]
        self.loading = True
        try:
            results = fetch_sequentially(self.source.fetch_by_id, page_ids)
            for position, (pokemon_id, record, error) in enumerate(results):
                if generation != self.generation:
                    logger.info("Discarding stale page result for #%d", pokemon_id)
                    return self.has_more
                if error is None:
                    self.loaded_records.append(record)
                elif isinstance(error, InvalidRecordError):
                    logger.warning("Dropping malformed record #%d: %s", pokemon_id, error)
                else:
                    self.offset = start + position
                    logger.error("Page load stopped at #%d: %s", pokemon_id, error)
                    raise error
            self.offset = end
        finally:
            if generation == self.generation:
                self.loading = False
        return self.has_more

    def enter_search_mode(self, outcome: SearchOutcome) -> None:
        self.mode = Mode.SEARCHING
        self.search_outcome = outcome

    def exit_search_mode(self) -> Tuple[Record, ...]:
        self.mode = Mode.LISTING
        self.search_outcome = None
        if not self.loaded_records:
            self._reset()
            self.load_next_page()
        return self.displayed_records

    def search(self, query: str) -> SearchOutcome:
        generation = self.generation
        outcome = SearchResolver(self.source, self.region).resolve(query, self.bounds)
        if generation != self.generation:
            logger.info("Region changed during search for %r; not displaying results", query)
            return outcome
        self.enter_search_mode(outcome)
        return outcome

    def open_detail(self, record: Record) -> DetailNavigator:
        navigator = DetailNavigator(self.displayed_records)
        navigator.open(record)
        return navigator
