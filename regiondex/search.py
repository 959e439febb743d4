"""
Search resolution: turn a raw query into matching records.

Queries are classified first (numeric id, short name, long name) and each kind
has its own lookup policy. Names of three or more characters always go
through the fuzzy scan; shorter names try an exact lookup first.
"""
from __future__ import annotations

import enum
import logging
import re
from typing import List

from .datasource import DataSource, fetch_sequentially
from .errors import DataSourceError, NotFoundError, OutOfRegionError, ValidationError
from .models import Record, SearchOutcome
from .regions import RegionBounds

logger = logging.getLogger(__name__)

VALID_QUERY_RE = re.compile(r"^[a-zA-Z0-9 \t-]+$")
NUMERIC_QUERY_RE = re.compile(r"^\d+$")
DISALLOWED_RE = re.compile(r"[^a-z0-9 \t-]")
FUZZY_MIN_LENGTH = 3


class QueryKind(enum.Enum):
    NUMERIC_ID = "numeric_id"
    SHORT_NAME = "short_name"
    LONG_NAME = "long_name"


def is_valid_query(query: str | None) -> bool:
    return bool(query and query.strip() and VALID_QUERY_RE.fullmatch(query))


def sanitize_term(query: str) -> str:
    return DISALLOWED_RE.sub("", query.lower().strip())


def classify_query(query: str) -> QueryKind:
    if NUMERIC_QUERY_RE.match(query.strip()):
        return QueryKind.NUMERIC_ID
    if len(sanitize_term(query)) >= FUZZY_MIN_LENGTH:
        return QueryKind.LONG_NAME
    return QueryKind.SHORT_NAME


class SearchResolver:
    def __init__(self, source: DataSource, region: str = "") -> None:
        self.source = source
        self.region = region

    def resolve(self, query: str, bounds: RegionBounds) -> SearchOutcome:
        if not is_valid_query(query):
            raise ValidationError(f"invalid search query: {query!r}")
        original = query.strip()
        kind = classify_query(original)
        logger.debug("Resolving %r as %s in %s", original, kind.name, bounds.label())

        if kind is QueryKind.NUMERIC_ID:
            return SearchOutcome.of(original, [self._by_id(original, bounds)])
        term = sanitize_term(original)
        if kind is QueryKind.LONG_NAME:
            return SearchOutcome.of(original, self.fuzzy_scan(term, bounds, original))
        if kind is QueryKind.SHORT_NAME:
            return SearchOutcome.of(original, self._by_short_name(term, bounds, original))
        raise AssertionError(f"unhandled query kind {kind}")

    def _by_id(self, query: str, bounds: RegionBounds) -> Record:
        pokemon_id = int(query)
        if not bounds.contains(pokemon_id):
            raise OutOfRegionError(query, bounds, self.region)
        return self.source.fetch_by_id(pokemon_id)

    def _by_short_name(self, term: str, bounds: RegionBounds, query: str) -> List[Record]:
        try:
            record = self.source.fetch_by_name(term)
        except DataSourceError as exc:
            logger.info("Exact lookup of %r failed (%s), falling back to fuzzy scan", term, exc)
            return self.fuzzy_scan(term, bounds, query)
        if not bounds.contains(record.id):
            raise OutOfRegionError(query, bounds, self.region)
        return [record]

    def fuzzy_scan(self, term: str, bounds: RegionBounds, query: str | None = None) -> List[Record]:
        needle = term.lower()
        matches: List[Record] = []
        for pokemon_id, record, error in fetch_sequentially(self.source.fetch_by_id, bounds.ids()):
            if error is not None:
                logger.warning("Could not fetch Pokemon %d during scan: %s", pokemon_id, error)
                continue
            if needle in record.name.lower():
                matches.append(record)
        if not matches:
            raise NotFoundError(query if query is not None else term)
        return matches
