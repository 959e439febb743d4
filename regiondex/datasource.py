"""
The DataSource contract the core consumes, and the fetch strategy it uses.

fetch_sequentially() is the single place where per-id fetching is iterated.
Pagination and the fuzzy scan both go through it, so result order is always
ascending id order no matter how the fetching itself is done.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, Optional, Protocol, Tuple

from .errors import DataSourceError
from .models import ChainLink, Record, SpeciesDescriptor

logger = logging.getLogger(__name__)


class DataSource(Protocol):
    def fetch_by_id(self, pokemon_id: int) -> Record: ...

    def fetch_by_name(self, name: str) -> Record: ...

    def fetch_species(self, pokemon_id: int) -> SpeciesDescriptor: ...

    def fetch_evolution_chain(self, url: str) -> ChainLink: ...


FetchResult = Tuple[int, Optional[Record], Optional[DataSourceError]]


def fetch_sequentially(
    fetch: Callable[[int], Record],
    ids: Iterable[int],
) -> Iterator[FetchResult]:
    """Fetch each id in order, one request at a time.

    Yields ``(id, record, None)`` on success and ``(id, None, error)`` when the
    fetch raised a DataSourceError. The next fetch only starts once the caller
    has consumed the previous result, so a consumer can stop early by breaking
    out of the loop.
    """
    for pokemon_id in ids:
        try:
            record = fetch(pokemon_id)
        except DataSourceError as exc:
            logger.debug("Fetch of #%d failed: %s", pokemon_id, exc)
            yield pokemon_id, None, exc
            continue
        yield pokemon_id, record, None
