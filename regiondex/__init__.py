"""Region-scoped PokéAPI catalog browser: paging, search and evolution lineage."""

from .errors import (
    CatalogError,
    DataSourceError,
    InvalidRecordError,
    NetworkError,
    NotFoundError,
    OutOfRegionError,
    ValidationError,
    user_message,
)
from .evolution import EvolutionChain, EvolutionNode, EvolutionStage, EvolutionTreeResolver
from .history import SearchHistory
from .models import ChainLink, Record, SearchOutcome, SpeciesDescriptor
from .navigator import DetailNavigator
from .regions import RegionBounds, bounds_for, ids_for
from .search import QueryKind, SearchResolver, classify_query
from .session import BrowsingSession, Mode

__all__ = [
    "BrowsingSession",
    "CatalogError",
    "ChainLink",
    "DataSourceError",
    "DetailNavigator",
    "EvolutionChain",
    "EvolutionNode",
    "EvolutionStage",
    "EvolutionTreeResolver",
    "InvalidRecordError",
    "Mode",
    "NetworkError",
    "NotFoundError",
    "OutOfRegionError",
    "QueryKind",
    "Record",
    "RegionBounds",
    "SearchHistory",
    "SearchOutcome",
    "SearchResolver",
    "SpeciesDescriptor",
    "ValidationError",
    "bounds_for",
    "classify_query",
    "ids_for",
    "user_message",
]
