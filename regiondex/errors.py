"""
Error taxonomy for RegionDex and the user-facing text for each category.

Validation and region checks raise before any remote call is made. Remote
failures surface as DataSourceError subclasses and are mapped to a message at
the operation boundary with user_message().
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .regions import RegionBounds

MESSAGES = {
    "validation": "Please enter a valid search term (letters, numbers, or spaces).",
    "network": "Network error. Please check your connection.",
    "not_found": "Pokemon not found. Please try a different search term.",
    "unknown": "An unexpected error occurred. Please try again.",
}


class CatalogError(Exception):
    """Base class for every error raised by the catalog core."""


class ValidationError(CatalogError):
    pass


class OutOfRegionError(CatalogError):
    def __init__(self, query: str, bounds: "RegionBounds", region: str = "") -> None:
        self.query = query
        self.bounds = bounds
        self.region = region
        super().__init__(f"{query!r} is outside region {region or '?'} ({bounds.label()})")

    def user_message(self) -> str:
        region = self.region.title() or "current"
        if self.query.strip().isdigit():
            return (
                f"Pokemon #{int(self.query)} is not available in the {region} region. "
                f"Please search for Pokemon {self.bounds.label()}."
            )
        return (
            f'Pokemon "{self.query}" is not available in the {region} region. '
            f"Please search for Pokemon {self.bounds.label()}."
        )


class DataSourceError(CatalogError):
    """A remote call failed."""


class NotFoundError(DataSourceError):
    def __init__(self, query: object) -> None:
        self.query = query
        super().__init__(f"not found: {query}")


class NetworkError(DataSourceError):
    pass


class InvalidRecordError(NetworkError):
    """A response decoded fine but does not have the shape of a record."""


def user_message(exc: BaseException) -> str:
    if isinstance(exc, ValidationError):
        return MESSAGES["validation"]
    if isinstance(exc, OutOfRegionError):
        return exc.user_message()
    if isinstance(exc, NotFoundError):
        return MESSAGES["not_found"]
    if isinstance(exc, NetworkError):
        return MESSAGES["network"]
    return MESSAGES["unknown"]
