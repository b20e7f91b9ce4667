"""Domain models for search results and facet counts.

Pure value objects, independent of the HTTP transport and the backend's
JSON envelope.  All dataclasses use frozen=True for immutability.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# ---------------------------------------------------------------------------
# Facets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FacetValue:
    name: str
    count: int


@dataclass(frozen=True)
class FacetCategory:
    """One facet field with its display label and value counts.

    Values keep the order the backend returned them in.
    """

    field: str
    display_name: str
    values: tuple[FacetValue, ...]


# ---------------------------------------------------------------------------
# Search results
# ---------------------------------------------------------------------------

LatLng = tuple[float, float]
Bounds = tuple[LatLng, LatLng]


@dataclass(frozen=True)
class SearchResultItem:
    """A catalog record reduced to what the result list displays."""

    id: str
    title: str
    format: str
    description: str
    thumbnail: str
    bounds: Bounds | None = None
    format_type: str | None = None
    format_category: str | None = None
    bytes: int | None = None
    modified: str | None = None
    keywords: tuple[str, ...] = ()
    country: str | None = None
    agency: str | None = None
    acquisition_date: str | None = None
    publish_date: str | None = None
    geometry_type: str | None = None
    download: str | None = None
    fullpath: str | None = None


@dataclass(frozen=True)
class SearchResponse:
    """Paginated result set plus any facet counts that came with it."""

    num_found: int
    start: int
    items: tuple[SearchResultItem, ...] = ()
    facets: tuple[FacetCategory, ...] = ()

    @property
    def has_more(self) -> bool:
        return self.start + len(self.items) < self.num_found

    @property
    def next_start(self) -> int:
        return self.start + len(self.items)


# ---------------------------------------------------------------------------
# Gazetteer
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GazetteerResult:
    """A place name resolved to a GeoJSON-style geometry."""

    name: str
    geo: dict[str, Any]


__all__ = [
    "FacetValue",
    "FacetCategory",
    "SearchResultItem",
    "SearchResponse",
    "GazetteerResult",
    "Bounds",
]
