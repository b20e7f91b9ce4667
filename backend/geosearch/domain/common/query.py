"""Filter, sort, and pagination specifications for search queries.

These types express query intent in domain terms, independent of the
search backend.  Adapters in ``geosearch.infra.query`` translate them
into Solr-style filter-query fragments and request parameters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SpatialOperator(str, Enum):
    """How a place or bounding box constrains results."""

    WITHIN = "within"
    INTERSECTS = "intersects"


class SinceUnit(str, Enum):
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


# ---------------------------------------------------------------------------
# Individual Filter Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DateRangeFilter:
    """Inclusive calendar-day range on a single date field."""

    field: str = "modified"
    date_from: date | None = None
    date_to: date | None = None

    def is_empty(self) -> bool:
        return self.date_from is None and self.date_to is None


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in degrees, as drawn on the map."""

    west: float
    south: float
    east: float
    north: float

    def to_param(self) -> str:
        return f"{_fmt_coord(self.west)},{_fmt_coord(self.south)},{_fmt_coord(self.east)},{_fmt_coord(self.north)}"


@dataclass(frozen=True)
class SpatialFilter:
    """Place name or drawn bounding box paired with a spatial operator."""

    place: str | None = None
    bbox: BoundingBox | None = None
    op: SpatialOperator = SpatialOperator.WITHIN

    def is_empty(self) -> bool:
        return not self.place and self.bbox is None


def _fmt_coord(value: float) -> str:
    # repr() keeps full precision; strip a trailing ".0" so 10.0 -> "10"
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


# ---------------------------------------------------------------------------
# Composite Specifications
# ---------------------------------------------------------------------------


@dataclass
class FilterState:
    """Holds all active filters.  Mutable for builder-pattern construction.

    Builder methods return ``self`` for fluent chaining and silently
    skip empty / None values so callers don't need guard clauses.
    ``location_ids`` is the raw selection; it is expanded through the
    hierarchy when fragments are built.
    """

    text: str = ""
    location_ids: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    properties: tuple[str, ...] = ()
    date_range: DateRangeFilter | None = None
    spatial: SpatialFilter | None = None
    facet_selections: dict[str, tuple[str, ...]] = field(default_factory=dict)

    # -- Builder helpers ---------------------------------------------------

    def with_text(self, text: str | None) -> FilterState:
        self.text = (text or "").strip()
        return self

    def add_locations(self, ids: list[str] | tuple[str, ...] | None) -> FilterState:
        if ids:
            self.location_ids = _merge(self.location_ids, ids)
        return self

    def add_keywords(self, keywords: list[str] | tuple[str, ...] | None) -> FilterState:
        if keywords:
            self.keywords = _merge(self.keywords, keywords)
        return self

    def add_properties(self, properties: list[str] | tuple[str, ...] | None) -> FilterState:
        if properties:
            self.properties = _merge(self.properties, properties)
        return self

    def set_date_range(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
        field_name: str = "modified",
    ) -> FilterState:
        if date_from is not None or date_to is not None:
            self.date_range = DateRangeFilter(
                field=field_name, date_from=date_from, date_to=date_to
            )
        return self

    def set_spatial(
        self,
        place: str | None = None,
        bbox: BoundingBox | None = None,
        op: SpatialOperator = SpatialOperator.WITHIN,
    ) -> FilterState:
        spatial = SpatialFilter(place=place or None, bbox=bbox, op=op)
        if not spatial.is_empty():
            self.spatial = spatial
        return self

    def add_facet_selection(
        self, field_name: str, values: list[str] | tuple[str, ...] | None
    ) -> FilterState:
        if values:
            current = self.facet_selections.get(field_name, ())
            self.facet_selections[field_name] = _merge(current, values)
        return self

    def is_empty(self) -> bool:
        return not (
            self.text
            or self.location_ids
            or self.keywords
            or self.properties
            or (self.date_range is not None and not self.date_range.is_empty())
            or (self.spatial is not None and not self.spatial.is_empty())
            or any(self.facet_selections.values())
        )


def _merge(current: tuple[str, ...], extra) -> tuple[str, ...]:
    seen = list(current)
    for value in extra:
        if value and value not in seen:
            seen.append(value)
    return tuple(seen)


@dataclass(frozen=True)
class SortSpec:
    """Sort directive; ``score desc`` is relevance order."""

    field: str = "score"
    order: SortOrder = SortOrder.DESC

    def to_param(self) -> str:
        return f"{self.field} {self.order.value}"


@dataclass
class PageSpec:
    """Offset pagination with validation."""

    start: int = 0
    rows: int = 48
    max_rows: int = 100

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"start must be >= 0, got {self.start}")
        if not (0 <= self.rows <= self.max_rows):
            raise ValueError(f"rows must be 0-{self.max_rows}, got {self.rows}")

    def next_page(self) -> PageSpec:
        return PageSpec(start=self.start + self.rows, rows=self.rows, max_rows=self.max_rows)


@dataclass
class QuerySpec:
    """Complete query = filters + sort + pagination."""

    filters: FilterState = field(default_factory=FilterState)
    sort: SortSpec = field(default_factory=SortSpec)
    page: PageSpec = field(default_factory=PageSpec)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "SortOrder",
    "SpatialOperator",
    "SinceUnit",
    "DateRangeFilter",
    "BoundingBox",
    "SpatialFilter",
    "FilterState",
    "SortSpec",
    "PageSpec",
    "QuerySpec",
]
