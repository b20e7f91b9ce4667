"""Reusable FastAPI dependencies for search filter/sort/page parsing.

Extracts the filter query parameters into shared Depends() functions so
that the search and facet endpoints build the same FilterState, and
therefore byte-identical ``fq`` fragments, for the same request.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import HTTPException, Query

from geosearch.config import settings
from geosearch.config.search_config import date_field_names
from geosearch.domain.common.query import (
    BoundingBox,
    FilterState,
    PageSpec,
    SortOrder,
    SortSpec,
    SpatialOperator,
)
from geosearch.infra.query.facet_parser import FACET_FIELDS
from geosearch.infra.query.filter_query import build_since_date


# ---------------------------------------------------------------------------
# Small parsers
# ---------------------------------------------------------------------------


def split_csv(value: Optional[str]) -> tuple[str, ...]:
    """``"a, b,,c"`` -> ``("a", "b", "c")``."""
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def parse_bbox_param(value: Optional[str]) -> Optional[BoundingBox]:
    """Parse ``west,south,east,north``; anything malformed is ignored."""
    parts = split_csv(value)
    if len(parts) != 4:
        return None
    try:
        west, south, east, north = (float(p) for p in parts)
    except ValueError:
        return None
    return BoundingBox(west=west, south=south, east=east, north=north)


def parse_facet_selections(values: Optional[List[str]]) -> dict[str, tuple[str, ...]]:
    """Group repeated ``field:value`` parameters by field, keeping order."""
    grouped: dict[str, list[str]] = {}
    for raw in values or ():
        field_name, sep, value = raw.partition(":")
        field_name, value = field_name.strip(), value.strip()
        if not sep or not field_name or not value:
            continue
        bucket = grouped.setdefault(field_name, [])
        if value not in bucket:
            bucket.append(value)
    return {k: tuple(v) for k, v in grouped.items()}


# ---------------------------------------------------------------------------
# Filter parsing dependency
# ---------------------------------------------------------------------------


def parse_search_filters(
    # Free text
    q: Optional[str] = Query(None, description="Free-text query"),
    # Location tree selection
    location_ids: Optional[str] = Query(None, description="Selected location IDs (comma-separated)"),
    # Keywords and property flags
    keywords: Optional[str] = Query(None, description="Keywords (comma-separated)"),
    properties: Optional[str] = Query(None, description="Property filter IDs (comma-separated)"),
    # Date range
    date_field: str = Query("modified", description="Date field to filter on"),
    date_from: Optional[date] = Query(None, description="Start date (YYYY-MM-DD)"),
    date_to: Optional[date] = Query(None, description="End date (YYYY-MM-DD)"),
    since_value: Optional[int] = Query(None, ge=0, description="Relative start: amount"),
    since_unit: Optional[str] = Query(None, description="Relative start: days, weeks, months or years"),
    # Spatial
    place: Optional[str] = Query(None, description="Place name"),
    bbox: Optional[str] = Query(None, description="Bounding box west,south,east,north"),
    place_op: SpatialOperator = Query(SpatialOperator.WITHIN, description="within or intersects"),
    # Facet drill-down
    facet: Optional[List[str]] = Query(None, description="Facet selection as field:value (repeatable)"),
) -> FilterState:
    """Build a FilterState from HTTP query parameters.

    Field names end up verbatim in ``fq`` fragments, so only the
    configured date fields and the known facet fields are accepted.
    """
    if date_field not in date_field_names():
        raise HTTPException(status_code=422, detail=f"Unknown date field: {date_field!r}")
    facet_selections = parse_facet_selections(facet)
    unknown = sorted(set(facet_selections) - set(FACET_FIELDS))
    if unknown:
        raise HTTPException(status_code=422, detail=f"Unknown facet field: {unknown[0]!r}")

    f = FilterState()

    f.with_text(q)
    f.add_locations(split_csv(location_ids))
    f.add_keywords(split_csv(keywords))
    f.add_properties(split_csv(properties))

    # A relative "since" window replaces an explicit start date
    if since_value is not None and since_unit:
        since = build_since_date(since_value, since_unit)
        if since is not None:
            date_from, date_to = since, None
    f.set_date_range(date_from, date_to, field_name=date_field)

    f.set_spatial(place=place, bbox=parse_bbox_param(bbox), op=place_op)

    for field_name, values in facet_selections.items():
        f.add_facet_selection(field_name, values)

    return f


# ---------------------------------------------------------------------------
# Sort parsing dependency
# ---------------------------------------------------------------------------


def parse_search_sort(
    sort: str = Query(settings.default_sort, description="Sort as '<field> <asc|desc>'"),
) -> SortSpec:
    """Build a SortSpec from HTTP query parameters."""
    field_name, _, order = sort.strip().partition(" ")
    order_enum = SortOrder.ASC if order.strip().lower() == "asc" else SortOrder.DESC
    return SortSpec(field=field_name or "score", order=order_enum)


# ---------------------------------------------------------------------------
# Pagination parsing dependency
# ---------------------------------------------------------------------------


def parse_page_spec(
    start: int = Query(0, ge=0, description="Result offset"),
    rows: int = Query(settings.default_page_size, ge=0, le=settings.max_page_size, description="Results per page"),
) -> PageSpec:
    """Build a PageSpec from HTTP query parameters."""
    return PageSpec(start=start, rows=rows, max_rows=settings.max_page_size)
