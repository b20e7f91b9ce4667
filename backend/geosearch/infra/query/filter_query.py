"""Solr filter-query fragment builders.

Translates typed filter inputs into ``fq`` fragment strings for the
Voyager backend.  Every function here is pure and total: empty, missing
or malformed input yields ``None`` / ``[]`` rather than an exception, and
equal inputs always produce byte-identical output.

Grammar produced:

* containment   ``field:("v1" OR "v2")``
* existence     ``field:*``
* date range    ``field:[2024-01-01T00:00:00.000Z TO *]``
* facet tag     ``{!tag=field}field:("v1")``
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone
from typing import Iterable, Mapping, Sequence

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from geosearch.domain.common.query import BoundingBox, SinceUnit, SpatialOperator
from geosearch.domain.locations.catalog import LocationMapping

logger = logging.getLogger(__name__)

# ── Static predicate tables ─────────────────────────────────────────────

# Property toggles → backend predicates.  Unknown property IDs are dropped.
PROPERTY_FILTERS: dict[str, str] = {
    "has_thumbnail": 'format_category:("GIS" OR "Image" OR "Map" OR "Document")',
    "has_spatial": "geometry_type:*",
    "has_temporal": "fi_year:*",
    "is_downloadable": 'format_type:("File" OR "Dataset" OR "Record" OR "Layer")',
}

DEFAULT_KEYWORD_FIELD = "keywords"
DEFAULT_DATE_FIELD = "modified"

_START_OF_DAY = time(0, 0, 0, 0)
_END_OF_DAY = time(23, 59, 59, 999000)

_SINCE_DELTAS = {
    SinceUnit.DAYS: lambda n: relativedelta(days=n),
    SinceUnit.WEEKS: lambda n: relativedelta(weeks=n),
    SinceUnit.MONTHS: lambda n: relativedelta(months=n),
    SinceUnit.YEARS: lambda n: relativedelta(years=n),
}


# ── Primitives ──────────────────────────────────────────────────────────


def escape_query_value(value: object) -> str:
    """Quote a literal for use inside a containment clause."""
    text = str(value).replace('"', '\\"')
    return f'"{text}"'


def _clean_values(values: Iterable[object] | None) -> list[str]:
    """Drop empties and duplicates, keeping first-seen order."""
    if not values or isinstance(values, (str, bytes)):
        return []
    seen: dict[str, None] = {}
    for value in values:
        if value is None:
            continue
        text = str(value)
        if text:
            seen.setdefault(text, None)
    return list(seen)


def _containment(field: str, values: Sequence[str]) -> str:
    joined = " OR ".join(escape_query_value(v) for v in values)
    return f"{field}:({joined})"


# ── Location ────────────────────────────────────────────────────────────


def build_location_filter_queries(
    selected_ids: Iterable[str] | None,
    location_mapping: Mapping[str, LocationMapping | Mapping[str, str]],
) -> list[str]:
    """Build zero or one fragment for the selected locations.

    Selections that land on different backend fields (a region plus a
    state, say) are ORed inside a single parenthesized fragment: a broad
    and a narrow selection mean "match any", never "match both".
    """
    by_field: dict[str, list[str]] = {}
    for node_id in _clean_values(selected_ids):
        mapping = location_mapping.get(node_id)
        if mapping is None:
            continue
        field_name, value = _mapping_parts(mapping)
        if not field_name or not value:
            continue
        values = by_field.setdefault(field_name, [])
        if value not in values:
            values.append(value)

    if not by_field:
        return []

    clauses = [_containment(field_name, values) for field_name, values in by_field.items()]
    return [f"({' OR '.join(clauses)})"]


def _mapping_parts(mapping: LocationMapping | Mapping[str, str]) -> tuple[str, str]:
    if isinstance(mapping, LocationMapping):
        return mapping.field, mapping.value
    return str(mapping.get("field") or ""), str(mapping.get("value") or "")


# ── Keywords / tagged facets ────────────────────────────────────────────


def build_keyword_filter_query(
    keywords: Iterable[str] | None,
    field: str = DEFAULT_KEYWORD_FIELD,
) -> str | None:
    values = _clean_values(keywords)
    if not values:
        return None
    return _containment(field, values)


def build_filter_query(field: str, values: Iterable[str] | None) -> str | None:
    """Tagged fragment so the facet on ``field`` can exclude this filter."""
    cleaned = _clean_values(values)
    if not field or not cleaned:
        return None
    return f"{{!tag={field}}}{_containment(field, cleaned)}"


# ── Properties ──────────────────────────────────────────────────────────


def build_property_filter_queries(property_ids: Iterable[str] | None) -> list[str]:
    queries: list[str] = []
    for prop in _clean_values(property_ids):
        predicate = PROPERTY_FILTERS.get(prop)
        if predicate is None:
            logger.debug("Ignoring unknown property filter %r", prop)
            continue
        queries.append(f"({predicate})" if " OR " in predicate else predicate)
    return queries


# ── Dates ───────────────────────────────────────────────────────────────


def _coerce_date(value: date | datetime | str | None) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date_parser.isoparse(text).date()
        except (ValueError, OverflowError):
            return None
    return None


def _format_solr_datetime(day: date, at: time) -> str:
    stamp = datetime.combine(day, at, tzinfo=timezone.utc)
    return stamp.strftime("%Y-%m-%dT%H:%M:%S.") + f"{stamp.microsecond // 1000:03d}Z"


def build_date_range_query(
    date_from: date | datetime | str | None = None,
    date_to: date | datetime | str | None = None,
    field: str = DEFAULT_DATE_FIELD,
) -> str | None:
    """Inclusive whole-day range; ``*`` stands in for an open bound."""
    start = _coerce_date(date_from)
    end = _coerce_date(date_to)
    if start is None and end is None:
        return None
    lower = _format_solr_datetime(start, _START_OF_DAY) if start else "*"
    upper = _format_solr_datetime(end, _END_OF_DAY) if end else "*"
    return f"{field}:[{lower} TO {upper}]"


def build_since_date(
    value: int,
    unit: SinceUnit | str,
    today: date | None = None,
) -> date | None:
    """Resolve "since N days/weeks/months/years" to a start date."""
    today = today or datetime.now(timezone.utc).date()
    try:
        unit = SinceUnit(unit)
        amount = int(value)
        if amount < 0:
            return None
        return today - _SINCE_DELTAS[unit](amount)
    except (TypeError, ValueError, OverflowError):
        logger.debug("Ignoring out-of-range since window %r %r", value, unit)
        return None


# ── Spatial ─────────────────────────────────────────────────────────────


def build_spatial_params(
    place: str | None = None,
    bbox: BoundingBox | None = None,
    op: SpatialOperator | str = SpatialOperator.WITHIN,
) -> list[tuple[str, str]]:
    """``place`` / ``place.op`` parameters; a drawn box wins over a name."""
    if bbox is not None:
        target = bbox.to_param()
    elif place and place.strip():
        target = place.strip()
    else:
        return []
    op_value = op.value if isinstance(op, SpatialOperator) else str(op)
    return [("place", target), ("place.op", op_value)]


__all__ = [
    "PROPERTY_FILTERS",
    "escape_query_value",
    "build_location_filter_queries",
    "build_keyword_filter_query",
    "build_filter_query",
    "build_property_filter_queries",
    "build_date_range_query",
    "build_since_date",
    "build_spatial_params",
]
