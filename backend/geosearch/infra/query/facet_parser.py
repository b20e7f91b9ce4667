"""Parse Voyager/Solr response envelopes into domain value objects.

Facet counts arrive as flat alternating ``[name, count, name, count, ...]``
arrays keyed by field.  Categories are emitted in the canonical
:data:`FACET_FIELDS` order, never by count or alphabetically, and values
keep the backend's order.  Parsing is total: anything unusable is
skipped, so a well-formed reply with no facet fields is simply ``[]``.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Sequence
from urllib.parse import quote

from geosearch.domain.search.models import (
    Bounds,
    FacetCategory,
    FacetValue,
    SearchResponse,
    SearchResultItem,
)

logger = logging.getLogger(__name__)

# Canonical facet order; also the fields requested in facet mode.
FACET_FIELDS: tuple[str, ...] = (
    "fs_Voyager_Lexicon",
    "grp_Data_Theme",
    "tag_flags",
    "grp_Geography",
    "grp_Region",
    "grp_Sub-Region",
    "grp_Country",
    "grp_State",
    "grp_County",
    "grp_City",
    "grp_Sector",
    "grp_Bureau_/_Department",
    "grp_Agency",
    "grp_Academic",
    "organization",
    "fs_event",
    "fi_year",
    "location",
    "tag_tags",
    "keywords",
    "grp_Catalog",
    "grp_data_source",
    "fs_ckan_format",
    "format",
    "format_type",
    "format_keyword",
    "geometry_type",
    "fileExtension",
    "created",
)

FACET_DISPLAY_NAMES: dict[str, str] = {
    "fs_Voyager_Lexicon": "Voyager Lexicon",
    "grp_Data_Theme": "Data Theme",
    "tag_flags": "Flags",
    "grp_Geography": "Geography",
    "grp_Region": "Region",
    "grp_Sub-Region": "Sub-Region",
    "grp_Country": "Country",
    "grp_State": "State",
    "grp_County": "County",
    "grp_City": "City",
    "grp_Sector": "Sector",
    "grp_Bureau_/_Department": "Bureau/Department",
    "grp_Agency": "Agency",
    "grp_Academic": "Academic",
    "organization": "Organization",
    "fs_event": "Event",
    "fi_year": "Year",
    "location": "Location",
    "tag_tags": "Tags",
    "keywords": "Keywords",
    "grp_Catalog": "Catalog",
    "grp_data_source": "Data Source",
    "fs_ckan_format": "CKAN Format",
    "format": "Format",
    "format_type": "Format Type",
    "format_keyword": "Format Keyword",
    "geometry_type": "Geometry Type",
    "fileExtension": "File Extension",
    "created": "Created",
}

_NO_PREVIEW_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="300" height="200" viewBox="0 0 300 200">'
    '<rect width="300" height="200" fill="#e5e7eb"/>'
    '<text x="150" y="105" font-family="sans-serif" font-size="16" fill="#6b7280" '
    'text-anchor="middle">No Preview</text></svg>'
)
DEFAULT_THUMBNAIL = "data:image/svg+xml," + quote(_NO_PREVIEW_SVG, safe="")

_BBOX_SPLIT = re.compile(r"[,\s]+")


# ── Facets ──────────────────────────────────────────────────────────────


def _as_count(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _parse_pairs(raw: Sequence[Any]) -> tuple[FacetValue, ...]:
    values: list[FacetValue] = []
    # Stop before a trailing name with no paired count
    for i in range(0, len(raw) - 1, 2):
        name, count = raw[i], _as_count(raw[i + 1])
        if name is None or name == "" or count is None:
            continue
        values.append(FacetValue(name=str(name), count=count))
    return tuple(values)


def parse_facet_fields(raw_field_counts: Mapping[str, Sequence[Any]] | None) -> list[FacetCategory]:
    if not raw_field_counts:
        return []
    categories: list[FacetCategory] = []
    for field_name in FACET_FIELDS:
        raw = raw_field_counts.get(field_name)
        if not raw or isinstance(raw, (str, bytes)):
            continue
        values = _parse_pairs(raw)
        if not values:
            continue
        categories.append(FacetCategory(
            field=field_name,
            display_name=FACET_DISPLAY_NAMES.get(field_name, field_name),
            values=values,
        ))
    return categories


# ── Documents ───────────────────────────────────────────────────────────


def parse_bbox(raw: Any) -> Bounds | None:
    """``"minx miny maxx maxy"`` (comma or space separated) to lat/lng corners."""
    if not isinstance(raw, str) or not raw.strip():
        return None
    parts = [p for p in _BBOX_SPLIT.split(raw.strip()) if p]
    if len(parts) != 4:
        return None
    try:
        min_lng, min_lat, max_lng, max_lat = (float(p) for p in parts)
    except ValueError:
        return None
    if any(v != v for v in (min_lng, min_lat, max_lng, max_lat)):  # NaN
        return None
    return ((min_lat, min_lng), (max_lat, max_lng))


def _first(doc: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = doc.get(key)
        if value:
            return value
    return None


def _str_or_none(value: Any) -> str | None:
    return None if value is None else str(value)


def _as_int(value: Any) -> int | None:
    try:
        return None if value is None else int(value)
    except (TypeError, ValueError):
        return None


def to_search_result(doc: Mapping[str, Any]) -> SearchResultItem:
    keywords = _first(doc, "keywords", "tag_tags") or ()
    if isinstance(keywords, str):
        keywords = (keywords,)
    return SearchResultItem(
        id=str(doc.get("id", "")),
        title=str(_first(doc, "title", "name") or "Untitled"),
        format=str(_first(doc, "format", "format_type") or "Unknown"),
        description=str(_first(doc, "abstract", "description") or ""),
        thumbnail=str(_first(doc, "thumb", "path_to_thumb") or DEFAULT_THUMBNAIL),
        bounds=parse_bbox(doc.get("bbox")),
        format_type=_str_or_none(doc.get("format_type")),
        format_category=_str_or_none(doc.get("format_category")),
        bytes=_as_int(doc.get("bytes")),
        modified=_str_or_none(doc.get("modified")),
        keywords=tuple(str(k) for k in keywords),
        country=_str_or_none(doc.get("grp_Country")),
        agency=_str_or_none(doc.get("grp_Agency")),
        acquisition_date=_str_or_none(doc.get("fd_acquisition_date")),
        publish_date=_str_or_none(doc.get("fd_publish_date")),
        geometry_type=_str_or_none(doc.get("geometry_type")),
        download=_str_or_none(doc.get("download")),
        fullpath=_str_or_none(_first(doc, "fullpath", "absolute_path")),
    )


def parse_search_response(payload: Mapping[str, Any]) -> SearchResponse:
    """Envelope → :class:`SearchResponse`; missing parts read as empty."""
    body = payload.get("response") or {}
    docs = [d for d in body.get("docs") or () if isinstance(d, Mapping)]
    facet_fields = (payload.get("facet_counts") or {}).get("facet_fields") or {}
    return SearchResponse(
        num_found=_as_int(body.get("numFound")) or 0,
        start=_as_int(body.get("start")) or 0,
        items=tuple(to_search_result(doc) for doc in docs),
        facets=tuple(parse_facet_fields(facet_fields)),
    )


def is_search_envelope(payload: Any) -> bool:
    return isinstance(payload, Mapping) and isinstance(payload.get("response"), Mapping)


__all__ = [
    "FACET_FIELDS",
    "FACET_DISPLAY_NAMES",
    "DEFAULT_THUMBNAIL",
    "parse_facet_fields",
    "parse_bbox",
    "to_search_result",
    "parse_search_response",
    "is_search_envelope",
]
