"""Assemble Voyager search and facet requests from a domain QuerySpec.

Fragments come from :mod:`filter_query`; this module decides their order,
adds the fixed parameters every request carries, and picks GET or POST
depending on the encoded URL length.  Parameters are kept as an ordered
list of ``(name, value)`` pairs because ``fq`` and ``facet.field`` repeat.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping
from urllib.parse import urlencode

from geosearch.domain.common.query import FilterState, QuerySpec
from geosearch.domain.locations.catalog import LOCATION_TO_VOYAGER, LocationMapping
from geosearch.domain.locations.hierarchy import LocationHierarchy, expand_selected_locations

from .facet_parser import FACET_FIELDS
from .filter_query import (
    build_date_range_query,
    build_filter_query,
    build_keyword_filter_query,
    build_location_filter_queries,
    build_property_filter_queries,
    build_spatial_params,
)

MATCH_ALL = "*:*"
DEFAULT_SORT = "score desc"
DEFAULT_MAX_URL_LENGTH = 2000
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Fixed result field list; ``name:[transformer]`` entries are Voyager doc transformers.
DEFAULT_SEARCH_FIELDS = ",".join([
    "id", "title", "name:[name]", "format", "abstract",
    "fullpath:[absolute]", "absolute_path:[absolute]", "thumb:[thumbURL]",
    "path_to_thumb", "subject", "download:[downloadURL]", "format_type",
    "bytes", "modified", "shard:[shard]", "bbox", "geo:[geo]",
    "format_category", "component_files", "ags_fused_cache",
    "linkcount__children", "contains_name", "wms_layer_name", "tag_flags",
    "hasMissingData", "layerURL:[lyrURL]", "hasLayerFile", "likes",
    "dislikes", "grp_Country", "fl_views", "views", "description",
    "keywords", "fd_acquisition_date", "name", "name_alias", "tag_tags",
    "fd_publish_date", "grp_Agency", "fs_english_name", "fs_title",
    "fs_product_detail_link",
])

# Facet fields listed alphabetically instead of by count.
_INDEX_SORTED_FIELDS = frozenset({"format", "format_type"})
_INDEX_SORTED_PREFIX = "grp_"

Params = list[tuple[str, str]]


@dataclass(frozen=True)
class SearchRequest:
    """Backend-neutral request: free text, fragments, spatial, paging."""

    q: str = MATCH_ALL
    fq: tuple[str, ...] = ()
    spatial: tuple[tuple[str, str], ...] = ()
    start: int = 0
    rows: int = 48
    sort: str = DEFAULT_SORT


@dataclass(frozen=True)
class PreparedRequest:
    """Concrete HTTP call: method, URL, and an optional form body."""

    method: str
    url: str
    params: tuple[tuple[str, str], ...]
    body: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def cache_key(self) -> str:
        """Equal for any two requests with the same parameters."""
        return urlencode(self.params)


# ── Fragments ───────────────────────────────────────────────────────────


def _canonical(values) -> list[str]:
    return sorted({str(v) for v in values or () if v})


def build_filter_queries(
    state: FilterState,
    hierarchy: LocationHierarchy | None = None,
    location_mapping: Mapping[str, LocationMapping] = LOCATION_TO_VOYAGER,
) -> list[str]:
    """All active ``fq`` fragments in a fixed order.

    Order: location, keywords, properties, date, then tagged facet
    selections by field name.  Location ids, keywords and facet values
    are sets, so they are sorted first and any ordering of the same
    selection yields the same bytes.  The location selection is then
    expanded through the hierarchy so picking a region also matches
    records tagged only with its countries or states.
    """
    fragments: list[str] = []

    location_ids = _canonical(state.location_ids)
    if hierarchy is not None:
        location_ids = expand_selected_locations(location_ids, hierarchy)
    fragments.extend(build_location_filter_queries(location_ids, location_mapping))

    keyword_fq = build_keyword_filter_query(_canonical(state.keywords))
    if keyword_fq:
        fragments.append(keyword_fq)

    fragments.extend(build_property_filter_queries(state.properties))

    if state.date_range is not None:
        date_fq = build_date_range_query(
            state.date_range.date_from,
            state.date_range.date_to,
            state.date_range.field,
        )
        if date_fq:
            fragments.append(date_fq)

    for field_name in sorted(state.facet_selections):
        tagged = build_filter_query(field_name, _canonical(state.facet_selections[field_name]))
        if tagged:
            fragments.append(tagged)

    return fragments


def build_search_request(
    spec: QuerySpec,
    hierarchy: LocationHierarchy | None = None,
    location_mapping: Mapping[str, LocationMapping] = LOCATION_TO_VOYAGER,
) -> SearchRequest:
    state = spec.filters
    spatial = ()
    if state.spatial is not None:
        spatial = tuple(build_spatial_params(state.spatial.place, state.spatial.bbox, state.spatial.op))
    return SearchRequest(
        q=state.text or MATCH_ALL,
        fq=tuple(build_filter_queries(state, hierarchy, location_mapping)),
        spatial=spatial,
        start=spec.page.start,
        rows=spec.page.rows,
        sort=spec.sort.to_param(),
    )


# ── Parameter lists ─────────────────────────────────────────────────────


def _config_params(display_id: str) -> Params:
    return [("disp", display_id), ("voyager.config.id", display_id), ("wt", "json")]


def _filter_params(request: SearchRequest) -> Params:
    params: Params = [("q", request.q or MATCH_ALL)]
    params.extend(("fq", fq) for fq in request.fq)
    params.extend(request.spatial)
    return params


def build_search_params(request: SearchRequest, display_id: str) -> Params:
    params = _config_params(display_id)
    params.extend(_filter_params(request))
    params.extend([
        ("start", str(request.start)),
        ("rows", str(request.rows)),
        ("sort", request.sort or DEFAULT_SORT),
        ("fl", DEFAULT_SEARCH_FIELDS),
        ("extent.bbox", "true"),
        ("block", "true"),
    ])
    return params


def build_facet_params(
    request: SearchRequest,
    display_id: str,
    facet_limit: int = 50,
    facet_mincount: int = 1,
) -> Params:
    params = _config_params(display_id)
    params.extend(_filter_params(request))
    params.extend([
        ("rows", "0"),
        ("facet", "true"),
        ("facet.mincount", str(facet_mincount)),
        ("facet.limit", str(facet_limit)),
    ])
    for field_name in FACET_FIELDS:
        params.append(("facet.field", f"{{!ex={field_name}}}{field_name}"))
        params.append((f"f.{field_name}.facet.mincount", str(facet_mincount)))
        if field_name.startswith(_INDEX_SORTED_PREFIX) or field_name in _INDEX_SORTED_FIELDS:
            params.append((f"f.{field_name}.facet.sort", "index"))
    return params


# ── Transport negotiation ───────────────────────────────────────────────


def negotiate_transport(
    base_url: str,
    params: Params,
    max_url_length: int = DEFAULT_MAX_URL_LENGTH,
) -> PreparedRequest:
    """GET with a query string, or POST the same pairs as a form body.

    Only the transport changes; parameter names, values and order are
    identical either way.
    """
    encoded = urlencode(params)
    url = f"{base_url}?{encoded}" if encoded else base_url
    if len(url) <= max_url_length:
        return PreparedRequest(method="GET", url=url, params=tuple(params))
    return PreparedRequest(
        method="POST",
        url=base_url,
        params=tuple(params),
        body=encoded,
        headers={"Content-Type": FORM_CONTENT_TYPE},
    )


__all__ = [
    "MATCH_ALL",
    "DEFAULT_SEARCH_FIELDS",
    "SearchRequest",
    "PreparedRequest",
    "build_filter_queries",
    "build_search_request",
    "build_search_params",
    "build_facet_params",
    "negotiate_transport",
]
