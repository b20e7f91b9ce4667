"""Pydantic schemas for search, facet and location API endpoints.

Contains response models for result pages, facet categories, the location
tree with derived checkbox states, and gazetteer geometries.
"""

from typing import Any, List, Optional, Self

from pydantic import BaseModel

from ..domain.locations.hierarchy import LocationHierarchy, TreeNode
from ..domain.locations.selection import CheckboxState, get_checkbox_state
from ..domain.search.models import (
    FacetCategory,
    GazetteerResult,
    SearchResponse,
    SearchResultItem,
)
from ..infra.formats import get_format_category, get_format_display_name


# ---------------------------------------------------------------------------
# Search results
# ---------------------------------------------------------------------------


class BoundsModel(BaseModel):
    """South-west and north-east corners as ``[lat, lng]`` pairs."""

    south_west: List[float]
    north_east: List[float]


class SearchResultItemResponse(BaseModel):
    """Individual catalog record."""

    id: str
    title: str
    format: str
    format_display_name: str
    format_group: str
    description: str
    thumbnail: str
    bounds: Optional[BoundsModel] = None

    format_type: Optional[str] = None
    format_category: Optional[str] = None
    bytes: Optional[int] = None
    modified: Optional[str] = None
    keywords: List[str] = []
    country: Optional[str] = None
    agency: Optional[str] = None
    acquisition_date: Optional[str] = None
    publish_date: Optional[str] = None
    geometry_type: Optional[str] = None
    download: Optional[str] = None
    fullpath: Optional[str] = None

    @classmethod
    def from_domain(cls, item: SearchResultItem) -> Self:
        bounds = None
        if item.bounds is not None:
            (min_lat, min_lng), (max_lat, max_lng) = item.bounds
            bounds = BoundsModel(south_west=[min_lat, min_lng], north_east=[max_lat, max_lng])
        return cls(
            id=item.id,
            title=item.title,
            format=item.format,
            format_display_name=get_format_display_name(item.format),
            format_group=get_format_category(item.format),
            description=item.description,
            thumbnail=item.thumbnail,
            bounds=bounds,
            format_type=item.format_type,
            format_category=item.format_category,
            bytes=item.bytes,
            modified=item.modified,
            keywords=list(item.keywords),
            country=item.country,
            agency=item.agency,
            acquisition_date=item.acquisition_date,
            publish_date=item.publish_date,
            geometry_type=item.geometry_type,
            download=item.download,
            fullpath=item.fullpath,
        )


class SearchResultsResponse(BaseModel):
    """One page of results with offset pagination metadata."""

    num_found: int
    start: int
    rows: int
    has_more: bool
    next_start: Optional[int] = None
    results: List[SearchResultItemResponse]

    @classmethod
    def from_domain(cls, page: SearchResponse, rows: int) -> Self:
        return cls(
            num_found=page.num_found,
            start=page.start,
            rows=rows,
            has_more=page.has_more,
            next_start=page.next_start if page.has_more else None,
            results=[SearchResultItemResponse.from_domain(item) for item in page.items],
        )


# ---------------------------------------------------------------------------
# Facets
# ---------------------------------------------------------------------------


class FacetValueResponse(BaseModel):
    name: str
    count: int


class FacetCategoryResponse(BaseModel):
    field: str
    display_name: str
    values: List[FacetValueResponse]

    @classmethod
    def from_domain(cls, category: FacetCategory) -> Self:
        return cls(
            field=category.field,
            display_name=category.display_name,
            values=[FacetValueResponse(name=v.name, count=v.count) for v in category.values],
        )


class FacetsResponse(BaseModel):
    num_found: int
    categories: List[FacetCategoryResponse]


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------


class LocationNodeResponse(BaseModel):
    """Tree node annotated with its checkbox state for a selection."""

    id: str
    label: str
    state: CheckboxState
    children: List["LocationNodeResponse"] = []

    @classmethod
    def from_node(
        cls, node: TreeNode, hierarchy: LocationHierarchy, selected: frozenset[str]
    ) -> Self:
        return cls(
            id=node.id,
            label=node.label,
            state=get_checkbox_state(node.id, selected, hierarchy),
            children=[cls.from_node(child, hierarchy, selected) for child in node.children],
        )


class LocationTreeResponse(BaseModel):
    selected: List[str]
    expanded: List[str]
    nodes: List[LocationNodeResponse]


class LocationGeometryResponse(BaseModel):
    name: str
    geo: Any

    @classmethod
    def from_domain(cls, result: GazetteerResult) -> Self:
        return cls(name=result.name, geo=result.geo)


class LocationGeometriesResponse(BaseModel):
    geometries: List[LocationGeometryResponse]
    unresolved: List[str]


class LocationToggleRequest(BaseModel):
    """One checkbox click against the current selection."""

    node_id: str
    selected: List[str] = []


class LocationToggleResponse(BaseModel):
    node_id: str
    state: CheckboxState
    tree: LocationTreeResponse
