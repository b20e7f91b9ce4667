"""API endpoints for the location tree, selection toggling and geometries."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...config import settings
from ...domain.locations.hierarchy import LocationHierarchy, expand_selected_locations
from ...domain.locations.selection import SelectionSet
from ...domain.search.ports import Gazetteer
from ...schemas.search import (
    LocationGeometriesResponse,
    LocationGeometryResponse,
    LocationNodeResponse,
    LocationToggleRequest,
    LocationToggleResponse,
    LocationTreeResponse,
)
from ...use_cases.search import (
    ResolveLocationGeometriesQuery,
    ResolveLocationGeometriesUseCase,
)
from ...wiring.bootstrap import (
    get_gazetteer,
    get_hierarchy,
    get_resolve_locations_use_case,
)
from .search_filter_params import split_csv

logger = logging.getLogger(__name__)

router = APIRouter()


def _tree_response(hierarchy: LocationHierarchy, selected: tuple[str, ...]) -> LocationTreeResponse:
    selected_set = frozenset(selected)
    return LocationTreeResponse(
        selected=list(selected),
        expanded=expand_selected_locations(list(selected), hierarchy),
        nodes=[
            LocationNodeResponse.from_node(root, hierarchy, selected_set)
            for root in hierarchy.roots
        ],
    )


@router.get("", response_model=LocationTreeResponse)
async def get_location_tree(
    selected: Optional[str] = Query(None, description="Selected location IDs (comma-separated)"),
    hierarchy: LocationHierarchy = Depends(get_hierarchy),
):
    """Location tree with each node's checkbox state for ``selected``."""
    return _tree_response(hierarchy, split_csv(selected))


@router.post("/toggle", response_model=LocationToggleResponse)
async def toggle_location(
    request: LocationToggleRequest,
    hierarchy: LocationHierarchy = Depends(get_hierarchy),
):
    """Apply one checkbox click to a selection and return the new tree."""
    if request.node_id not in hierarchy:
        raise HTTPException(status_code=404, detail=f"Unknown location: {request.node_id}")
    selection = SelectionSet(hierarchy, request.selected)
    state = selection.toggle(request.node_id)
    return LocationToggleResponse(
        node_id=request.node_id,
        state=state,
        tree=_tree_response(hierarchy, selection.ids),
    )


@router.get("/geometries", response_model=LocationGeometriesResponse)
async def get_location_geometries(
    ids: Optional[str] = Query(None, description="Location IDs to outline (comma-separated)"),
    gazetteer: Gazetteer = Depends(get_gazetteer),
    use_case: ResolveLocationGeometriesUseCase = Depends(get_resolve_locations_use_case),
):
    """Resolve selected locations to gazetteer geometries."""
    if not settings.gazetteer_enabled:
        return LocationGeometriesResponse(geometries=[], unresolved=[])
    result = await use_case.execute(
        gazetteer, ResolveLocationGeometriesQuery(location_ids=split_csv(ids))
    )
    return LocationGeometriesResponse(
        geometries=[LocationGeometryResponse.from_domain(g) for g in result.geometries],
        unresolved=list(result.unresolved),
    )
