"""API endpoints for catalog search and facet counts."""
import logging

from fastapi import APIRouter, Depends

from ...domain.common.query import FilterState, PageSpec, QuerySpec, SortSpec
from ...domain.search.ports import SearchBackend
from ...schemas.search import (
    FacetCategoryResponse,
    FacetsResponse,
    SearchResultsResponse,
)
from ...use_cases.search import (
    GetFacetsQuery,
    GetFacetsUseCase,
    RunSearchQuery,
    RunSearchUseCase,
)
from ...wiring.bootstrap import (
    get_get_facets_use_case,
    get_run_search_use_case,
    get_search_backend,
)
from .search_filter_params import parse_page_spec, parse_search_filters, parse_search_sort

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=SearchResultsResponse)
async def search(
    filters: FilterState = Depends(parse_search_filters),
    sort: SortSpec = Depends(parse_search_sort),
    page: PageSpec = Depends(parse_page_spec),
    backend: SearchBackend = Depends(get_search_backend),
    use_case: RunSearchUseCase = Depends(get_run_search_use_case),
):
    """
    Search the catalog.

    Returns one page of results; use ``next_start`` as the following
    ``start`` while ``has_more`` is true.
    """
    query = RunSearchQuery(query_spec=QuerySpec(filters=filters, sort=sort, page=page))
    result = await use_case.execute(backend, query)
    return SearchResultsResponse.from_domain(result.page, rows=page.rows)


@router.get("/facets", response_model=FacetsResponse)
async def get_facets(
    filters: FilterState = Depends(parse_search_filters),
    backend: SearchBackend = Depends(get_search_backend),
    use_case: GetFacetsUseCase = Depends(get_get_facets_use_case),
):
    """Facet counts for the same filters as a search, in canonical field order."""
    result = await use_case.execute(backend, GetFacetsQuery(query_spec=QuerySpec(filters=filters)))
    return FacetsResponse(
        num_found=result.num_found,
        categories=[FacetCategoryResponse.from_domain(c) for c in result.categories],
    )
