from .get_facets import GetFacetsQuery, GetFacetsResult, GetFacetsUseCase
from .resolve_locations import (
    ResolveLocationGeometriesQuery,
    ResolveLocationGeometriesResult,
    ResolveLocationGeometriesUseCase,
)
from .run_search import RunSearchQuery, RunSearchResult, RunSearchUseCase

__all__ = [
    "GetFacetsQuery",
    "GetFacetsResult",
    "GetFacetsUseCase",
    "ResolveLocationGeometriesQuery",
    "ResolveLocationGeometriesResult",
    "ResolveLocationGeometriesUseCase",
    "RunSearchQuery",
    "RunSearchResult",
    "RunSearchUseCase",
]
