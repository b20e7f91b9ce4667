"""Dependency injection bootstrap — the single place that binds ports to adapters.

Every factory function here can be used as a FastAPI ``Depends()`` target.
Routers never import concrete clients directly; they depend on the
abstractions returned by these factories, so tests can swap them through
``app.dependency_overrides``.

Example usage in a router::

    from geosearch.wiring.bootstrap import get_search_backend, get_run_search_use_case

    @router.get("/search")
    async def search(
        backend: SearchBackend = Depends(get_search_backend),
        use_case: RunSearchUseCase = Depends(get_run_search_use_case),
    ):
        result = await use_case.execute(backend, query)
"""

from __future__ import annotations

from geosearch.domain.locations.catalog import get_default_hierarchy
from geosearch.domain.locations.hierarchy import LocationHierarchy
from geosearch.domain.search.ports import Gazetteer, SearchBackend
from geosearch.services.gazetteer_client import GazetteerClient
from geosearch.services.voyager_client import VoyagerClient
from geosearch.use_cases.search import (
    GetFacetsUseCase,
    ResolveLocationGeometriesUseCase,
    RunSearchUseCase,
)


# ── Location hierarchy ──────────────────────────────────────────────────


def get_hierarchy() -> LocationHierarchy:
    """Return the static location tree."""
    return get_default_hierarchy()


# ── Backends ────────────────────────────────────────────────────────────

_voyager_client: VoyagerClient | None = None
_gazetteer_client: GazetteerClient | None = None


def get_search_backend() -> SearchBackend:
    """Return a singleton VoyagerClient."""
    global _voyager_client
    if _voyager_client is None:
        _voyager_client = VoyagerClient()
    return _voyager_client


def get_gazetteer() -> Gazetteer:
    """Return a singleton GazetteerClient."""
    global _gazetteer_client
    if _gazetteer_client is None:
        _gazetteer_client = GazetteerClient()
    return _gazetteer_client


async def close_clients() -> None:
    """Close pooled HTTP connections; called on application shutdown."""
    global _voyager_client, _gazetteer_client
    if _voyager_client is not None:
        await _voyager_client.aclose()
        _voyager_client = None
    if _gazetteer_client is not None:
        await _gazetteer_client.aclose()
        _gazetteer_client = None


# ── Use Cases ────────────────────────────────────────────────────────────


def get_run_search_use_case() -> RunSearchUseCase:
    return RunSearchUseCase(hierarchy=get_hierarchy())


def get_get_facets_use_case() -> GetFacetsUseCase:
    return GetFacetsUseCase(hierarchy=get_hierarchy())


def get_resolve_locations_use_case() -> ResolveLocationGeometriesUseCase:
    return ResolveLocationGeometriesUseCase(hierarchy=get_hierarchy())
