"""GetFacetsUseCase — facet counts for the same filter state as a search.

Runs with the identical ``q``/``fq`` set as the matching search, so both
requests can be issued concurrently.  Each facet field excludes its own
tagged selection, which keeps sibling values visible while one is picked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping

from geosearch.domain.common.query import QuerySpec
from geosearch.domain.locations.catalog import LOCATION_TO_VOYAGER, LocationMapping
from geosearch.domain.locations.hierarchy import LocationHierarchy
from geosearch.domain.search.models import FacetCategory
from geosearch.domain.search.ports import (
    CancellationToken,
    NeverCancelledToken,
    SearchBackend,
)
from geosearch.infra.query.request_builder import build_search_request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetFacetsQuery:
    query_spec: QuerySpec = field(default_factory=QuerySpec)


@dataclass(frozen=True)
class GetFacetsResult:
    categories: tuple[FacetCategory, ...]
    num_found: int
    superseded: bool = False


class GetFacetsUseCase:
    """Retrieve facet categories in canonical field order."""

    def __init__(
        self,
        hierarchy: LocationHierarchy | None = None,
        location_mapping: Mapping[str, LocationMapping] = LOCATION_TO_VOYAGER,
    ) -> None:
        self._hierarchy = hierarchy
        self._location_mapping = location_mapping

    async def execute(
        self,
        backend: SearchBackend,
        query: GetFacetsQuery,
        cancel: CancellationToken | None = None,
    ) -> GetFacetsResult:
        cancel = cancel or NeverCancelledToken()
        request = build_search_request(
            query.query_spec, self._hierarchy, self._location_mapping
        )
        response = await backend.facets(request)

        superseded = cancel.is_cancelled()
        if superseded:
            logger.debug("Facet counts superseded by a newer request")
        return GetFacetsResult(
            categories=response.facets,
            num_found=response.num_found,
            superseded=superseded,
        )
