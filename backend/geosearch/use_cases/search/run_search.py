"""RunSearchUseCase — one page of search results for a filter state.

The use case owns the rules for turning a QuerySpec into a backend call:
  1. Expand the raw location selection through the hierarchy
  2. Compile every active filter into ``fq`` fragments
  3. Call the search backend and hand back its page
  4. Flag the page as superseded if a newer request started meanwhile

Backend failures (SearchRequestError) propagate; an empty page is a
normal result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping

from geosearch.domain.common.query import QuerySpec
from geosearch.domain.locations.catalog import LOCATION_TO_VOYAGER, LocationMapping
from geosearch.domain.locations.hierarchy import LocationHierarchy
from geosearch.domain.search.models import SearchResponse
from geosearch.domain.search.ports import (
    CancellationToken,
    NeverCancelledToken,
    SearchBackend,
)
from geosearch.infra.query.request_builder import SearchRequest, build_search_request

logger = logging.getLogger(__name__)


# ── Query (input) ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class RunSearchQuery:
    """Immutable value object describing what the caller wants to find."""

    query_spec: QuerySpec = field(default_factory=QuerySpec)


# ── Result (output) ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class RunSearchResult:
    """What the use case returns to the caller."""

    page: SearchResponse
    request: SearchRequest
    superseded: bool = False


# ── Use Case ────────────────────────────────────────────────────────────


class RunSearchUseCase:
    """Retrieve a filtered, sorted, paginated page of catalog records."""

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
        query: RunSearchQuery,
        cancel: CancellationToken | None = None,
    ) -> RunSearchResult:
        cancel = cancel or NeverCancelledToken()
        request = build_search_request(
            query.query_spec, self._hierarchy, self._location_mapping
        )
        logger.debug("Search q=%r with %d filter fragments", request.q, len(request.fq))

        page = await backend.search(request)

        superseded = cancel.is_cancelled()
        if superseded:
            logger.debug("Search at start=%d superseded by a newer request", request.start)
        return RunSearchResult(page=page, request=request, superseded=superseded)
