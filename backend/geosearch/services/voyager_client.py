"""
Voyager Client - Issues search and facet requests against Voyager's Solr endpoint.

Requests are assembled by ``geosearch.infra.query.request_builder``; this
client only negotiates GET vs POST, performs the call, and turns the JSON
envelope into domain objects.  Any non-success reply is raised as
SearchRequestError so callers can tell a failed request from an empty one.
"""
import logging
from typing import Optional

import httpx

from ..config import settings
from ..domain.common.errors import InvalidResponseError, SearchRequestError
from ..domain.search.models import SearchResponse
from ..domain.search.ports import SearchBackend
from ..infra.query.facet_parser import is_search_envelope, parse_search_response
from ..infra.query.request_builder import (
    PreparedRequest,
    SearchRequest,
    build_facet_params,
    build_search_params,
    negotiate_transport,
)

logger = logging.getLogger(__name__)


class VoyagerClient(SearchBackend):
    """Async Voyager search client."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        display_id: Optional[str] = None,
        timeout: Optional[float] = None,
        max_url_length: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.voyager_base_url
        self.display_id = display_id or settings.voyager_display_id
        self.timeout = timeout or settings.request_timeout
        self.max_url_length = max_url_length or settings.max_get_url_length
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    # Request preparation
    # ------------------------------------------------------------------

    def prepare_search(self, request: SearchRequest) -> PreparedRequest:
        params = build_search_params(request, self.display_id)
        return negotiate_transport(self.base_url, params, self.max_url_length)

    def prepare_facets(self, request: SearchRequest) -> PreparedRequest:
        params = build_facet_params(
            request,
            self.display_id,
            facet_limit=settings.facet_limit,
            facet_mincount=settings.facet_mincount,
        )
        return negotiate_transport(self.base_url, params, self.max_url_length)

    # ------------------------------------------------------------------
    # SearchBackend
    # ------------------------------------------------------------------

    async def search(self, request: SearchRequest) -> SearchResponse:
        return await self._execute(self.prepare_search(request), endpoint="search")

    async def facets(self, request: SearchRequest) -> SearchResponse:
        return await self._execute(self.prepare_facets(request), endpoint="facets")

    async def _execute(self, prepared: PreparedRequest, endpoint: str) -> SearchResponse:
        client = await self._get_client()
        logger.info(
            "Voyager %s %s (%d params)", endpoint, prepared.method, len(prepared.params)
        )
        try:
            if prepared.method == "POST":
                response = await client.post(
                    prepared.url, content=prepared.body, headers=dict(prepared.headers)
                )
            else:
                response = await client.get(prepared.url)
        except httpx.HTTPError as e:
            logger.error("Voyager %s request failed: %s", endpoint, e)
            raise SearchRequestError(
                f"Failed to fetch {endpoint} from Voyager: {e}", endpoint=endpoint
            ) from e

        if not response.is_success:
            logger.error("Voyager %s returned HTTP %d", endpoint, response.status_code)
            raise SearchRequestError(
                f"Voyager API error on {endpoint}",
                endpoint=endpoint,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise InvalidResponseError(
                f"Voyager {endpoint} response was not JSON",
                endpoint=endpoint,
                status_code=response.status_code,
            ) from e

        if not is_search_envelope(payload):
            raise InvalidResponseError(
                f"Voyager {endpoint} response had no result envelope",
                endpoint=endpoint,
                status_code=response.status_code,
            )
        return parse_search_response(payload)
