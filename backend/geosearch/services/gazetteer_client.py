"""
Gazetteer Client - Resolves place names to geometries.

Used only as a spatial fallback when a free-text place has no drawn shape.
Enrichment is optional, so failures are logged and reported as "no matches"
instead of being raised.
"""
import logging
from typing import Optional, Sequence
from urllib.parse import urlencode

import httpx

from ..config import settings
from ..domain.search.models import GazetteerResult
from ..domain.search.ports import Gazetteer
from ..infra.query.filter_query import escape_query_value

logger = logging.getLogger(__name__)


def build_gazetteer_query(names: Sequence[str]) -> str:
    """``name:"A" || name:"B"`` for the gazetteer's Solr core."""
    return " || ".join(f"name:{escape_query_value(name)}" for name in names)


def build_gazetteer_url(names: Sequence[str], select_url: Optional[str] = None) -> str:
    """Build the gazetteer select URL.

    Raises:
        ValueError: If no names are given; callers check for this first.
    """
    if not names:
        raise ValueError("At least one location name is required")
    base = select_url or settings.gazetteer_select_url
    query = urlencode(
        [("q", build_gazetteer_query(names)), ("fl", "geo:[geo], name"), ("wt", "json")]
    )
    return f"{base}?{query}"


class GazetteerClient(Gazetteer):
    """Async client for the gazetteer Solr core."""

    def __init__(
        self,
        select_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.select_url = select_url or settings.gazetteer_select_url
        self.timeout = timeout or settings.request_timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
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

    async def query(self, names: Sequence[str]) -> list[GazetteerResult]:
        names = [n for n in names if n]
        if not names:
            return []

        url = build_gazetteer_url(names, self.select_url)
        client = await self._get_client()
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error("Gazetteer query error: %s", e)
            return []

        if not response.is_success:
            logger.warning(
                "Gazetteer query failed: %d %s", response.status_code, response.reason_phrase
            )
            return []

        try:
            docs = response.json()["response"]["docs"]
        except (ValueError, KeyError, TypeError) as e:
            logger.error("Gazetteer returned an unexpected body: %s", e)
            return []

        # Docs without a geometry or a name are dropped silently
        return [
            GazetteerResult(name=str(doc["name"]), geo=doc["geo"])
            for doc in docs
            if isinstance(doc, dict) and doc.get("name") and doc.get("geo")
        ]
