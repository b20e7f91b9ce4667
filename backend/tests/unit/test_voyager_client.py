"""Unit tests for the Voyager client using httpx.MockTransport."""

from urllib.parse import parse_qsl

import httpx
import pytest

from geosearch.domain.common.errors import InvalidResponseError, SearchRequestError
from geosearch.infra.query.request_builder import SearchRequest
from geosearch.services.voyager_client import VoyagerClient

BASE_URL = "http://voyager.test/solr/v0/select"

ENVELOPE = {
    "response": {"numFound": 2, "start": 0, "docs": [{"id": "a", "title": "A"}, {"id": "b"}]},
    "facet_counts": {"facet_fields": {"format": ["GeoTIFF", 10, "Shapefile", 5]}},
}


def _client(handler, **kwargs) -> VoyagerClient:
    return VoyagerClient(
        base_url=BASE_URL,
        display_id="DISP",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
class TestVoyagerClient:
    async def test_search_uses_get_for_short_requests(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=ENVELOPE)

        client = _client(handler)
        page = await client.search(SearchRequest(q="roads", fq=('keywords:("x")',)))
        await client.aclose()

        assert seen[0].method == "GET"
        params = dict(seen[0].url.params.multi_items())
        assert params["q"] == "roads"
        assert params["fq"] == 'keywords:("x")'
        assert params["disp"] == "DISP"
        assert page.num_found == 2
        assert [item.title for item in page.items] == ["A", "Untitled"]

    async def test_long_request_is_posted_as_form(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=ENVELOPE)

        fq = tuple(f'keywords:("term-{i}")' for i in range(150))
        client = _client(handler)
        await client.search(SearchRequest(fq=fq))
        await client.aclose()

        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == BASE_URL
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        body = parse_qsl(request.content.decode())
        assert [v for k, v in body if k == "fq"] == list(fq)

    async def test_facets_parsed_in_canonical_order(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["rows"] == "0"
            return httpx.Response(200, json=ENVELOPE)

        client = _client(handler)
        page = await client.facets(SearchRequest())
        await client.aclose()

        assert page.facets[0].field == "format"
        assert page.facets[0].values[0].name == "GeoTIFF"

    async def test_http_error_status_raises(self):
        client = _client(lambda request: httpx.Response(503, text="down"))
        with pytest.raises(SearchRequestError) as exc_info:
            await client.search(SearchRequest())
        await client.aclose()

        assert exc_info.value.status_code == 503
        assert exc_info.value.endpoint == "search"
        assert "HTTP 503" in str(exc_info.value)

    async def test_network_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = _client(handler)
        with pytest.raises(SearchRequestError) as exc_info:
            await client.facets(SearchRequest())
        await client.aclose()

        assert exc_info.value.status_code is None
        assert exc_info.value.endpoint == "facets"

    async def test_non_json_body_raises_invalid_response(self):
        client = _client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(InvalidResponseError):
            await client.search(SearchRequest())
        await client.aclose()

    async def test_missing_envelope_raises_invalid_response(self):
        client = _client(lambda request: httpx.Response(200, json={"error": "nope"}))
        with pytest.raises(InvalidResponseError):
            await client.search(SearchRequest())
        await client.aclose()

    async def test_empty_result_is_not_an_error(self):
        body = {"response": {"numFound": 0, "start": 0, "docs": []}}
        client = _client(lambda request: httpx.Response(200, json=body))
        page = await client.search(SearchRequest())
        await client.aclose()

        assert page.num_found == 0
        assert page.items == ()


class TestPreparedRequests:
    def test_identical_requests_share_cache_key(self):
        client = VoyagerClient(base_url=BASE_URL, display_id="DISP")
        request = SearchRequest(q="x", fq=("a:1",))
        assert client.prepare_search(request).cache_key == client.prepare_search(request).cache_key

    def test_search_and_facet_keys_differ(self):
        client = VoyagerClient(base_url=BASE_URL, display_id="DISP")
        request = SearchRequest(q="x")
        assert client.prepare_search(request).cache_key != client.prepare_facets(request).cache_key
