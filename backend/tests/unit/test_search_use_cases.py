"""Unit tests for the search, facet and location-geometry use cases."""

import pytest

from geosearch.domain.common.errors import SearchRequestError
from geosearch.domain.common.query import FilterState, PageSpec, QuerySpec
from geosearch.services.request_tracker import RequestGeneration
from geosearch.use_cases.search import (
    GetFacetsQuery,
    GetFacetsUseCase,
    ResolveLocationGeometriesQuery,
    ResolveLocationGeometriesUseCase,
    RunSearchQuery,
    RunSearchUseCase,
)

from tests.unit.search_fakes import FakeSearchBackend


@pytest.mark.asyncio
class TestRunSearchUseCase:
    async def test_builds_request_from_spec(self, fake_backend, hierarchy):
        spec = QuerySpec(
            filters=FilterState().with_text("roads").add_locations(["uk"]),
            page=PageSpec(start=48, rows=48),
        )
        result = await RunSearchUseCase(hierarchy).execute(fake_backend, RunSearchQuery(spec))

        [request] = fake_backend.search_requests
        assert request.q == "roads"
        assert request.start == 48
        assert request.fq == (
            '(grp_Country:("\U0001F1EC\U0001F1E7 United Kingdom") '
            'OR grp_State:("England" OR "Scotland" OR "Wales"))',
        )
        assert result.page.num_found == 3
        assert result.request == request
        assert not result.superseded

    async def test_superseded_when_newer_request_started(self, fake_backend, hierarchy):
        tracker = RequestGeneration()
        token = tracker.begin()
        use_case = RunSearchUseCase(hierarchy)

        tracker.begin()
        result = await use_case.execute(fake_backend, RunSearchQuery(), cancel=token)

        assert result.superseded

    async def test_backend_failure_propagates(self, hierarchy):
        backend = FakeSearchBackend(error=SearchRequestError("boom", status_code=500))
        with pytest.raises(SearchRequestError):
            await RunSearchUseCase(hierarchy).execute(backend, RunSearchQuery())


@pytest.mark.asyncio
class TestGetFacetsUseCase:
    async def test_same_fragments_as_search(self, fake_backend, hierarchy):
        spec = QuerySpec(filters=FilterState().add_keywords(["water"]).add_facet_selection("format", ["PDF"]))
        await RunSearchUseCase(hierarchy).execute(fake_backend, RunSearchQuery(spec))
        result = await GetFacetsUseCase(hierarchy).execute(fake_backend, GetFacetsQuery(spec))

        assert fake_backend.facet_requests[0].fq == fake_backend.search_requests[0].fq
        assert [c.field for c in result.categories] == ["format"]
        assert result.num_found == 3


@pytest.mark.asyncio
class TestResolveLocationGeometriesUseCase:
    async def test_labels_looked_up(self, fake_gazetteer, hierarchy):
        use_case = ResolveLocationGeometriesUseCase(hierarchy)
        result = await use_case.execute(
            fake_gazetteer,
            ResolveLocationGeometriesQuery(location_ids=("usa", "can", "unknown", "usa")),
        )
        assert fake_gazetteer.calls == [["United States", "Canada"]]
        assert [g.name for g in result.geometries] == ["United States"]
        assert result.unresolved == ("Canada",)

    async def test_nothing_to_resolve(self, fake_gazetteer, hierarchy):
        use_case = ResolveLocationGeometriesUseCase(hierarchy)
        result = await use_case.execute(fake_gazetteer, ResolveLocationGeometriesQuery())
        assert result.geometries == ()
        assert fake_gazetteer.calls == []
