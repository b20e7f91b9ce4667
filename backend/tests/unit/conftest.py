"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from geosearch.domain.locations.catalog import get_default_hierarchy
from geosearch.domain.locations.hierarchy import LocationHierarchy, TreeNode
from geosearch.domain.search.models import FacetCategory, FacetValue, SearchResponse
from tests.unit.search_fakes import FakeGazetteer, FakeSearchBackend, make_page


@pytest.fixture
def hierarchy() -> LocationHierarchy:
    return get_default_hierarchy()


@pytest.fixture
def four_child_tree() -> LocationHierarchy:
    """Interior node ``p`` with four leaf children."""
    return LocationHierarchy([
        TreeNode("p", "Parent", tuple(TreeNode(f"c{i}", f"Child {i}") for i in range(1, 5))),
    ])


@pytest.fixture
def fake_backend() -> FakeSearchBackend:
    return FakeSearchBackend(
        search_response=make_page(num_found=3, start=0, count=2),
        facets_response=SearchResponse(
            num_found=3,
            start=0,
            facets=(
                FacetCategory(
                    field="format",
                    display_name="Format",
                    values=(FacetValue("GeoTIFF", 10), FacetValue("Shapefile", 5)),
                ),
            ),
        ),
    )


@pytest.fixture
def fake_gazetteer() -> FakeGazetteer:
    return FakeGazetteer(known={
        "United States": {"type": "Polygon", "coordinates": [[[0, 0], [1, 1], [0, 1], [0, 0]]]},
    })
