"""Unit tests for facet-count and search-envelope parsing."""

import pytest

from geosearch.domain.search.models import FacetValue, SearchResponse
from geosearch.infra.query.facet_parser import (
    DEFAULT_THUMBNAIL,
    FACET_DISPLAY_NAMES,
    FACET_FIELDS,
    is_search_envelope,
    parse_bbox,
    parse_facet_fields,
    parse_search_response,
    to_search_result,
)


class TestParseFacetFields:
    def test_empty(self):
        assert parse_facet_fields({}) == []
        assert parse_facet_fields(None) == []

    def test_pairs_keep_backend_order(self):
        [category] = parse_facet_fields({"format": ["GeoTIFF", 10, "Shapefile", 5]})
        assert category.field == "format"
        assert category.display_name == "Format"
        assert category.values == (FacetValue("GeoTIFF", 10), FacetValue("Shapefile", 5))

    def test_trailing_name_without_count_dropped(self):
        [category] = parse_facet_fields({"format": ["GeoTIFF", 10, "Orphan"]})
        assert [v.name for v in category.values] == ["GeoTIFF"]

    def test_bad_pairs_dropped(self):
        [category] = parse_facet_fields({
            "keywords": ["", 3, None, 4, "water", "many", "roads", 7],
        })
        assert category.values == (FacetValue("roads", 7),)

    def test_field_whose_pairs_all_drop_is_skipped(self):
        assert parse_facet_fields({"keywords": ["", 1]}) == []

    def test_unknown_fields_ignored(self):
        assert parse_facet_fields({"not_a_facet": ["x", 1]}) == []

    def test_canonical_order_regardless_of_input_order(self):
        raw = {
            "format": ["PDF", 1],
            "grp_Country": ["Canada", 2],
            "fs_Voyager_Lexicon": ["Lex", 3],
            "keywords": ["k", 4],
        }
        reversed_raw = dict(reversed(list(raw.items())))
        fields = [c.field for c in parse_facet_fields(raw)]
        assert fields == ["fs_Voyager_Lexicon", "grp_Country", "keywords", "format"]
        assert [c.field for c in parse_facet_fields(reversed_raw)] == fields

    def test_display_names_cover_every_field(self):
        assert set(FACET_DISPLAY_NAMES) == set(FACET_FIELDS)

    def test_string_counts_accepted(self):
        [category] = parse_facet_fields({"fi_year": ["2020", "12"]})
        assert category.values == (FacetValue("2020", 12),)


class TestParseBbox:
    @pytest.mark.parametrize("raw", ["-10 20 30 40", "-10,20,30,40", "-10, 20, 30, 40"])
    def test_separators(self, raw):
        assert parse_bbox(raw) == ((20.0, -10.0), (40.0, 30.0))

    @pytest.mark.parametrize("raw", [None, "", "1 2 3", "a b c d", "1 2 3 4 5", 42])
    def test_invalid(self, raw):
        assert parse_bbox(raw) is None


class TestToSearchResult:
    def test_fallbacks(self):
        item = to_search_result({"id": "x", "name": "Named", "format_type": "File", "tag_tags": ["t"]})
        assert item.title == "Named"
        assert item.format == "File"
        assert item.thumbnail == DEFAULT_THUMBNAIL
        assert item.keywords == ("t",)
        assert item.description == ""

    def test_empty_doc(self):
        item = to_search_result({})
        assert item.title == "Untitled"
        assert item.format == "Unknown"
        assert item.bounds is None

    def test_full_doc(self):
        item = to_search_result({
            "id": "abc",
            "title": "Roads",
            "format": "application/x-esri-shapefile",
            "abstract": "Road centerlines",
            "thumb": "http://img/1.png",
            "bbox": "-105 39 -104 40",
            "bytes": "2048",
            "keywords": "transport",
            "absolute_path": "/data/roads.shp",
            "grp_Country": "United States",
        })
        assert item.description == "Road centerlines"
        assert item.thumbnail == "http://img/1.png"
        assert item.bounds == ((39.0, -105.0), (40.0, -104.0))
        assert item.bytes == 2048
        assert item.keywords == ("transport",)
        assert item.fullpath == "/data/roads.shp"
        assert item.country == "United States"

    def test_default_thumbnail_is_svg_data_url(self):
        assert DEFAULT_THUMBNAIL.startswith("data:image/svg+xml,")
        assert "No%20Preview" in DEFAULT_THUMBNAIL


class TestParseSearchResponse:
    def test_envelope(self):
        payload = {
            "response": {"numFound": 120, "start": 48, "docs": [{"id": "1"}, {"id": "2"}]},
            "facet_counts": {"facet_fields": {"format": ["PDF", 3]}},
        }
        page = parse_search_response(payload)
        assert page.num_found == 120
        assert page.start == 48
        assert [i.id for i in page.items] == ["1", "2"]
        assert page.facets[0].field == "format"
        assert page.has_more
        assert page.next_start == 50

    def test_missing_parts_read_as_empty(self):
        page = parse_search_response({"response": {}})
        assert page.num_found == 0
        assert page.items == ()
        assert page.facets == ()
        assert not page.has_more

    def test_page_holds_only_parsed_items(self):
        payload = {"response": {"numFound": 1, "start": 0, "docs": [{"id": "1", "extra": "x"}]}}
        page = parse_search_response(payload)
        assert page == SearchResponse(num_found=1, start=0, items=(to_search_result({"id": "1"}),))

    def test_is_search_envelope(self):
        assert is_search_envelope({"response": {}})
        assert not is_search_envelope({"error": "x"})
        assert not is_search_envelope([])
