"""Unit tests for Solr filter-query fragment builders."""

from datetime import date, datetime

import pytest

from geosearch.domain.common.query import BoundingBox, SpatialOperator
from geosearch.domain.locations.catalog import LOCATION_TO_VOYAGER, LocationMapping
from geosearch.infra.query.filter_query import (
    PROPERTY_FILTERS,
    build_date_range_query,
    build_filter_query,
    build_keyword_filter_query,
    build_location_filter_queries,
    build_property_filter_queries,
    build_since_date,
    build_spatial_params,
    escape_query_value,
)

SINGLE_FIELD_MAPPING = {"us": {"field": "country", "value": "United States"}}
TWO_FIELD_MAPPING = {
    "us": {"field": "country", "value": "United States"},
    "ca-state": {"field": "state", "value": "California"},
}


class TestEscapeQueryValue:
    def test_wraps_in_quotes(self):
        assert escape_query_value("GeoTIFF") == '"GeoTIFF"'

    def test_escapes_embedded_quotes(self):
        assert escape_query_value('a"b') == '"a\\"b"'

    def test_backslash_passes_through(self):
        assert escape_query_value("C:\\data") == '"C:\\data"'


class TestLocationFilterQueries:
    def test_empty_selection(self):
        assert build_location_filter_queries([], SINGLE_FIELD_MAPPING) == []
        assert build_location_filter_queries(None, SINGLE_FIELD_MAPPING) == []

    def test_single_location(self):
        assert build_location_filter_queries(["us"], SINGLE_FIELD_MAPPING) == [
            '(country:("United States"))'
        ]

    def test_two_fields_stay_in_one_fragment(self):
        fragments = build_location_filter_queries(["us", "ca-state"], TWO_FIELD_MAPPING)
        assert fragments == ['(country:("United States") OR state:("California"))']

    def test_unknown_ids_skipped(self):
        fragments = build_location_filter_queries(["unknown", "us"], SINGLE_FIELD_MAPPING)
        assert fragments == ['(country:("United States"))']

    def test_only_unknown_ids(self):
        assert build_location_filter_queries(["nope"], SINGLE_FIELD_MAPPING) == []

    def test_values_grouped_by_field_in_first_seen_order(self):
        mapping = {
            "a": LocationMapping("grp_State", "Texas"),
            "b": LocationMapping("grp_Country", "Canada"),
            "c": LocationMapping("grp_State", "Ohio"),
        }
        fragments = build_location_filter_queries(["a", "b", "c", "a"], mapping)
        assert fragments == ['(grp_State:("Texas" OR "Ohio") OR grp_Country:("Canada"))']

    def test_catalog_mapping_uses_flagged_country_values(self):
        [fragment] = build_location_filter_queries(["can"], LOCATION_TO_VOYAGER)
        assert fragment == '(grp_Country:("\U0001F1E8\U0001F1E6 Canada"))'


class TestKeywordFilterQuery:
    def test_two_keywords(self):
        assert build_keyword_filter_query(["a", "b"]) == 'keywords:("a" OR "b")'

    def test_quote_escaped(self):
        assert build_keyword_filter_query(['a"b']) == 'keywords:("a\\"b")'

    def test_custom_field(self):
        assert build_keyword_filter_query(["x"], field="tag_tags") == 'tag_tags:("x")'

    @pytest.mark.parametrize("keywords", [None, [], ["", None]])
    def test_empty(self, keywords):
        assert build_keyword_filter_query(keywords) is None

    def test_duplicates_collapsed(self):
        assert build_keyword_filter_query(["a", "a", "b"]) == 'keywords:("a" OR "b")'


class TestTaggedFilterQuery:
    def test_single_value(self):
        assert build_filter_query("format", ["GeoTIFF"]) == '{!tag=format}format:("GeoTIFF")'

    def test_multiple_values(self):
        assert (
            build_filter_query("format_type", ["File", "Layer"])
            == '{!tag=format_type}format_type:("File" OR "Layer")'
        )

    def test_empty(self):
        assert build_filter_query("format", []) is None
        assert build_filter_query("", ["x"]) is None


class TestPropertyFilterQueries:
    @pytest.mark.parametrize("prop, expected", [
        ("has_thumbnail", '(format_category:("GIS" OR "Image" OR "Map" OR "Document"))'),
        ("has_spatial", "geometry_type:*"),
        ("has_temporal", "fi_year:*"),
        ("is_downloadable", '(format_type:("File" OR "Dataset" OR "Record" OR "Layer"))'),
    ])
    def test_known_properties(self, prop, expected):
        assert build_property_filter_queries([prop]) == [expected]

    def test_unknown_property_dropped(self):
        assert build_property_filter_queries(["unknown_property"]) == []

    def test_input_order_kept_and_duplicates_collapsed(self):
        result = build_property_filter_queries(["has_temporal", "has_spatial", "has_temporal"])
        assert result == ["fi_year:*", "geometry_type:*"]

    def test_table_covers_four_properties(self):
        assert set(PROPERTY_FILTERS) == {
            "has_thumbnail", "has_spatial", "has_temporal", "is_downloadable",
        }


class TestDateRangeQuery:
    def test_closed_range(self):
        assert (
            build_date_range_query(date(2024, 1, 1), date(2024, 12, 31))
            == "modified:[2024-01-01T00:00:00.000Z TO 2024-12-31T23:59:59.999Z]"
        )

    def test_open_end(self):
        assert build_date_range_query(date(2024, 1, 1)) == "modified:[2024-01-01T00:00:00.000Z TO *]"

    def test_open_start_custom_field(self):
        assert (
            build_date_range_query(None, date(2020, 6, 30), field="fd_publish_date")
            == "fd_publish_date:[* TO 2020-06-30T23:59:59.999Z]"
        )

    def test_both_absent(self):
        assert build_date_range_query() is None

    def test_datetime_truncated_to_day(self):
        assert (
            build_date_range_query(datetime(2024, 5, 6, 17, 30))
            == "modified:[2024-05-06T00:00:00.000Z TO *]"
        )

    def test_iso_strings(self):
        assert (
            build_date_range_query("2024-01-01", "2024-01-31T08:00:00Z")
            == "modified:[2024-01-01T00:00:00.000Z TO 2024-01-31T23:59:59.999Z]"
        )

    def test_unparseable_string_counts_as_absent(self):
        assert build_date_range_query("not-a-date") is None
        assert build_date_range_query("garbage", "2024-01-31") == "modified:[* TO 2024-01-31T23:59:59.999Z]"


class TestSinceDate:
    @pytest.mark.parametrize("value, unit, expected", [
        (7, "days", date(2024, 3, 3)),
        (2, "weeks", date(2024, 2, 25)),
        (1, "months", date(2024, 2, 10)),
        (1, "years", date(2023, 3, 10)),
    ])
    def test_units(self, value, unit, expected):
        assert build_since_date(value, unit, today=date(2024, 3, 10)) == expected

    def test_month_end_clamps(self):
        assert build_since_date(1, "months", today=date(2024, 3, 31)) == date(2024, 2, 29)

    @pytest.mark.parametrize("value, unit", [(-1, "days"), (3, "fortnights"), ("x", "days")])
    def test_invalid(self, value, unit):
        assert build_since_date(value, unit, today=date(2024, 3, 10)) is None


class TestSpatialParams:
    def test_nothing_set(self):
        assert build_spatial_params() == []

    def test_place_name(self):
        assert build_spatial_params(place="Denver") == [("place", "Denver"), ("place.op", "within")]

    def test_bbox_wins_over_place(self):
        params = build_spatial_params(
            place="Denver",
            bbox=BoundingBox(-105.5, 39.5, -104, 40.25),
            op=SpatialOperator.INTERSECTS,
        )
        assert params == [("place", "-105.5,39.5,-104,40.25"), ("place.op", "intersects")]

    @pytest.mark.parametrize("value, unit", [(3000, "years"), (10**12, "days"), (10**6, "months")])
    def test_out_of_range_window_yields_none(self, value, unit):
        assert build_since_date(value, unit, today=date(2024, 1, 1)) is None
