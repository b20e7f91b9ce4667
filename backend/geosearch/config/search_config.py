"""
Filter Panel Configuration

Declares which filter sections the search UI shows, in what order, and
with which options:
- Date: range picker and "since N days/weeks/months" mode
- Location: hierarchical tree (disabled by default)
- Keywords: checkbox list with search
- Properties: fixed property toggles backed by PROPERTY_FILTERS
"""
from dataclasses import asdict, dataclass, field
from typing import Optional, Union


@dataclass
class FilterOption:
    value: str
    label: str
    description: Optional[str] = None


@dataclass
class BaseFilterConfig:
    """Fields shared by every filter section"""

    id: str
    label: str
    type: str
    enabled: bool
    order: int  # lower = higher up
    default_expanded: bool = True


@dataclass
class DateFilterConfig(BaseFilterConfig):
    range_mode: bool = True
    since_mode: bool = True
    default_mode: str = "range"
    default_since_value: int = 7
    default_since_unit: str = "days"
    default_field: str = "modified"
    show_field_selector: bool = False
    field_options: list[FilterOption] = field(default_factory=list)


@dataclass
class LocationFilterConfig(BaseFilterConfig):
    max_height: int = 300
    show_search: bool = False


@dataclass
class KeywordsFilterConfig(BaseFilterConfig):
    max_height: int = 300
    show_search: bool = True
    group_by_category: bool = True
    initial_display_count: int = 10


@dataclass
class PropertiesFilterConfig(BaseFilterConfig):
    options: list[FilterOption] = field(default_factory=list)


FilterConfig = Union[DateFilterConfig, LocationFilterConfig, KeywordsFilterConfig, PropertiesFilterConfig]


@dataclass
class FiltersConfig:
    date: DateFilterConfig
    location: LocationFilterConfig
    keywords: KeywordsFilterConfig
    properties: PropertiesFilterConfig

    def all(self) -> list[FilterConfig]:
        return [self.date, self.location, self.keywords, self.properties]


DATE_FIELD_OPTIONS = [
    FilterOption("modified", "Date Modified", "Last modified date of the record (most reliable)"),
    FilterOption("created", "Date Created", "Date the record was created in the system"),
    FilterOption("fd_acquisition_date", "Acquisition Date", "Date the data was acquired or captured"),
    FilterOption("fd_publish_date", "Publish Date", "Date the data was published"),
]

PROPERTY_OPTIONS = [
    FilterOption("has_thumbnail", "Has Thumbnail", "Filter to items with preview images"),
    FilterOption("has_spatial", "Has Spatial Info", "Filter to items with geographic coordinates"),
    FilterOption("has_temporal", "Has Temporal Info", "Filter to items with date/time information"),
    FilterOption("is_downloadable", "Downloadable", "Filter to items that can be downloaded"),
]


FILTERS = FiltersConfig(
    date=DateFilterConfig(
        id="date",
        label="Date",
        type="date",
        enabled=True,
        order=1,
        field_options=list(DATE_FIELD_OPTIONS),
    ),
    location=LocationFilterConfig(
        id="location",
        label="Location Hierarchy",
        type="tree",
        enabled=False,
        order=2,
    ),
    keywords=KeywordsFilterConfig(
        id="keywords",
        label="Keywords",
        type="checkbox",
        enabled=True,
        order=3,
    ),
    properties=PropertiesFilterConfig(
        id="properties",
        label="Properties",
        type="checkbox",
        enabled=True,
        order=4,
        options=list(PROPERTY_OPTIONS),
    ),
)


def date_field_names() -> set[str]:
    return {opt.value for opt in FILTERS.date.field_options}


def get_public_config(default_page_size: int = 48, default_sort: str = "score desc") -> dict:
    """Config for frontend consumption; excludes backend-only settings"""
    return {
        "filters": {cfg.id: asdict(cfg) for cfg in FILTERS.all()},
        "pagination": {"default_page_size": default_page_size},
        "default_sort": default_sort,
    }


def get_enabled_filters() -> list[FilterConfig]:
    """Enabled filter sections sorted by display order"""
    return sorted((cfg for cfg in FILTERS.all() if cfg.enabled), key=lambda cfg: cfg.order)


def is_filter_enabled(filter_id: str) -> bool:
    cfg = getattr(FILTERS, filter_id, None)
    return bool(cfg is not None and getattr(cfg, "enabled", False))
