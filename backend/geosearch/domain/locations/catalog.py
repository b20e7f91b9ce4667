"""Static location tree and its mapping onto Voyager facet fields.

Voyager groups geography into ``grp_Region``, ``grp_Country`` and
``grp_State``.  Country values carry the flag-emoji prefix exactly as
they appear in the index.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .hierarchy import LocationHierarchy, TreeNode


@dataclass(frozen=True)
class LocationMapping:
    """Backend field and literal value matched for one location node."""

    field: str
    value: str


LocationFieldMapping = Mapping[str, LocationMapping]


def _leaf(node_id: str, label: str) -> TreeNode:
    return TreeNode(id=node_id, label=label)


HIERARCHY_TREE: tuple[TreeNode, ...] = (
    TreeNode("na", "North America", (
        TreeNode("usa", "United States", (
            _leaf("ca", "California"),
            _leaf("ny", "New York"),
            _leaf("tx", "Texas"),
            _leaf("fl", "Florida"),
        )),
        _leaf("can", "Canada"),
        _leaf("mex", "Mexico"),
    )),
    TreeNode("eu", "Europe", (
        TreeNode("uk", "United Kingdom", (
            _leaf("eng", "England"),
            _leaf("sct", "Scotland"),
            _leaf("wls", "Wales"),
        )),
        _leaf("fr", "France"),
        _leaf("de", "Germany"),
        _leaf("it", "Italy"),
        _leaf("es", "Spain"),
    )),
    TreeNode("as", "Asia", (
        _leaf("jp", "Japan"),
        _leaf("cn", "China"),
        _leaf("in", "India"),
        _leaf("sg", "Singapore"),
    )),
    TreeNode("sa", "South America", (
        _leaf("br", "Brazil"),
        _leaf("ar", "Argentina"),
        _leaf("cl", "Chile"),
    )),
    TreeNode("af", "Africa", (
        _leaf("eg", "Egypt"),
        _leaf("za", "South Africa"),
        _leaf("ng", "Nigeria"),
        _leaf("ke", "Kenya"),
    )),
)


_REGION = "grp_Region"
_COUNTRY = "grp_Country"
_STATE = "grp_State"

LOCATION_TO_VOYAGER: LocationFieldMapping = MappingProxyType({
    # Regions
    "na": LocationMapping(_REGION, "North America"),
    "eu": LocationMapping(_REGION, "Europe"),
    "as": LocationMapping(_REGION, "Asia"),
    "sa": LocationMapping(_REGION, "South America"),
    "af": LocationMapping(_REGION, "Africa"),
    # Countries
    "usa": LocationMapping(_COUNTRY, "\U0001F1FA\U0001F1F8 United States"),
    "can": LocationMapping(_COUNTRY, "\U0001F1E8\U0001F1E6 Canada"),
    "mex": LocationMapping(_COUNTRY, "\U0001F1F2\U0001F1FD Mexico"),
    "uk": LocationMapping(_COUNTRY, "\U0001F1EC\U0001F1E7 United Kingdom"),
    "fr": LocationMapping(_COUNTRY, "\U0001F1EB\U0001F1F7 France"),
    "de": LocationMapping(_COUNTRY, "\U0001F1E9\U0001F1EA Germany"),
    "it": LocationMapping(_COUNTRY, "\U0001F1EE\U0001F1F9 Italy"),
    "es": LocationMapping(_COUNTRY, "\U0001F1EA\U0001F1F8 Spain"),
    "jp": LocationMapping(_COUNTRY, "\U0001F1EF\U0001F1F5 Japan"),
    "cn": LocationMapping(_COUNTRY, "\U0001F1E8\U0001F1F3 China"),
    "in": LocationMapping(_COUNTRY, "\U0001F1EE\U0001F1F3 India"),
    "sg": LocationMapping(_COUNTRY, "\U0001F1F8\U0001F1EC Singapore"),
    "br": LocationMapping(_COUNTRY, "\U0001F1E7\U0001F1F7 Brazil"),
    "ar": LocationMapping(_COUNTRY, "\U0001F1E6\U0001F1F7 Argentina"),
    "cl": LocationMapping(_COUNTRY, "\U0001F1E8\U0001F1F1 Chile"),
    "eg": LocationMapping(_COUNTRY, "\U0001F1EA\U0001F1EC Egypt"),
    "za": LocationMapping(_COUNTRY, "\U0001F1FF\U0001F1E6 South Africa"),
    "ng": LocationMapping(_COUNTRY, "\U0001F1F3\U0001F1EC Nigeria"),
    "ke": LocationMapping(_COUNTRY, "\U0001F1F0\U0001F1EA Kenya"),
    # US states
    "ca": LocationMapping(_STATE, "California"),
    "ny": LocationMapping(_STATE, "New York"),
    "tx": LocationMapping(_STATE, "Texas"),
    "fl": LocationMapping(_STATE, "Florida"),
    # UK nations (treated as states)
    "eng": LocationMapping(_STATE, "England"),
    "sct": LocationMapping(_STATE, "Scotland"),
    "wls": LocationMapping(_STATE, "Wales"),
})


_DEFAULT_HIERARCHY: LocationHierarchy | None = None


def get_default_hierarchy() -> LocationHierarchy:
    """Return the process-wide hierarchy built from :data:`HIERARCHY_TREE`."""
    global _DEFAULT_HIERARCHY
    if _DEFAULT_HIERARCHY is None:
        _DEFAULT_HIERARCHY = LocationHierarchy(HIERARCHY_TREE)
    return _DEFAULT_HIERARCHY


__all__ = [
    "LocationMapping",
    "LocationFieldMapping",
    "HIERARCHY_TREE",
    "LOCATION_TO_VOYAGER",
    "get_default_hierarchy",
]
