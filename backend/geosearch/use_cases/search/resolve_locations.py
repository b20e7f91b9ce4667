"""ResolveLocationGeometriesUseCase — outline selected locations on the map.

Selected hierarchy nodes are looked up by label in the gazetteer.  The
gazetteer is optional enrichment: unknown IDs are skipped and a failed
lookup simply yields no geometries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from geosearch.domain.locations.hierarchy import LocationHierarchy
from geosearch.domain.search.models import GazetteerResult
from geosearch.domain.search.ports import Gazetteer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolveLocationGeometriesQuery:
    location_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class ResolveLocationGeometriesResult:
    geometries: tuple[GazetteerResult, ...]
    unresolved: tuple[str, ...] = ()


class ResolveLocationGeometriesUseCase:
    """Map selected location IDs to gazetteer geometries."""

    def __init__(self, hierarchy: LocationHierarchy) -> None:
        self._hierarchy = hierarchy

    async def execute(
        self, gazetteer: Gazetteer, query: ResolveLocationGeometriesQuery
    ) -> ResolveLocationGeometriesResult:
        names: list[str] = []
        for node_id in query.location_ids:
            node = self._hierarchy.find(node_id)
            if node is not None and node.label not in names:
                names.append(node.label)

        if not names:
            return ResolveLocationGeometriesResult(geometries=())

        results = await gazetteer.query(names)
        found = {r.name for r in results}
        unresolved = tuple(name for name in names if name not in found)
        if unresolved:
            logger.info("Gazetteer had no geometry for %s", ", ".join(unresolved))
        return ResolveLocationGeometriesResult(
            geometries=tuple(results), unresolved=unresolved
        )
