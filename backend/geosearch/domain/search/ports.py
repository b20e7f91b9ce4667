"""Ports (abstract interfaces) for the search domain.

These define WHAT the use cases need from the outside world without
specifying HOW it's provided.  Concrete implementations live in
``geosearch.services``.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Sequence

from .models import GazetteerResult, SearchResponse

if TYPE_CHECKING:
    from geosearch.infra.query.request_builder import SearchRequest


class SearchBackend(abc.ABC):
    """Issue search and facet requests against the catalog backend.

    Implementations raise ``SearchRequestError`` on transport failure and
    return an empty :class:`SearchResponse` when nothing matched.
    """

    @abc.abstractmethod
    async def search(self, request: SearchRequest) -> SearchResponse:
        ...

    @abc.abstractmethod
    async def facets(self, request: SearchRequest) -> SearchResponse:
        ...


class Gazetteer(abc.ABC):
    """Resolve place names to geometries.  Optional enrichment only."""

    @abc.abstractmethod
    async def query(self, names: Sequence[str]) -> list[GazetteerResult]:
        ...


class CancellationToken(abc.ABC):
    """Check whether the operation this token was issued for is superseded."""

    @abc.abstractmethod
    def is_cancelled(self) -> bool:
        ...


class NeverCancelledToken(CancellationToken):
    """Token that never cancels; used when nothing can supersede a request."""

    def is_cancelled(self) -> bool:
        return False


__all__ = [
    "SearchBackend",
    "Gazetteer",
    "CancellationToken",
    "NeverCancelledToken",
]
