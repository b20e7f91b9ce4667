"""Error taxonomy shared across the search stack.

Only the network boundary raises these.  Fragment builders and response
parsers are total: bad input degrades to "no fragment" or an empty list,
so nothing in ``geosearch.infra.query`` ever raises one of these.
"""

from __future__ import annotations


class GeoSearchError(Exception):
    """Base class for all geosearch errors."""


class SearchRequestError(GeoSearchError):
    """The search backend did not return a usable response.

    Distinct from a legitimate empty result so callers can offer a retry
    instead of a "no results" message.
    """

    def __init__(
        self,
        message: str,
        *,
        endpoint: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            return f"{base} (HTTP {self.status_code})"
        return base


class InvalidResponseError(SearchRequestError):
    """The backend answered 2xx but the body was not a search envelope."""


__all__ = [
    "GeoSearchError",
    "SearchRequestError",
    "InvalidResponseError",
]
