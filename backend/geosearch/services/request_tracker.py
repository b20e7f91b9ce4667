"""Request bookkeeping for superseded searches and offset pagination.

Search and facet requests for the same filter state may be in flight
concurrently.  When the filters change, older responses must not
overwrite newer ones: every request takes a generation token and its
result is applied only while that token is still current.

"Load more" is serialized separately: the next offset is requested only
after the prior page resolved, and repeated triggers for the same offset
are refused while one is pending.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from geosearch.domain.search.ports import CancellationToken

logger = logging.getLogger(__name__)


# ── Generation counter ──────────────────────────────────────────────────


class RequestGeneration:
    """Monotonically increasing counter compared at resolution time."""

    def __init__(self) -> None:
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def begin(self) -> GenerationToken:
        """Start a new generation; every earlier token becomes stale."""
        self._current += 1
        return GenerationToken(self, self._current)

    def is_current(self, token: GenerationToken) -> bool:
        return token.tracker is self and token.generation == self._current

    def accept(self, token: GenerationToken, what: str = "response") -> bool:
        """True if a result tagged with *token* may be applied."""
        if self.is_current(token):
            return True
        logger.debug(
            "Discarding stale %s (generation %d, current %d)",
            what,
            token.generation,
            self._current,
        )
        return False


@dataclass(frozen=True, eq=False)
class GenerationToken(CancellationToken):
    """Cancelled as soon as a newer generation begins."""

    tracker: RequestGeneration
    generation: int

    def is_cancelled(self) -> bool:
        return not self.tracker.is_current(self)


# ── Load-more latch ─────────────────────────────────────────────────────


class LoadMoreLatch:
    """In-flight / has-more guard for offset pagination."""

    def __init__(self, next_offset: int = 0, has_more: bool = True) -> None:
        self._next_offset = next_offset
        self._has_more = has_more
        self._in_flight: int | None = None

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def next_offset(self) -> int:
        return self._next_offset

    def try_acquire(self, offset: int | None = None) -> bool:
        """Claim the next page.  Refused while a page is pending or exhausted."""
        if offset is None:
            offset = self._next_offset
        if self._in_flight is not None:
            logger.debug("Load more at %d suppressed; %d in flight", offset, self._in_flight)
            return False
        if not self._has_more or offset != self._next_offset:
            return False
        self._in_flight = offset
        return True

    def release(self, next_offset: int, has_more: bool) -> None:
        """Record the resolved page and unlock the following one."""
        self._in_flight = None
        self._next_offset = next_offset
        self._has_more = has_more

    def abort(self) -> None:
        """Unlock after a failed request without advancing."""
        self._in_flight = None

    def reset(self) -> None:
        """Start over, e.g. after the filters changed."""
        self._in_flight = None
        self._next_offset = 0
        self._has_more = True


__all__ = ["RequestGeneration", "GenerationToken", "LoadMoreLatch"]
