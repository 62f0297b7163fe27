"""Protocols for the engine's external collaborators.

These enable dependency injection and testing: the resolver only needs
something that can search, and the review workflow only needs something
that can store track matches.
"""

from typing import Protocol

from vinylmatch.db.models import TrackMatch
from vinylmatch.models.enums import Platform, TrackStatus
from vinylmatch.models.search import SearchResult


class SearchProvider(Protocol):
    """Fallback search capability.

    Given a free-text query, return a small list of candidate tracks.
    Implementations raise on upstream failure; the resolver degrades any
    error to "no results".
    """

    def search(self, query: str) -> list[SearchResult]:
        """Search for candidate tracks."""
        ...


class MatchStore(Protocol):
    """Match Persistence Interface.

    At most one match exists per ``(release_id, track_index)``: saving
    again replaces the previous row.
    """

    def save_match(
        self,
        release_id: int,
        track_index: int,
        match_url: str,
        confidence: float,
        *,
        platform: Platform = Platform.YOUTUBE,
        approved: bool | None = None,
        status: TrackStatus = TrackStatus.PENDING,
        verified_by: str | None = None,
    ) -> TrackMatch:
        """Insert or replace the match for one release track."""
        ...

    def get_match(self, release_id: int, track_index: int) -> TrackMatch | None:
        """Stored match for one release track, if any."""
        ...

    def get_matches_for_release(self, release_id: int) -> list[TrackMatch]:
        """All stored matches of a release, ordered by track index."""
        ...

    def delete_match(self, release_id: int, track_index: int) -> bool:
        """Delete one match. Returns whether a row existed."""
        ...

    def delete_matches_for_release(self, release_id: int) -> int:
        """Delete every match of a release. Returns the number deleted."""
        ...
