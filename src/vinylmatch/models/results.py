"""Matching result models.

Field names are snake_case in Python; ``MatchResult.to_payload()`` renders
the camelCase wire contract consumed by the storefront.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from vinylmatch.lib.confidence import classify_confidence, to_unit_confidence
from vinylmatch.lib.review import classify_bucket
from vinylmatch.models.enums import (
    CandidateSource,
    Classification,
    MatchBucket,
    Platform,
)


class ResultModel(BaseModel):
    """Base model for engine output."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Candidate(ResultModel):
    """A scored audio source for one track.

    Candidates are created fresh per matching run and never mutated after
    scoring.

    Attributes:
        platform: Hosting platform of the audio.
        id: Platform video identifier.
        title: Title reported by the source.
        artist: Artist the source is attributed to.
        duration: Duration in seconds.
        url: Playable URL.
        embed_url: Embeddable player URL.
        thumbnail_url: Preview image, when the source provides one.
        confidence: Match confidence on the 0-100 engine scale.
        source: Whether the candidate came from the release's embedded
            videos or from fallback search.
    """

    platform: Platform = Platform.YOUTUBE
    id: str
    title: str
    artist: str
    duration: int
    url: str
    embed_url: str | None = None
    thumbnail_url: str | None = None
    confidence: int = Field(ge=0, le=100)
    source: CandidateSource

    @computed_field  # type: ignore[prop-decorator]
    @property
    def classification(self) -> Classification:
        """Internal triage tier derived from confidence."""
        return classify_confidence(self.confidence)

    @property
    def unit_confidence(self) -> float:
        """Confidence on the 0-1 review scale."""
        return to_unit_confidence(self.confidence)

    @property
    def bucket(self) -> MatchBucket:
        """Human review bucket for this candidate."""
        return classify_bucket(self.unit_confidence)


class TrackMatchResult(ResultModel):
    """Matching outcome for one release track.

    Attributes:
        track_index: Zero-based index in the release tracklist.
        track_position: Position label, e.g. "A1".
        track_title: Title as listed on the release.
        track_artist: Track artist, or the release artist when uncredited.
        track_duration: Duration in seconds used for matching.
        candidates: Accepted candidates, highest confidence first.
        best_match: Top candidate, or None when nothing was accepted.
    """

    track_index: int
    track_position: str
    track_title: str
    track_artist: str
    track_duration: int
    candidates: list[Candidate] = Field(default_factory=list)
    best_match: Candidate | None = None

    @property
    def is_matched(self) -> bool:
        return self.best_match is not None


class MatchSummary(ResultModel):
    """Provenance tallies over the processed tracks."""

    discogs_matches: int = 0
    search_matches: int = 0
    no_matches: int = 0
    total_matched: int = 0

    @classmethod
    def from_matches(cls, matches: list[TrackMatchResult]) -> MatchSummary:
        """Tally best-match sources across track results."""
        embedded = sum(
            1
            for m in matches
            if m.best_match and m.best_match.source is CandidateSource.EMBEDDED
        )
        searched = sum(
            1
            for m in matches
            if m.best_match and m.best_match.source is CandidateSource.SEARCH
        )
        return cls(
            discogs_matches=embedded,
            search_matches=searched,
            no_matches=len(matches) - embedded - searched,
            total_matched=embedded + searched,
        )


class MatchResult(ResultModel):
    """Complete result of matching one release.

    Attributes:
        release_id: Release identifier.
        total_tracks: Tracks listed on the release.
        processed_tracks: Tracks actually matched (capped).
        matches: Per-track results ordered by track index.
        summary: Provenance tallies.
    """

    release_id: int
    total_tracks: int
    processed_tracks: int
    matches: list[TrackMatchResult] = Field(default_factory=list)
    summary: MatchSummary = Field(default_factory=MatchSummary)

    def to_payload(self) -> dict[str, Any]:
        """Render the camelCase JSON-compatible payload."""
        return self.model_dump(mode="json", by_alias=True)
