"""Review layer view models."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from vinylmatch.lib.review import ReviewedTrack, classify_bucket, count_buckets
from vinylmatch.models.enums import MatchBucket, Platform, TrackStatus


class TrackReview(BaseModel):
    """One track's stored match as seen by a reviewer.

    Attributes:
        release_id: Release identifier.
        track_index: Zero-based track index.
        platform: Platform of the matched audio.
        match_url: Matched audio URL.
        confidence: Match confidence on the 0-1 review scale.
        status: Current human review status.
        verified_by: Who made the last decision.
        verified_at: When the last decision was made.
    """

    model_config = ConfigDict(frozen=True)

    release_id: int
    track_index: int
    platform: Platform = Platform.YOUTUBE
    match_url: str = ""
    confidence: float = Field(ge=0.0, le=1.0)
    status: TrackStatus = TrackStatus.PENDING
    verified_by: str | None = None
    verified_at: datetime | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def bucket(self) -> MatchBucket:
        """Review bucket derived from confidence."""
        return classify_bucket(self.confidence)


class BucketSummary(BaseModel):
    """Per-bucket track counts for one release."""

    model_config = ConfigDict(frozen=True)

    top_hit: int = 0
    fast_track: int = 0
    needs_review: int = 0
    dont_bother: int = 0

    @classmethod
    def from_tracks(cls, tracks: Iterable[ReviewedTrack]) -> BucketSummary:
        counts = count_buckets(tracks)
        return cls(
            top_hit=counts[MatchBucket.TOP],
            fast_track=counts[MatchBucket.FAST],
            needs_review=counts[MatchBucket.REVIEW],
            dont_bother=counts[MatchBucket.HIDE],
        )

    @property
    def total(self) -> int:
        return self.top_hit + self.fast_track + self.needs_review + self.dont_bother


def calculate_bucket_summary(tracks: Iterable[ReviewedTrack]) -> BucketSummary:
    """Count a release's tracks per review bucket."""
    return BucketSummary.from_tracks(tracks)
