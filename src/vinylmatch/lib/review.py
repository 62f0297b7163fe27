"""Review bucket policy for matched tracks.

Buckets work on the 0-1 confidence scale used by the review layer:

- top    (>= 0.92): auto-approved, no human step
- fast   (0.85-0.92): pre-selected for one-click batch approval
- review (0.65-0.85): needs an explicit human decision
- hide   (< 0.65): hidden by default, shown with the low-confidence toggle

These thresholds are deliberately separate from the engine's internal
high/medium/low triage.
"""

from collections.abc import Iterable
from typing import Protocol

from vinylmatch.models.enums import MatchBucket, TrackStatus

TOP_HIT_THRESHOLD = 0.92
FAST_TRACK_THRESHOLD = 0.85
NEEDS_REVIEW_THRESHOLD = 0.65


class ReviewedTrack(Protocol):
    """Anything carrying a review status and a bucket."""

    @property
    def status(self) -> TrackStatus: ...

    @property
    def bucket(self) -> MatchBucket: ...


def classify_bucket(confidence: float) -> MatchBucket:
    """Review bucket for a 0-1 confidence."""
    if confidence >= TOP_HIT_THRESHOLD:
        return MatchBucket.TOP
    if confidence >= FAST_TRACK_THRESHOLD:
        return MatchBucket.FAST
    if confidence >= NEEDS_REVIEW_THRESHOLD:
        return MatchBucket.REVIEW
    return MatchBucket.HIDE


def is_track_settled(track: ReviewedTrack) -> bool:
    """Whether a track no longer blocks release approval."""
    return track.status is TrackStatus.APPROVED or track.bucket is MatchBucket.TOP


def can_approve_release(tracks: Iterable[ReviewedTrack]) -> bool:
    """Whether every track is human-approved or an auto-approved top hit.

    Pure function of the current track states. Callers recompute it after
    every track change instead of storing the answer.
    """
    return all(is_track_settled(track) for track in tracks)


def count_buckets(tracks: Iterable[ReviewedTrack]) -> dict[MatchBucket, int]:
    """Count tracks per bucket (all buckets present, zero included)."""
    counts = dict.fromkeys(MatchBucket, 0)
    for track in tracks:
        counts[track.bucket] += 1
    return counts


def visible_tracks[T: ReviewedTrack](
    tracks: Iterable[T], show_low_confidence: bool = False
) -> list[T]:
    """Tracks shown in the review queue.

    Low-confidence tracks are filtered from view only; they stay stored
    and come back with ``show_low_confidence=True``.
    """
    if show_low_confidence:
        return list(tracks)
    return [track for track in tracks if track.bucket is not MatchBucket.HIDE]


def blocking_tracks[T: ReviewedTrack](tracks: Iterable[T]) -> list[T]:
    """Tracks that keep a release from being approved."""
    return [track for track in tracks if not is_track_settled(track)]
