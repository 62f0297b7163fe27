"""Human review workflow for stored track matches."""

import logging

from vinylmatch.db.models import TrackMatch
from vinylmatch.exceptions import (
    InvalidInputError,
    MatchNotFoundError,
    ReleaseNotApprovableError,
)
from vinylmatch.lib.confidence import to_unit_confidence
from vinylmatch.lib.review import (
    blocking_tracks,
    can_approve_release,
    visible_tracks,
)
from vinylmatch.models.enums import MatchBucket, ReviewAction, TrackStatus
from vinylmatch.models.results import Candidate, MatchResult
from vinylmatch.models.review import (
    BucketSummary,
    TrackReview,
    calculate_bucket_summary,
)
from vinylmatch.services.protocols import MatchStore

logger = logging.getLogger(__name__)

# Stored ``approved`` value per review decision
_APPROVED_BY_STATUS: dict[TrackStatus, bool | None] = {
    TrackStatus.APPROVED: True,
    TrackStatus.REJECTED: False,
    TrackStatus.NEEDS_REVIEW: None,
}


def to_track_review(match: TrackMatch) -> TrackReview:
    """Convert a stored match into its review view."""
    return TrackReview(
        release_id=match.release_id,
        track_index=match.track_index,
        platform=match.platform,
        match_url=match.match_url,
        confidence=match.confidence,
        status=match.status,
        verified_by=match.verified_by,
        verified_at=match.verified_at,
    )


def _parse_action(action: ReviewAction | str) -> ReviewAction:
    try:
        return ReviewAction(action)
    except ValueError as e:
        valid = ", ".join(a.value for a in ReviewAction)
        raise InvalidInputError(
            f"Unknown review action {action!r} (expected one of: {valid})"
        ) from e


class ReviewService:
    """Record engine matches and apply human review decisions.

    Release approvability is recomputed from the stored track states on
    every call and never stored.
    """

    def __init__(self, store: MatchStore) -> None:
        """Initialize the service.

        Args:
            store: Match persistence backend.
        """
        self._store = store

    def record_best_matches(
        self, result: MatchResult, verified_by: str | None = None
    ) -> list[TrackReview]:
        """Persist the best match of every matched track.

        Top-hit matches are stored approved; everything else waits for a
        reviewer. Tracks without a best match are not stored.

        Args:
            result: Engine output for one release.
            verified_by: Recorded as the author of the matches.

        Returns:
            Review views of the stored matches, by track index.
        """
        recorded: list[TrackReview] = []
        for track in result.matches:
            best = track.best_match
            if best is None:
                continue
            auto_approved = best.bucket is MatchBucket.TOP
            stored = self._store.save_match(
                result.release_id,
                track.track_index,
                best.url,
                best.unit_confidence,
                platform=best.platform,
                approved=auto_approved,
                status=TrackStatus.APPROVED if auto_approved else TrackStatus.PENDING,
                verified_by=verified_by,
            )
            recorded.append(to_track_review(stored))

        auto = sum(1 for r in recorded if r.status is TrackStatus.APPROVED)
        logger.info(
            "Recorded %d matches for release %d (%d auto-approved)",
            len(recorded),
            result.release_id,
            auto,
        )
        return recorded

    def apply_action(
        self,
        release_id: int,
        track_index: int,
        action: ReviewAction | str,
        verified_by: str | None = None,
    ) -> TrackReview:
        """Apply a reviewer decision to one track.

        Applying the same action twice leaves a single row in the same
        state.

        Args:
            release_id: Release identifier.
            track_index: Zero-based track index.
            action: "approved", "rejected" or "needs_review".
            verified_by: Reviewer identity.

        Returns:
            The updated review view.

        Raises:
            InvalidInputError: If the action is unknown.
            MatchNotFoundError: If no match is stored for the track.
        """
        status = _parse_action(action).status
        match = self._require_match(release_id, track_index)

        stored = self._store.save_match(
            release_id,
            track_index,
            match.match_url,
            match.confidence,
            platform=match.platform,
            approved=_APPROVED_BY_STATUS[status],
            status=status,
            verified_by=verified_by,
        )
        logger.info(
            "Release %d track %d marked %s by %s",
            release_id,
            track_index,
            status,
            verified_by or "unknown",
        )
        return to_track_review(stored)

    def replace_match(
        self,
        release_id: int,
        track_index: int,
        candidate: Candidate,
        verified_by: str | None = None,
    ) -> TrackReview:
        """Swap in a reviewer-chosen candidate, approved.

        Used when the engine's pick was wrong but another candidate is
        right.
        """
        stored = self._store.save_match(
            release_id,
            track_index,
            candidate.url,
            to_unit_confidence(candidate.confidence),
            platform=candidate.platform,
            approved=True,
            status=TrackStatus.APPROVED,
            verified_by=verified_by,
        )
        return to_track_review(stored)

    def approve_bucket(
        self,
        release_id: int,
        bucket: MatchBucket = MatchBucket.FAST,
        verified_by: str | None = None,
    ) -> int:
        """Approve every not-yet-approved track of one bucket.

        Returns:
            Number of tracks approved.
        """
        approved = 0
        for track in self.release_tracks(release_id):
            if track.bucket is bucket and track.status is not TrackStatus.APPROVED:
                self.apply_action(
                    release_id, track.track_index, ReviewAction.APPROVE, verified_by
                )
                approved += 1
        logger.info(
            "Approved %d %s tracks of release %d", approved, bucket, release_id
        )
        return approved

    def approve_release(
        self, release_id: int, verified_by: str | None = None
    ) -> list[TrackReview]:
        """Approve a whole release.

        Only allowed once every track is human-approved or a top hit. Top
        hits that were not yet approved are approved along with the
        release.

        Args:
            release_id: Release identifier.
            verified_by: Reviewer identity.

        Returns:
            Review views of all tracks after approval.

        Raises:
            MatchNotFoundError: If the release has no stored matches.
            ReleaseNotApprovableError: If any track still blocks approval.
        """
        tracks = self._require_release(release_id)
        blocking = blocking_tracks(tracks)
        if blocking:
            raise ReleaseNotApprovableError(
                release_id, [t.track_index for t in blocking]
            )

        approved = [
            track
            if track.status is TrackStatus.APPROVED
            else self.apply_action(
                release_id, track.track_index, ReviewAction.APPROVE, verified_by
            )
            for track in tracks
        ]
        logger.info(
            "Release %d approved by %s (%d tracks)",
            release_id,
            verified_by or "unknown",
            len(approved),
        )
        return approved

    def reject_release(
        self, release_id: int, verified_by: str | None = None
    ) -> list[TrackReview]:
        """Reject every stored match of a release.

        Raises:
            MatchNotFoundError: If the release has no stored matches.
        """
        tracks = self._require_release(release_id)
        rejected = [
            self.apply_action(
                release_id, track.track_index, ReviewAction.REJECT, verified_by
            )
            for track in tracks
        ]
        logger.info(
            "Release %d rejected by %s (%d tracks)",
            release_id,
            verified_by or "unknown",
            len(rejected),
        )
        return rejected

    def release_tracks(self, release_id: int) -> list[TrackReview]:
        """All stored matches of a release, by track index."""
        return [
            to_track_review(m) for m in self._store.get_matches_for_release(release_id)
        ]

    def review_queue(
        self, release_id: int, show_low_confidence: bool = False
    ) -> list[TrackReview]:
        """Tracks shown to a reviewer; dont-bother tracks only when toggled."""
        return visible_tracks(self.release_tracks(release_id), show_low_confidence)

    def summary(self, release_id: int) -> BucketSummary:
        return calculate_bucket_summary(self.release_tracks(release_id))

    def can_approve(self, release_id: int) -> bool:
        """Whether the release can be approved right now."""
        return can_approve_release(self.release_tracks(release_id))

    def clear(self, release_id: int, track_index: int | None = None) -> int:
        """Delete one stored match, or all of a release's matches.

        Returns:
            Number of matches deleted.
        """
        if track_index is None:
            return self._store.delete_matches_for_release(release_id)
        return int(self._store.delete_match(release_id, track_index))

    def _require_release(self, release_id: int) -> list[TrackReview]:
        tracks = self.release_tracks(release_id)
        if not tracks:
            raise MatchNotFoundError(f"No matches stored for release {release_id}")
        return tracks

    def _require_match(self, release_id: int, track_index: int) -> TrackMatch:
        match = self._store.get_match(release_id, track_index)
        if match is None:
            raise MatchNotFoundError(
                f"No match stored for release {release_id} track {track_index}"
            )
        return match
