"""Enumerations for vinylmatch domain models."""

from enum import StrEnum


class MixType(StrEnum):
    """Canonical mix types recognized in track titles.

    Titles may also carry freeform mix tags outside this vocabulary
    (e.g. "(Larry Levan Version)"), which are kept as plain lowercase
    strings with lower derivation confidence.
    """

    ORIGINAL = "original"
    RADIO = "radio"
    EXTENDED = "extended"
    DUB = "dub"
    REMIX = "remix"
    ACCAPELLA = "accapella"
    BEATS = "beats"
    CLEAN = "clean"
    DIRTY = "dirty"
    LIVE = "live"
    # Titles saying "instrumental" normalize to DUB; the tag still takes part
    # in compatibility checks for callers passing raw mix types.
    INSTRUMENTAL = "instrumental"


class Platform(StrEnum):
    """Audio hosting platforms a candidate can point to."""

    YOUTUBE = "youtube"


class CandidateSource(StrEnum):
    """Where a candidate was discovered.

    The values keep the names used in the engine payload: embedded videos
    come from the release's Discogs page, search results from the fallback
    search provider.
    """

    EMBEDDED = "discogs_embedded"
    SEARCH = "youtube_search"

    @property
    def is_trusted(self) -> bool:
        """Whether candidates from this source get the trust boost."""
        return self is CandidateSource.EMBEDDED


class Classification(StrEnum):
    """Internal candidate triage tier on the 0-100 engine scale."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MatchBucket(StrEnum):
    """Human review tier on the 0-1 review scale."""

    TOP = "top"
    FAST = "fast"
    REVIEW = "review"
    HIDE = "hide"

    @property
    def label(self) -> str:
        """Human-readable label for display."""
        match self:
            case MatchBucket.TOP:
                return "top hit"
            case MatchBucket.FAST:
                return "fast track"
            case MatchBucket.REVIEW:
                return "needs review"
            case MatchBucket.HIDE:
                return "low confidence"


class TrackStatus(StrEnum):
    """Human review status of one track's match.

    There is no terminal state: any status can move to any other through
    an explicit review action.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    NEEDS_REVIEW = "needs_review"


class ReviewAction(StrEnum):
    """Actions a reviewer can apply to a track."""

    APPROVE = "approved"
    REJECT = "rejected"
    NEEDS_REVIEW = "needs_review"

    @property
    def status(self) -> TrackStatus:
        """Track status this action leads to."""
        return TrackStatus(self.value)
