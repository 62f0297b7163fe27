"""Data models for vinylmatch.

Public API:
    Track, TrustedVideo - Release input (tracklist entries, embedded videos)
    MixType, CandidateSource, Classification, MatchBucket, TrackStatus - Enums

Result and review models live in ``vinylmatch.models.results`` and
``vinylmatch.models.review``; they depend on the scoring library and are
imported from there directly.
"""

from vinylmatch.models.enums import (
    CandidateSource,
    Classification,
    MatchBucket,
    MixType,
    Platform,
    ReviewAction,
    TrackStatus,
)
from vinylmatch.models.release import Track, TrackArtist, TrustedVideo

__all__ = [
    "CandidateSource",
    "Classification",
    "MatchBucket",
    "MixType",
    "Platform",
    "ReviewAction",
    "Track",
    "TrackArtist",
    "TrackStatus",
    "TrustedVideo",
]
