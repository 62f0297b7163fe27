"""Match confidence scoring and unit conversion.

The engine scores candidates on a 0-100 integer scale. The review layer
and the persisted match records use a 0-1 float scale. The two
conversion functions here are the only place the scales meet.
"""

from dataclasses import dataclass

from vinylmatch.lib.mix import extract_mix_info, is_incompatible_mix
from vinylmatch.lib.similarity import (
    calculate_duration_similarity,
    calculate_string_similarity,
    round_half_up,
)
from vinylmatch.models.enums import Classification

# Internal triage thresholds (0-100 scale)
HIGH_CONFIDENCE_THRESHOLD = 85
MEDIUM_CONFIDENCE_THRESHOLD = 65

# Points added to candidates from the release's own embedded videos
DEFAULT_TRUST_BOOST = 15

_TITLE_WEIGHT = 0.40
_ARTIST_WEIGHT = 0.35
_DURATION_WEIGHT = 0.25

# Incompatible mix types can never reach the high tier
_INCOMPATIBLE_MIX_CAP = HIGH_CONFIDENCE_THRESHOLD - 1


@dataclass(frozen=True)
class MatchScore:
    """Breakdown of one candidate's confidence.

    Attributes:
        title_similarity: Mix-aware title similarity (0-100).
        artist_similarity: Artist similarity (0-100).
        duration_similarity: Banded duration similarity (0-100).
        confidence: Final confidence after boost and caps (0-100).
        mix_capped: Whether the incompatible-mix cap lowered the score.
    """

    title_similarity: int
    artist_similarity: int
    duration_similarity: int
    confidence: int
    mix_capped: bool = False


def score_match(
    track_title: str,
    track_artist: str,
    track_duration: int,
    candidate_title: str,
    candidate_artist: str,
    candidate_duration: int,
    is_trusted_source: bool = False,
    trust_boost: int = DEFAULT_TRUST_BOOST,
) -> MatchScore:
    """Score a candidate against a track and keep the component scores.

    See calculate_match_confidence for the scoring rules.
    """
    title_similarity = calculate_string_similarity(track_title, candidate_title)
    artist_similarity = calculate_string_similarity(track_artist, candidate_artist)
    duration_similarity = calculate_duration_similarity(
        track_duration, candidate_duration
    )

    confidence = round_half_up(
        title_similarity * _TITLE_WEIGHT
        + artist_similarity * _ARTIST_WEIGHT
        + duration_similarity * _DURATION_WEIGHT
    )
    if is_trusted_source:
        confidence = min(100, confidence + trust_boost)

    mix_capped = False
    track_mix = extract_mix_info(track_title).mix_type
    candidate_mix = extract_mix_info(candidate_title).mix_type
    if (
        is_incompatible_mix(track_mix, candidate_mix)
        and confidence > _INCOMPATIBLE_MIX_CAP
    ):
        confidence = _INCOMPATIBLE_MIX_CAP
        mix_capped = True

    return MatchScore(
        title_similarity=title_similarity,
        artist_similarity=artist_similarity,
        duration_similarity=duration_similarity,
        confidence=max(0, min(100, confidence)),
        mix_capped=mix_capped,
    )


def calculate_match_confidence(
    track_title: str,
    track_artist: str,
    track_duration: int,
    candidate_title: str,
    candidate_artist: str,
    candidate_duration: int,
    is_trusted_source: bool = False,
    trust_boost: int = DEFAULT_TRUST_BOOST,
) -> int:
    """Combine title, artist and duration similarity into one confidence.

    Title weighs 40%, artist 35% (compilation credits are often wrong,
    but not often enough to ignore) and duration 25% (platform durations
    drift). Trusted sources get ``trust_boost`` points on top. A
    candidate whose mix type is incompatible with the track's is capped
    just below the high tier.

    Returns:
        Confidence from 0 to 100.
    """
    return score_match(
        track_title,
        track_artist,
        track_duration,
        candidate_title,
        candidate_artist,
        candidate_duration,
        is_trusted_source=is_trusted_source,
        trust_boost=trust_boost,
    ).confidence


def classify_confidence(confidence: int) -> Classification:
    """Internal triage tier for a 0-100 confidence.

    This is not the review bucket; see ``vinylmatch.lib.review``.
    """
    if confidence >= HIGH_CONFIDENCE_THRESHOLD:
        return Classification.HIGH
    if confidence >= MEDIUM_CONFIDENCE_THRESHOLD:
        return Classification.MEDIUM
    return Classification.LOW


def to_unit_confidence(confidence: int | float) -> float:
    """Convert a 0-100 engine confidence to the 0-1 review scale."""
    return round(max(0.0, min(100.0, float(confidence))) / 100, 4)


def to_percent_confidence(confidence: float) -> int:
    """Convert a 0-1 review confidence to the 0-100 engine scale."""
    return round_half_up(max(0.0, min(1.0, confidence)) * 100)
