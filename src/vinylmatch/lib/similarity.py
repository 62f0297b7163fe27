"""Mix-aware string and duration similarity.

Both scorers return bounded integers on the 0-100 engine scale.
"""

from rapidfuzz.distance import Levenshtein

from vinylmatch.lib.mix import calculate_mix_compatibility, extract_mix_info

# Weights when base titles are identical: base match dominates
_EXACT_BASE_SCORE = 95
_EXACT_BASE_WEIGHT = 0.8
_EXACT_BASE_MIX_WEIGHT = 0.2

# Weights otherwise: mix mismatch matters, but less than textual difference
_BASE_WEIGHT = 0.75
_MIX_WEIGHT = 0.25

# (max |delta| seconds, score), checked in order
_DURATION_BANDS: tuple[tuple[int, int], ...] = (
    (2, 100),
    (5, 80),
    (10, 60),
    (30, 40),
)
_DURATION_FLOOR = 20


def _normalize(text: str) -> str:
    return text.lower().strip()


def round_half_up(value: float) -> int:
    """Round half up, so 42.5 scores 43 rather than banker's 42."""
    return int(value + 0.5)


def _clamp(value: int) -> int:
    return max(0, min(100, value))


def levenshtein_similarity(a: str, b: str) -> int:
    """Normalized edit-distance similarity of two strings (0-100).

    Two empty strings are identical.
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 100
    distance = Levenshtein.distance(a, b)
    return round_half_up((max_len - distance) / max_len * 100)


def calculate_string_similarity(a: str, b: str) -> int:
    """Compare two titles (or artist names) with mix awareness.

    Identical strings score 100. Otherwise base names (mix annotation
    stripped) are compared by edit distance and blended with the mix
    type compatibility, so "Track (Dub Mix)" and "Track (Radio Edit)"
    never look like the same recording.

    Args:
        a: Reference string (from the release).
        b: Candidate string.

    Returns:
        Similarity from 0 to 100.
    """
    a = a if isinstance(a, str) else ""
    b = b if isinstance(b, str) else ""

    mix_a = extract_mix_info(a)
    mix_b = extract_mix_info(b)

    if _normalize(a) == _normalize(b):
        return 100

    base_a = _normalize(mix_a.base_name)
    base_b = _normalize(mix_b.base_name)
    mix_compatibility = calculate_mix_compatibility(mix_a.mix_type, mix_b.mix_type)

    if base_a == base_b:
        return _clamp(
            round_half_up(
                _EXACT_BASE_SCORE * _EXACT_BASE_WEIGHT
                + mix_compatibility * _EXACT_BASE_MIX_WEIGHT
            )
        )

    base_similarity = levenshtein_similarity(base_a, base_b)
    return _clamp(
        round_half_up(base_similarity * _BASE_WEIGHT + mix_compatibility * _MIX_WEIGHT)
    )


def calculate_duration_similarity(a: int | float, b: int | float) -> int:
    """Banded duration similarity from the absolute difference in seconds.

    Small drift (encoding, rounding) costs little; anything beyond 30s
    flattens to a uniform low score.
    """
    difference = abs(a - b)
    for max_delta, score in _DURATION_BANDS:
        if difference <= max_delta:
            return score
    return _DURATION_FLOOR
