"""Tests for mix-aware string and duration similarity."""

import pytest

from vinylmatch.lib.similarity import (
    calculate_duration_similarity,
    calculate_string_similarity,
    levenshtein_similarity,
    round_half_up,
)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(42.5, 43), (42.4, 42), (43.5, 44), (0.0, 0), (99.5, 100)],
    )
    def test_rounds_half_up(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected


class TestLevenshteinSimilarity:
    def test_both_empty_are_identical(self) -> None:
        assert levenshtein_similarity("", "") == 100

    def test_identical(self) -> None:
        assert levenshtein_similarity("spastik", "spastik") == 100

    def test_completely_different(self) -> None:
        assert levenshtein_similarity("abc", "xyz") == 0

    def test_partial(self) -> None:
        # 3 edits over 7 characters
        assert levenshtein_similarity("kitten", "sitting") == 57


class TestStringSimilarity:
    """Tests for calculate_string_similarity."""

    def test_case_and_whitespace_insensitive_exact_match(self) -> None:
        assert calculate_string_similarity("Daft Punk", "  daft punk ") == 100

    def test_same_base_incompatible_mix(self) -> None:
        # 95 * 0.8 + 20 * 0.2
        assert (
            calculate_string_similarity("Spastik (Dub Mix)", "Spastik (Radio Edit)")
            == 80
        )

    def test_same_base_same_mix(self) -> None:
        assert calculate_string_similarity("Spastik (Dub Mix)", "Spastik (Dub)") == 96

    def test_same_base_original_substitute(self) -> None:
        # 95 * 0.8 + 75 * 0.2
        assert calculate_string_similarity("Spastik (Radio Edit)", "Spastik") == 91

    def test_different_bases(self) -> None:
        # 0 * 0.75 + 100 * 0.25
        assert calculate_string_similarity("abc", "xyz") == 25

    def test_non_strings_count_as_empty(self) -> None:
        assert calculate_string_similarity(None, "") == 100  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("a", "b"),
        [
            ("Strings of Life", "Strings of Life (Original Mix)"),
            ("Sueño Latino", "Sueno Latino"),
            ("", "Anything"),
        ],
    )
    def test_bounded(self, a: str, b: str) -> None:
        assert 0 <= calculate_string_similarity(a, b) <= 100


class TestDurationSimilarity:
    """Tests for calculate_duration_similarity."""

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            (200, 200, 100),
            (200, 202, 100),
            (200, 203, 80),
            (200, 205, 80),
            (200, 206, 60),
            (200, 210, 60),
            (200, 211, 40),
            (200, 230, 40),
            (200, 231, 20),
            (0, 600, 20),
        ],
    )
    def test_bands(self, a: int, b: int, expected: int) -> None:
        assert calculate_duration_similarity(a, b) == expected

    def test_symmetric(self) -> None:
        assert calculate_duration_similarity(180, 190) == calculate_duration_similarity(
            190, 180
        )
