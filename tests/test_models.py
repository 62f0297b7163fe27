"""Tests for release input and result models."""

import pytest
from pydantic import ValidationError

from vinylmatch.models.enums import (
    CandidateSource,
    Classification,
    MatchBucket,
    Platform,
    ReviewAction,
    TrackStatus,
)
from vinylmatch.models.release import ReleaseInput, Track, TrustedVideo
from vinylmatch.models.results import (
    Candidate,
    MatchResult,
    MatchSummary,
    TrackMatchResult,
)


def _candidate(confidence: int, source: CandidateSource) -> Candidate:
    return Candidate(
        id="IluRBvnYMoY",
        title="Give Life Back to Music",
        artist="Daft Punk",
        duration=274,
        url="https://www.youtube.com/watch?v=IluRBvnYMoY",
        embed_url="https://www.youtube.com/embed/IluRBvnYMoY",
        confidence=confidence,
        source=source,
    )


class TestTrack:
    """Tests for the Track input model."""

    def test_duration_seconds(self) -> None:
        assert Track(duration="4:34").duration_seconds == 274

    @pytest.mark.parametrize("duration", ["", "abc", "1:02:03", None])
    def test_malformed_duration_defaults(self, duration: str | None) -> None:
        assert Track.model_validate({"duration": duration}).duration_seconds == 180

    def test_nulls_become_defaults(self) -> None:
        track = Track.model_validate(
            {"position": None, "title": None, "duration": None, "artists": None}
        )
        assert (track.position, track.title, track.duration) == ("", "", "")
        assert track.artists == []

    def test_primary_artist(self) -> None:
        track = Track.model_validate(
            {"title": "Touch", "artists": [{"name": ""}, {"name": "Paul Williams"}]}
        )
        assert track.primary_artist == "Paul Williams"
        assert Track(title="Touch").primary_artist is None

    def test_ignores_unknown_fields(self) -> None:
        track = Track.model_validate({"title": "Contact", "type_": "track"})
        assert track.title == "Contact"

    def test_frozen(self) -> None:
        track = Track(title="Contact")
        with pytest.raises(ValidationError):
            track.title = "Other"  # type: ignore[misc]


class TestTrustedVideo:
    def test_missing_duration_is_zero(self) -> None:
        video = TrustedVideo.model_validate(
            {"uri": "https://youtu.be/x", "duration": None}
        )
        assert video.duration == 0
        assert video.title == ""


class TestReleaseInput:
    def test_from_discogs_uses_artists_sort(self) -> None:
        release = ReleaseInput.from_discogs(
            {
                "id": 5_000_000,
                "artists_sort": "Daft Punk",
                "artists": [{"name": "Daft Punk", "id": 1289}],
                "tracklist": [{"position": "A1", "title": "Give Life Back to Music"}],
                "videos": None,
            }
        )
        assert release.artist == "Daft Punk"
        assert len(release.tracklist) == 1
        assert release.videos == []

    def test_from_discogs_joins_artist_names(self) -> None:
        release = ReleaseInput.from_discogs(
            {"id": 1, "artists": [{"name": "Blaze"}, {"name": "Palmer Brown"}]}
        )
        assert release.artist == "Blaze, Palmer Brown"

    def test_explicit_artist_wins(self) -> None:
        release = ReleaseInput.from_discogs(
            {"id": 1, "artist": "Inner City", "artists_sort": "Other"}
        )
        assert release.artist == "Inner City"


class TestCandidate:
    @pytest.mark.parametrize(
        ("confidence", "classification", "bucket"),
        [
            (95, Classification.HIGH, MatchBucket.TOP),
            (88, Classification.HIGH, MatchBucket.FAST),
            (70, Classification.MEDIUM, MatchBucket.REVIEW),
            (50, Classification.LOW, MatchBucket.HIDE),
        ],
    )
    def test_derived_tiers(
        self, confidence: int, classification: Classification, bucket: MatchBucket
    ) -> None:
        candidate = _candidate(confidence, CandidateSource.EMBEDDED)
        assert candidate.classification is classification
        assert candidate.bucket is bucket

    def test_confidence_bounds(self) -> None:
        with pytest.raises(ValidationError):
            _candidate(101, CandidateSource.SEARCH)

    def test_source_trust(self) -> None:
        assert CandidateSource.EMBEDDED.is_trusted
        assert not CandidateSource.SEARCH.is_trusted


class TestMatchSummary:
    def test_from_matches(self) -> None:
        def track(index: int, best: Candidate | None) -> TrackMatchResult:
            return TrackMatchResult(
                track_index=index,
                track_position="",
                track_title="",
                track_artist="",
                track_duration=180,
                candidates=[best] if best else [],
                best_match=best,
            )

        summary = MatchSummary.from_matches(
            [
                track(0, _candidate(95, CandidateSource.EMBEDDED)),
                track(1, _candidate(70, CandidateSource.SEARCH)),
                track(2, None),
                track(3, _candidate(99, CandidateSource.EMBEDDED)),
            ]
        )
        assert summary == MatchSummary(
            discogs_matches=2, search_matches=1, no_matches=1, total_matched=3
        )


class TestPayload:
    """The payload uses the camelCase wire contract."""

    def test_camel_case_keys(self) -> None:
        best = _candidate(95, CandidateSource.EMBEDDED)
        match = TrackMatchResult(
            track_index=0,
            track_position="A1",
            track_title="Give Life Back to Music",
            track_artist="Daft Punk",
            track_duration=274,
            candidates=[best],
            best_match=best,
        )
        result = MatchResult(
            release_id=5_000_000,
            total_tracks=13,
            processed_tracks=1,
            matches=[match],
            summary=MatchSummary.from_matches([match]),
        )

        payload = result.to_payload()

        assert set(payload) == {
            "releaseId",
            "totalTracks",
            "processedTracks",
            "matches",
            "summary",
        }
        assert payload["summary"] == {
            "discogsMatches": 1,
            "searchMatches": 0,
            "noMatches": 0,
            "totalMatched": 1,
        }
        track = payload["matches"][0]
        assert track["trackIndex"] == 0
        assert track["trackPosition"] == "A1"
        assert track["trackDuration"] == 274
        assert track["bestMatch"]["embedUrl"] == (
            "https://www.youtube.com/embed/IluRBvnYMoY"
        )
        assert track["bestMatch"]["source"] == "discogs_embedded"
        assert track["bestMatch"]["classification"] == "high"
        assert track["bestMatch"]["platform"] == "youtube"

    def test_unmatched_track_has_null_best_match(self) -> None:
        match = TrackMatchResult(
            track_index=0,
            track_position="A1",
            track_title="x",
            track_artist="y",
            track_duration=180,
        )
        assert match.model_dump(by_alias=True)["bestMatch"] is None
        assert not match.is_matched


class TestEnums:
    def test_review_action_status(self) -> None:
        assert ReviewAction.APPROVE.status is TrackStatus.APPROVED
        assert ReviewAction.REJECT.status is TrackStatus.REJECTED
        assert ReviewAction.NEEDS_REVIEW.status is TrackStatus.NEEDS_REVIEW

    def test_bucket_labels(self) -> None:
        assert MatchBucket.TOP.label == "top hit"
        assert MatchBucket.HIDE.label == "low confidence"

    def test_platform_vocabulary(self) -> None:
        assert [p.value for p in Platform] == ["youtube"]
