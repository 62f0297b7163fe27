"""Tests for the command-line interface."""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from conftest import DAFT_PUNK_VIDEO_ID
from vinylmatch.cli import main

RELEASE = {
    "id": 4_570_366,
    "title": "Random Access Memories",
    "artists_sort": "Daft Punk",
    "artists": [{"name": "Daft Punk", "id": 1289}],
    "tracklist": [
        {"position": "A1", "title": "Give Life Back to Music", "duration": "4:34"},
        {"position": "A2", "title": "Veridis Quo (Dub Mix)", "duration": "5:45"},
    ],
    "videos": [
        {
            "uri": f"https://www.youtube.com/watch?v={DAFT_PUNK_VIDEO_ID}",
            "title": "Give Life Back to Music",
            "duration": 274,
            "embed": True,
        },
        {
            "uri": "https://youtu.be/radioedit01",
            "title": "Veridis Quo (Radio Edit)",
            "duration": 345,
            "embed": True,
        },
    ],
}


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """The CLI reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def release_file(tmp_path: Path) -> Path:
    path = tmp_path / "release.json"
    path.write_text(json.dumps(RELEASE), encoding="utf-8")
    return path


@pytest.fixture
def db_args(tmp_path: Path) -> list[str]:
    return ["--db", str(tmp_path / "matches.db")]


class TestMatchCommand:
    def test_json_output(self, runner: CliRunner, release_file: Path) -> None:
        result = runner.invoke(
            main, ["match", str(release_file), "--no-search", "--json"]
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["releaseId"] == 4_570_366
        assert payload["totalTracks"] == 2
        assert payload["processedTracks"] == 2
        best = payload["matches"][0]["bestMatch"]
        assert best["id"] == DAFT_PUNK_VIDEO_ID
        assert best["confidence"] == 100
        assert best["source"] == "discogs_embedded"
        assert payload["summary"]["discogsMatches"] == 2

    def test_table_output(self, runner: CliRunner, release_file: Path) -> None:
        result = runner.invoke(main, ["match", str(release_file), "--no-search"])

        assert result.exit_code == 0, result.output
        assert "Release 4570366" in result.output
        assert "Processed 2 of 2 tracks" in result.output

    def test_invalid_json_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        result = runner.invoke(main, ["match", str(path), "--no-search"])

        assert result.exit_code != 0
        assert "Cannot read release file" in result.output

    def test_release_without_id(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "release.json"
        path.write_text(json.dumps({"tracklist": []}), encoding="utf-8")

        result = runner.invoke(main, ["match", str(path), "--no-search"])

        assert result.exit_code != 0
        assert "Invalid release document" in result.output


class TestReviewWorkflow:
    """Saving matches, listing them and applying decisions."""

    def _save(self, runner: CliRunner, db_args: list[str], release_file: Path) -> None:
        result = runner.invoke(
            main, [*db_args, "match", str(release_file), "--no-search", "--save"]
        )
        assert result.exit_code == 0, result.output

    def test_review_json(
        self, runner: CliRunner, db_args: list[str], release_file: Path
    ) -> None:
        self._save(runner, db_args, release_file)

        result = runner.invoke(main, [*db_args, "review", "4570366", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["releaseId"] == 4_570_366
        assert data["canApprove"] is False
        statuses = [t["status"] for t in data["tracks"]]
        assert statuses == ["approved", "pending"]
        assert data["tracks"][0]["bucket"] == "top"
        assert data["summary"]["top_hit"] == 1

    def test_approve_unlocks_release(
        self, runner: CliRunner, db_args: list[str], release_file: Path
    ) -> None:
        self._save(runner, db_args, release_file)

        result = runner.invoke(
            main, [*db_args, "approve", "4570366", "1", "--by", "alice"]
        )

        assert result.exit_code == 0, result.output
        assert "track 1: approved" in result.output
        assert "Release can be approved" in result.output

    def test_reject_then_flag(
        self, runner: CliRunner, db_args: list[str], release_file: Path
    ) -> None:
        self._save(runner, db_args, release_file)

        rejected = runner.invoke(main, [*db_args, "reject", "4570366", "0"])
        flagged = runner.invoke(main, [*db_args, "flag", "4570366", "1"])

        assert "track 0: rejected" in rejected.output
        assert "track 1: needs_review" in flagged.output
        assert "Release can be approved" not in flagged.output

    def test_review_empty_release(self, runner: CliRunner, db_args: list[str]) -> None:
        result = runner.invoke(main, [*db_args, "review", "99"])

        assert result.exit_code == 0, result.output
        assert "No matches stored for release 99" in result.output

    def test_approve_missing_match(
        self, runner: CliRunner, db_args: list[str]
    ) -> None:
        result = runner.invoke(main, [*db_args, "approve", "99", "0"])

        assert result.exit_code != 0
        assert "No match stored for release 99 track 0" in result.output


class TestReleaseCommands:
    def _save(self, runner: CliRunner, db_args: list[str], release_file: Path) -> None:
        result = runner.invoke(
            main, [*db_args, "match", str(release_file), "--no-search", "--save"]
        )
        assert result.exit_code == 0, result.output

    def test_approve_release_lists_blocking_tracks(
        self, runner: CliRunner, db_args: list[str], release_file: Path
    ) -> None:
        self._save(runner, db_args, release_file)

        result = runner.invoke(main, [*db_args, "approve-release", "4570366"])

        assert result.exit_code != 0
        assert "unapproved tracks 1" in result.output

    def test_approve_release_after_track_review(
        self, runner: CliRunner, db_args: list[str], release_file: Path
    ) -> None:
        self._save(runner, db_args, release_file)
        runner.invoke(main, [*db_args, "approve", "4570366", "1"])

        result = runner.invoke(
            main, [*db_args, "approve-release", "4570366", "--by", "alice"]
        )

        assert result.exit_code == 0, result.output
        assert "Release 4570366 approved (2 tracks)" in result.output

    def test_reject_release(
        self, runner: CliRunner, db_args: list[str], release_file: Path
    ) -> None:
        self._save(runner, db_args, release_file)

        result = runner.invoke(main, [*db_args, "reject-release", "4570366"])
        review = runner.invoke(main, [*db_args, "review", "4570366", "--json"])

        assert result.exit_code == 0, result.output
        assert "Release 4570366 rejected (2 tracks)" in result.output
        statuses = [t["status"] for t in json.loads(review.stdout)["tracks"]]
        assert statuses == ["rejected", "rejected"]

    def test_reject_release_without_matches(
        self, runner: CliRunner, db_args: list[str]
    ) -> None:
        result = runner.invoke(main, [*db_args, "reject-release", "99"])

        assert result.exit_code != 0
        assert "No matches stored for release 99" in result.output


class TestScoreCommand:
    def test_incompatible_mix_is_capped(self, runner: CliRunner) -> None:
        result = runner.invoke(
            main,
            [
                "score",
                "Veridis Quo (Dub Mix)",
                "Veridis Quo (Radio Edit)",
                "--artist",
                "Daft Punk",
                "--candidate-artist",
                "Daft Punk",
                "--duration",
                "345",
                "--candidate-duration",
                "345",
                "--trusted",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "84" in result.output
        assert "capped" in result.output
        assert "needs review" in result.output

    def test_exact_match(self, runner: CliRunner) -> None:
        result = runner.invoke(
            main,
            [
                "score",
                "Give Life Back to Music",
                "Give Life Back to Music",
                "--artist",
                "Daft Punk",
                "--candidate-artist",
                "Daft Punk",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "100" in result.output
        assert "top hit" in result.output
        assert "capped" not in result.output
