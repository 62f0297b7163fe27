"""Tests for TrackMatchRepository."""

from vinylmatch.db import TrackMatchRepository
from vinylmatch.models.enums import TrackStatus


class TestSaveMatch:
    def test_insert(self, repository: TrackMatchRepository) -> None:
        match = repository.save_match(1, 0, "https://youtube.com/watch?v=a", 0.95)

        assert match.id is not None
        assert match.status is TrackStatus.PENDING
        assert match.approved is None
        assert match.verified_at is not None

    def test_upsert_keeps_one_row_per_track(
        self, repository: TrackMatchRepository
    ) -> None:
        first = repository.save_match(1, 0, "https://youtube.com/watch?v=a", 0.70)
        second = repository.save_match(
            1,
            0,
            "https://youtube.com/watch?v=b",
            0.90,
            approved=True,
            status=TrackStatus.APPROVED,
            verified_by="alice",
        )

        rows = repository.get_matches_for_release(1)
        assert len(rows) == 1
        assert second.id == first.id
        assert second.created_at == first.created_at
        assert rows[0].match_url == "https://youtube.com/watch?v=b"
        assert rows[0].confidence == 0.90
        assert rows[0].approved is True
        assert rows[0].verified_by == "alice"

    def test_same_index_on_other_release_is_separate(
        self, repository: TrackMatchRepository
    ) -> None:
        repository.save_match(1, 0, "https://youtube.com/watch?v=a", 0.9)
        repository.save_match(2, 0, "https://youtube.com/watch?v=b", 0.9)

        assert len(repository.get_matches_for_release(1)) == 1
        assert len(repository.get_matches_for_release(2)) == 1


class TestQueries:
    def test_matches_ordered_by_track_index(
        self, repository: TrackMatchRepository
    ) -> None:
        for index in (2, 0, 1):
            repository.save_match(7, index, f"https://youtube.com/watch?v={index}", 0.9)

        rows = repository.get_matches_for_release(7)
        assert [r.track_index for r in rows] == [0, 1, 2]

    def test_get_match(self, repository: TrackMatchRepository) -> None:
        repository.save_match(1, 3, "https://youtube.com/watch?v=a", 0.8)

        assert repository.get_match(1, 3) is not None
        assert repository.get_match(1, 4) is None

    def test_unknown_release_is_empty(self, repository: TrackMatchRepository) -> None:
        assert repository.get_matches_for_release(404) == []


class TestDelete:
    def test_delete_match(self, repository: TrackMatchRepository) -> None:
        repository.save_match(1, 0, "https://youtube.com/watch?v=a", 0.8)

        assert repository.delete_match(1, 0) is True
        assert repository.delete_match(1, 0) is False
        assert repository.get_match(1, 0) is None

    def test_delete_matches_for_release(
        self, repository: TrackMatchRepository
    ) -> None:
        for index in range(3):
            repository.save_match(1, index, "https://youtube.com/watch?v=a", 0.8)
        repository.save_match(2, 0, "https://youtube.com/watch?v=b", 0.8)

        assert repository.delete_matches_for_release(1) == 3
        assert repository.get_matches_for_release(1) == []
        assert len(repository.get_matches_for_release(2)) == 1
