"""Test fixtures and configuration."""

import threading
from collections.abc import Callable, Iterator

import pytest
from sqlalchemy import Engine

from vinylmatch.db import TrackMatchRepository, create_memory_engine, init_db
from vinylmatch.models.release import Track, TrustedVideo
from vinylmatch.models.search import SearchResult
from vinylmatch.services import ReviewService
from vinylmatch.settings import get_settings

DAFT_PUNK_VIDEO_ID = "IluRBvnYMoY"


class FakeSearchProvider:
    """SearchProvider double that records queries.

    ``responder`` maps a query to results; raising from it simulates an
    upstream failure.
    """

    def __init__(
        self,
        responder: Callable[[str], list[SearchResult]] | None = None,
    ) -> None:
        self._responder = responder or (lambda query: [])
        self.queries: list[str] = []
        self._lock = threading.Lock()

    def search(self, query: str) -> list[SearchResult]:
        with self._lock:
            self.queries.append(query)
        return self._responder(query)


def make_result(
    video_id: str,
    title: str,
    artist: str = "Daft Punk",
    duration: int = 274,
) -> SearchResult:
    """Create a search result with canonical URLs."""
    return SearchResult(
        id=video_id,
        title=title,
        channel_or_artist=artist,
        duration_seconds=duration,
        url=f"https://youtube.com/watch?v={video_id}",
        embed_url=f"https://www.youtube.com/embed/{video_id}",
    )


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    """Settings are cached per process; isolate tests from each other."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def daft_punk_track() -> Track:
    """Create the opening track of Random Access Memories."""
    return Track(position="A1", title="Give Life Back to Music", duration="4:34")


@pytest.fixture
def daft_punk_video() -> TrustedVideo:
    """Create the matching video embedded on the release page."""
    return TrustedVideo(
        uri=f"https://www.youtube.com/watch?v={DAFT_PUNK_VIDEO_ID}",
        title="Give Life Back to Music",
        duration=274,
        embed=True,
    )


@pytest.fixture
def fake_provider() -> FakeSearchProvider:
    """Create a search provider that finds nothing."""
    return FakeSearchProvider()


@pytest.fixture
def db_engine() -> Engine:
    """Create an initialized in-memory database."""
    engine = create_memory_engine()
    init_db(engine)
    return engine


@pytest.fixture
def repository(db_engine: Engine) -> TrackMatchRepository:
    """Create a repository on the in-memory database."""
    return TrackMatchRepository(db_engine)


@pytest.fixture
def review_service(repository: TrackMatchRepository) -> ReviewService:
    """Create a review service backed by the in-memory repository."""
    return ReviewService(repository)
