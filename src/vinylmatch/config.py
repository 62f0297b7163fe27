"""Configuration for vinylmatch."""

from dataclasses import dataclass
from enum import StrEnum


class SearchBackend(StrEnum):
    """Supported fallback search backends."""

    YOUTUBE = "youtube"
    YTMUSIC = "ytmusic"


@dataclass(frozen=True)
class EngineConfig:
    """Matching engine configuration.

    Attributes:
        max_tracks: Only the first N tracks of a release are matched.
        trusted_min_confidence: Acceptance floor for embedded candidates (0-100).
        search_min_confidence: Acceptance floor for search candidates (0-100).
        trusted_boost: Points added to embedded candidates' confidence.
        search_timeout: Seconds to wait for one fallback search call.
        max_workers: Tracks resolved concurrently. 1 keeps resolution sequential.
    """

    max_tracks: int = 10
    trusted_min_confidence: int = 65
    search_min_confidence: int = 50
    trusted_boost: int = 15
    search_timeout: float = 10.0
    max_workers: int = 1

    def __post_init__(self) -> None:
        if self.max_tracks < 1:
            raise ValueError("max_tracks must be at least 1")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.search_timeout <= 0:
            raise ValueError("search_timeout must be positive")


@dataclass(frozen=True)
class SearchConfig:
    """Fallback search provider configuration.

    Attributes:
        backend: Which search API to query.
        api_key: YouTube Data API key. Without it the YouTube backend
            returns no results.
        max_results: Maximum number of search results per query.
        timeout: HTTP request timeout in seconds.
    """

    backend: SearchBackend = SearchBackend.YOUTUBE
    api_key: str | None = None
    max_results: int = 5
    timeout: float = 10.0
