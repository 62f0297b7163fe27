"""vinylmatch - Resolve playable audio for vinyl release tracks.

This library scores candidate audio sources (videos embedded on a
release page, then fallback search results) against each track of a
release, picks the best match per track and classifies it for human
review. It is mix-aware: a radio edit never stands in for a dub.

Designed for use as a library in applications with a CLI for debugging
and curation.

Examples:
    Match a release using its embedded videos only:
    ```python
    from vinylmatch import create_matching_engine

    engine = create_matching_engine()
    result = engine.find_matches(
        release_id=1,
        release_artist="Daft Punk",
        tracks=[{"position": "A1", "title": "Give Life Back to Music", "duration": "4:34"}],
        trusted_videos=[{"uri": "https://www.youtube.com/watch?v=abc", "title": "...", "duration": 274}],
    )
    print(result.to_payload())
    ```

    Use environment settings (VINYLMATCH_*) for fallback search:
    ```python
    from vinylmatch import create_engine_from_settings

    engine = create_engine_from_settings()
    ```
"""

from dataclasses import replace

from vinylmatch.client import (
    YouTubeDataSearchProvider,
    YTMusicSearchProvider,
    create_search_provider,
)
from vinylmatch.config import EngineConfig, SearchBackend, SearchConfig
from vinylmatch.exceptions import (
    InvalidInputError,
    MatchNotFoundError,
    MissingCredentialError,
    PersistenceError,
    ReleaseNotApprovableError,
    SearchProviderError,
    VinylMatchError,
)
from vinylmatch.lib.confidence import (
    calculate_match_confidence,
    classify_confidence,
    to_percent_confidence,
    to_unit_confidence,
)
from vinylmatch.lib.review import can_approve_release, classify_bucket
from vinylmatch.models.enums import (
    CandidateSource,
    Classification,
    MatchBucket,
    MixType,
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
from vinylmatch.models.review import BucketSummary, TrackReview
from vinylmatch.models.search import SearchResult
from vinylmatch.services import (
    AudioMatchingEngine,
    MatchStore,
    ReviewService,
    SearchProvider,
)
from vinylmatch.settings import Settings, get_settings


def create_matching_engine(
    config: EngineConfig | None = None,
    search_provider: SearchProvider | None = None,
    search_config: SearchConfig | None = None,
) -> AudioMatchingEngine:
    """Create a configured matching engine.

    This is the recommended way to create an engine for library usage.

    Args:
        config: Optional engine configuration. Uses defaults if not provided.
        search_provider: Fallback search provider. Takes precedence over
            ``search_config``.
        search_config: Builds the fallback provider when no provider is
            given. Without either, only embedded videos are considered.
            Its timeout is capped at the engine's ``search_timeout``.

    Returns:
        A configured AudioMatchingEngine instance.

    Examples:
        With YouTube Data API fallback:
        ```python
        engine = create_matching_engine(search_config=SearchConfig(api_key="..."))
        ```

        With a custom provider:
        ```python
        engine = create_matching_engine(search_provider=my_provider)
        ```
    """
    config = config or EngineConfig()
    if search_provider is None and search_config is not None:
        # The provider's HTTP timeout must not outlast the engine's wait
        if search_config.timeout > config.search_timeout:
            search_config = replace(search_config, timeout=config.search_timeout)
        search_provider = create_search_provider(search_config)
    return AudioMatchingEngine(search_provider, config)


def create_engine_from_settings(
    settings: Settings | None = None,
) -> AudioMatchingEngine:
    """Create an engine from environment settings.

    Args:
        settings: Settings to use. Reads the cached environment settings
            if not provided.

    Returns:
        A configured AudioMatchingEngine instance.
    """
    settings = settings or get_settings()
    return create_matching_engine(
        config=settings.engine_config(),
        search_config=settings.search_config(),
    )


__all__ = [
    "AudioMatchingEngine",
    "BucketSummary",
    "Candidate",
    "CandidateSource",
    "Classification",
    "EngineConfig",
    "InvalidInputError",
    "MatchBucket",
    "MatchNotFoundError",
    "MatchResult",
    "MatchStore",
    "MatchSummary",
    "MissingCredentialError",
    "MixType",
    "PersistenceError",
    "Platform",
    "ReleaseInput",
    "ReleaseNotApprovableError",
    "ReviewAction",
    "ReviewService",
    "SearchBackend",
    "SearchConfig",
    "SearchProvider",
    "SearchProviderError",
    "SearchResult",
    "Settings",
    "Track",
    "TrackMatchResult",
    "TrackReview",
    "TrackStatus",
    "TrustedVideo",
    "VinylMatchError",
    "YTMusicSearchProvider",
    "YouTubeDataSearchProvider",
    "calculate_match_confidence",
    "can_approve_release",
    "classify_bucket",
    "classify_confidence",
    "create_engine_from_settings",
    "create_matching_engine",
    "create_search_provider",
    "get_settings",
    "to_percent_confidence",
    "to_unit_confidence",
]
