"""Fallback search providers.

Both providers implement the ``SearchProvider`` protocol: given a query,
return a small list of ``SearchResult``. They raise
``SearchProviderError`` on upstream failure and leave degrading that to
"no results" to the resolver.
"""

import json
import logging
import urllib.request
from importlib.metadata import version
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode

from pydantic import ValidationError
from ytmusicapi import YTMusic
from ytmusicapi.exceptions import YTMusicError, YTMusicServerError, YTMusicUserError

from vinylmatch.config import SearchBackend, SearchConfig
from vinylmatch.exceptions import MissingCredentialError, SearchProviderError
from vinylmatch.models.search import (
    SearchResult,
    YouTubeSearchResponse,
    YouTubeVideosResponse,
    YTMusicSong,
)
from vinylmatch.services.protocols import SearchProvider

logger = logging.getLogger(__name__)

# Get version from package metadata for User-Agent
_VERSION = version("vinylmatch")

YOUTUBE_API_URL = "https://www.googleapis.com/youtube/v3"


class YouTubeDataSearchProvider:
    """YouTube Data API v3 search.

    Runs the ``search`` endpoint for video IDs, then the ``videos``
    endpoint for titles, channels and durations. Without an API key every
    search returns no results.
    """

    def __init__(self, config: SearchConfig | None = None) -> None:
        """Initialize the provider.

        Args:
            config: Search configuration holding the API key. Uses defaults
                (no key) if not provided.
        """
        self._config = config or SearchConfig()

    @property
    def has_credentials(self) -> bool:
        return bool(self._config.api_key)

    def require_credentials(self) -> None:
        """Fail loudly when no API key is configured.

        Raises:
            MissingCredentialError: If the API key is missing.
        """
        if not self.has_credentials:
            raise MissingCredentialError("YouTube Data API key is not configured")

    def search(self, query: str) -> list[SearchResult]:
        """Search YouTube videos.

        Args:
            query: Free-text query, e.g. "Daft Punk - Give Life Back to Music".

        Returns:
            Up to ``max_results`` results in API order. Empty when no API key
            is configured or nothing was found.

        Raises:
            SearchProviderError: If a request fails or returns an unusable body.
        """
        if not self.has_credentials:
            logger.warning("YouTube API key not configured, skipping search")
            return []

        logger.debug("Searching YouTube: %s", query)
        search_data = self._get(
            "search",
            {
                "part": "snippet",
                "q": query,
                "type": "video",
                "maxResults": self._config.max_results,
            },
        )
        try:
            video_ids = YouTubeSearchResponse.model_validate(search_data).video_ids
        except ValidationError as e:
            raise SearchProviderError(f"Unexpected search response: {e}") from e

        if not video_ids:
            return []

        videos_data = self._get(
            "videos",
            {"part": "contentDetails,snippet", "id": ",".join(video_ids)},
        )
        try:
            videos = YouTubeVideosResponse.model_validate(videos_data).items
        except ValidationError as e:
            raise SearchProviderError(f"Unexpected videos response: {e}") from e

        results = [video.to_search_result() for video in videos]
        logger.debug("YouTube search returned %d results for %r", len(results), query)
        return results

    def _get(self, endpoint: str, params: dict[str, Any]) -> Any:
        """GET one API endpoint and decode its JSON body."""
        query = urlencode({**params, "key": self._config.api_key})
        request = urllib.request.Request(
            f"{YOUTUBE_API_URL}/{endpoint}?{query}",
            headers={
                "User-Agent": f"vinylmatch/{_VERSION}",
                "Accept": "application/json",
            },
        )
        try:
            with urllib.request.urlopen(
                request, timeout=self._config.timeout
            ) as response:
                return json.loads(response.read())
        except HTTPError as e:
            # Never log the URL, it carries the API key
            logger.warning("YouTube API %s request failed: HTTP %d", endpoint, e.code)
            raise SearchProviderError(
                f"YouTube API {endpoint} request failed: HTTP {e.code}"
            ) from e
        except (URLError, OSError, TimeoutError) as e:
            logger.warning("YouTube API %s request failed: %s", endpoint, e)
            raise SearchProviderError(
                f"YouTube API {endpoint} request failed: {e}"
            ) from e
        except json.JSONDecodeError as e:
            raise SearchProviderError(
                f"YouTube API {endpoint} returned invalid JSON"
            ) from e


class YTMusicSearchProvider:
    """YouTube Music song search through ytmusicapi.

    Needs no API key.
    """

    def __init__(
        self,
        ytmusic: YTMusic | None = None,
        config: SearchConfig | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            ytmusic: Optional YTMusic instance. Creates one if not provided.
            config: Optional search configuration. Uses defaults if not provided.
        """
        self._ytm = ytmusic or YTMusic()
        self._config = config or SearchConfig(backend=SearchBackend.YTMUSIC)

    def search(self, query: str) -> list[SearchResult]:
        """Search YouTube Music songs.

        Args:
            query: Free-text query.

        Returns:
            Song results that have a playable video, in API order.

        Raises:
            SearchProviderError: If the API request fails.
        """
        logger.debug("Searching YouTube Music: %s", query)
        try:
            data = self._ytm.search(
                query,
                filter="songs",
                limit=self._config.max_results,
            )
        except (YTMusicServerError, YTMusicUserError) as e:
            logger.warning("YTMusic API error for search '%s': %s", query, e)
            raise SearchProviderError(f"Search failed: {e}") from e
        except YTMusicError as e:
            logger.warning("YTMusic error for search '%s': %s", query, e)
            raise SearchProviderError(f"Search failed: {e}") from e

        results: list[SearchResult] = []
        for raw in data[: self._config.max_results]:
            try:
                song = YTMusicSong.model_validate(raw)
            except ValidationError as e:
                logger.debug("Skipping unparseable search result: %s", e)
                continue
            if result := song.to_search_result():
                results.append(result)
        return results


def create_search_provider(config: SearchConfig) -> SearchProvider:
    """Create the search provider selected by ``config.backend``.

    Args:
        config: Search configuration.

    Returns:
        A provider implementing SearchProvider.
    """
    match config.backend:
        case SearchBackend.YTMUSIC:
            return YTMusicSearchProvider(config=config)
        case _:
            return YouTubeDataSearchProvider(config)
