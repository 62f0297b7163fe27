"""Models for fallback search results and raw search API responses.

``SearchResult`` is the normalized shape every search provider returns.
The ``YouTube*`` models parse YouTube Data API v3 responses and
``YTMusicSong`` parses ytmusicapi song results; they are internal and
may change if the upstream APIs change.
"""

from pydantic import BaseModel, ConfigDict, Field

from vinylmatch.utils.duration import parse_iso8601_duration
from vinylmatch.utils.url import embed_url, watch_url

__all__ = [
    "SearchResult",
    "YTMusicSong",
    "YouTubeSearchResponse",
    "YouTubeVideo",
    "YouTubeVideosResponse",
]


class SearchModel(BaseModel):
    """Base model for search API responses."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class SearchResult(SearchModel):
    """One candidate track returned by a search provider."""

    id: str
    title: str = ""
    channel_or_artist: str = ""
    duration_seconds: int = 0
    url: str = ""
    embed_url: str | None = None
    thumbnail_url: str | None = None


class YouTubeSearchId(SearchModel):
    kind: str | None = None
    video_id: str | None = Field(default=None, alias="videoId")


class YouTubeSearchItem(SearchModel):
    id: YouTubeSearchId


class YouTubeSearchResponse(SearchModel):
    """Response of the ``search`` endpoint."""

    items: list[YouTubeSearchItem] = Field(default_factory=list)

    @property
    def video_ids(self) -> list[str]:
        """Video IDs in result order, skipping channel/playlist hits."""
        return [item.id.video_id for item in self.items if item.id.video_id]


class YouTubeThumbnail(SearchModel):
    url: str


class YouTubeSnippet(SearchModel):
    title: str = ""
    channel_title: str = Field(default="", alias="channelTitle")
    thumbnails: dict[str, YouTubeThumbnail] = Field(default_factory=dict)

    @property
    def best_thumbnail(self) -> str | None:
        """High quality thumbnail, falling back to the default one."""
        for key in ("high", "default"):
            if thumbnail := self.thumbnails.get(key):
                return thumbnail.url
        return None


class YouTubeContentDetails(SearchModel):
    duration: str | None = None


class YouTubeVideo(SearchModel):
    """Item of the ``videos`` endpoint."""

    id: str
    snippet: YouTubeSnippet = Field(default_factory=YouTubeSnippet)
    content_details: YouTubeContentDetails = Field(
        default_factory=YouTubeContentDetails, alias="contentDetails"
    )

    def to_search_result(self) -> SearchResult:
        """Normalize to the provider-independent result shape."""
        return SearchResult(
            id=self.id,
            title=self.snippet.title,
            channel_or_artist=self.snippet.channel_title,
            duration_seconds=parse_iso8601_duration(self.content_details.duration),
            url=watch_url(self.id),
            embed_url=embed_url(self.id),
            thumbnail_url=self.snippet.best_thumbnail,
        )


class YouTubeVideosResponse(SearchModel):
    """Response of the ``videos`` endpoint."""

    items: list[YouTubeVideo] = Field(default_factory=list)


class YTMusicArtist(SearchModel):
    name: str = ""


class YTMusicThumbnail(SearchModel):
    url: str


class YTMusicSong(SearchModel):
    """Song result of ``YTMusic.search(filter="songs")``."""

    video_id: str | None = Field(default=None, alias="videoId")
    title: str = ""
    artists: list[YTMusicArtist] = Field(default_factory=list)
    duration_seconds: int | None = None
    thumbnails: list[YTMusicThumbnail] = Field(default_factory=list)

    def to_search_result(self) -> SearchResult | None:
        """Normalize, or None when the result has no video to play."""
        if not self.video_id:
            return None
        return SearchResult(
            id=self.video_id,
            title=self.title,
            channel_or_artist=", ".join(a.name for a in self.artists if a.name),
            duration_seconds=self.duration_seconds or 0,
            url=watch_url(self.video_id),
            embed_url=embed_url(self.video_id),
            # ytmusicapi lists thumbnails smallest first
            thumbnail_url=self.thumbnails[-1].url if self.thumbnails else None,
        )
