"""Release input models.

These validate the Discogs-shaped release data a caller hands to the
engine (tracklist entries and embedded videos) before it enters the
matching pipeline. Malformed optional values are coerced to documented
defaults rather than rejected.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vinylmatch.utils.duration import parse_track_duration

__all__ = [
    "ReleaseInput",
    "Track",
    "TrackArtist",
    "TrustedVideo",
]


class ReleaseModel(BaseModel):
    """Base model for release input data."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class TrackArtist(ReleaseModel):
    """Track-level artist credit."""

    name: str
    id: int | None = None


class Track(ReleaseModel):
    """One tracklist entry of a release.

    Attributes:
        position: Position label on the record, e.g. "A1".
        title: Free-text title, may embed mix annotations.
        duration: Raw "MM:SS" duration text.
        artists: Track-level artist credits (compilations, splits).
    """

    position: str = ""
    title: str = ""
    duration: str = ""
    artists: list[TrackArtist] = Field(default_factory=list)

    @field_validator("position", "title", "duration", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """Missing text fields become empty strings."""
        if v is None:
            return ""
        if isinstance(v, int | float):
            return str(v)
        return v

    @field_validator("artists", mode="before")
    @classmethod
    def none_to_empty_list(cls, v: Any) -> Any:
        """Discogs omits or nulls the artists list on most tracks."""
        return v or []

    @property
    def duration_seconds(self) -> int:
        """Duration in seconds, 180 when missing or malformed."""
        return parse_track_duration(self.duration)

    @property
    def primary_artist(self) -> str | None:
        """First credited track artist, if any."""
        for artist in self.artists:
            if artist.name and artist.name.strip():
                return artist.name
        return None


class TrustedVideo(ReleaseModel):
    """Video embedded on the release page (trusted candidate source).

    Only ``uri``, ``title`` and ``duration`` take part in matching.
    """

    uri: str = ""
    title: str = ""
    description: str = ""
    duration: int = 0
    embed: bool = True

    @field_validator("uri", "title", "description", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """Missing text fields become empty strings."""
        return "" if v is None else v

    @field_validator("duration", mode="before")
    @classmethod
    def coerce_duration(cls, v: Any) -> Any:
        """Unknown durations become 0 seconds."""
        if v is None or v == "":
            return 0
        return v


class ReleaseInput(ReleaseModel):
    """A release document as read by the CLI.

    Accepts the Discogs release JSON shape: ``id``, ``artists_sort`` or
    ``artist``, ``tracklist`` and ``videos``.
    """

    id: int
    artist: str = ""
    title: str = ""
    tracklist: list[Track] = Field(default_factory=list)
    videos: list[TrustedVideo] = Field(default_factory=list)

    @field_validator("tracklist", "videos", mode="before")
    @classmethod
    def none_to_empty_list(cls, v: Any) -> Any:
        return v or []

    @classmethod
    def from_discogs(cls, data: dict[str, Any]) -> "ReleaseInput":
        """Build from a raw Discogs release payload."""
        normalized = dict(data)
        if not normalized.get("artist"):
            names = [
                name
                for a in (normalized.get("artists") or [])
                if isinstance(a, dict) and (name := a.get("name"))
            ]
            normalized["artist"] = normalized.get("artists_sort") or ", ".join(names)
        return cls.model_validate(normalized)
