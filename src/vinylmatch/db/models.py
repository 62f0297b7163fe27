"""Database models."""

from datetime import UTC, datetime

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from vinylmatch.models.enums import Platform, TrackStatus


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TrackMatch(SQLModel, table=True):
    """The chosen audio match for one release track and its review state.

    ``confidence`` is stored on the 0-1 review scale. ``approved`` is
    True once approved (by a human or by auto-approval), False while
    pending or after rejection, and None when sent back for review.
    ``status`` tells pending and rejected apart.
    """

    __tablename__ = "track_matches"
    __table_args__ = (
        UniqueConstraint("release_id", "track_index", name="uq_release_track"),
    )

    id: int | None = Field(default=None, primary_key=True)
    release_id: int = Field(index=True)
    track_index: int = Field(ge=0)
    platform: Platform = Field(default=Platform.YOUTUBE)
    match_url: str
    confidence: float = Field(ge=0.0, le=1.0)
    approved: bool | None = Field(default=None)
    status: TrackStatus = Field(default=TrackStatus.PENDING)
    verified_by: str | None = Field(default=None, max_length=200)
    verified_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
