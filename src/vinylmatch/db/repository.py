"""Database repository for track matches."""

import logging
from datetime import UTC, datetime

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from vinylmatch.db.models import TrackMatch
from vinylmatch.exceptions import PersistenceError
from vinylmatch.models.enums import Platform, TrackStatus

logger = logging.getLogger(__name__)


class TrackMatchRepository:
    """Repository for track match database operations.

    Implements the MatchStore protocol on SQLModel.
    """

    def __init__(self, engine: Engine) -> None:
        """Initialize repository with database engine."""
        self._engine = engine

    def save_match(
        self,
        release_id: int,
        track_index: int,
        match_url: str,
        confidence: float,
        *,
        platform: Platform = Platform.YOUTUBE,
        approved: bool | None = None,
        status: TrackStatus = TrackStatus.PENDING,
        verified_by: str | None = None,
    ) -> TrackMatch:
        """Insert or replace the match for one release track.

        Upserts on ``(release_id, track_index)``. ``verified_at`` and
        ``updated_at`` are stamped on every save; ``created_at`` is kept
        from the first insert.

        Raises:
            PersistenceError: If the database write fails.
        """
        now = datetime.now(UTC)
        try:
            with Session(self._engine) as session:
                match = session.exec(
                    select(TrackMatch)
                    .where(TrackMatch.release_id == release_id)
                    .where(TrackMatch.track_index == track_index)
                ).first()
                if match is None:
                    match = TrackMatch(
                        release_id=release_id,
                        track_index=track_index,
                        match_url=match_url,
                        confidence=confidence,
                        created_at=now,
                    )
                    session.add(match)
                else:
                    match.match_url = match_url
                    match.confidence = confidence
                match.platform = platform
                match.approved = approved
                match.status = status
                match.verified_by = verified_by
                match.verified_at = now
                match.updated_at = now
                session.commit()
                session.refresh(match)
                logger.debug(
                    "Saved match for release %d track %d (%s)",
                    release_id,
                    track_index,
                    status,
                )
                return match
        except SQLAlchemyError as e:
            logger.error(
                "Failed to save match for release %d track %d: %s",
                release_id,
                track_index,
                e,
            )
            raise PersistenceError(f"Failed to save track match: {e}") from e

    def get_match(self, release_id: int, track_index: int) -> TrackMatch | None:
        """Get the stored match for one release track."""
        with Session(self._engine) as session:
            stmt = (
                select(TrackMatch)
                .where(TrackMatch.release_id == release_id)
                .where(TrackMatch.track_index == track_index)
            )
            return session.exec(stmt).first()

    def get_matches_for_release(self, release_id: int) -> list[TrackMatch]:
        """List a release's matches ordered by track index."""
        with Session(self._engine) as session:
            stmt = (
                select(TrackMatch)
                .where(TrackMatch.release_id == release_id)
                .order_by(col(TrackMatch.track_index))
            )
            return list(session.exec(stmt).all())

    def delete_match(self, release_id: int, track_index: int) -> bool:
        """Delete one match. Returns whether a row existed."""
        with Session(self._engine) as session:
            match = session.exec(
                select(TrackMatch)
                .where(TrackMatch.release_id == release_id)
                .where(TrackMatch.track_index == track_index)
            ).first()
            if match is None:
                return False
            session.delete(match)
            session.commit()
            return True

    def delete_matches_for_release(self, release_id: int) -> int:
        """Delete all matches of a release. Returns the number deleted."""
        with Session(self._engine) as session:
            matches = session.exec(
                select(TrackMatch).where(TrackMatch.release_id == release_id)
            ).all()
            for match in matches:
                session.delete(match)
            session.commit()
            return len(matches)
