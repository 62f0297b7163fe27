"""Reference SQLite store for track matches."""

from vinylmatch.db.engine import (
    DB_FILE,
    create_db_engine,
    create_memory_engine,
    init_db,
)
from vinylmatch.db.models import TrackMatch
from vinylmatch.db.repository import TrackMatchRepository

__all__ = [
    "DB_FILE",
    "TrackMatch",
    "TrackMatchRepository",
    "create_db_engine",
    "create_memory_engine",
    "init_db",
]
