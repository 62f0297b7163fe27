"""Utility functions for vinylmatch.

Available via `from vinylmatch.utils import ...` for power users.
Not re-exported at the top-level `vinylmatch` package.
"""

from vinylmatch.utils.duration import (
    DEFAULT_TRACK_DURATION,
    format_duration,
    parse_iso8601_duration,
    parse_track_duration,
)
from vinylmatch.utils.url import embed_url, parse_video_id, watch_url

__all__ = [
    "DEFAULT_TRACK_DURATION",
    "embed_url",
    "format_duration",
    "parse_iso8601_duration",
    "parse_track_duration",
    "parse_video_id",
    "watch_url",
]
