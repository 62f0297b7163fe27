"""Duration parsing utilities."""

import logging
import re

logger = logging.getLogger(__name__)

# Tracks with a missing or malformed duration are assumed to be 3 minutes long
DEFAULT_TRACK_DURATION = 180

_ISO_DURATION_PATTERN = re.compile(r"^PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?$")


def parse_track_duration(duration: object) -> int:
    """Parse a release track duration like '4:34' to seconds.

    Release tracklists use "MM:SS". Anything else (empty, hour-long
    "H:MM:SS", non-numeric parts, non-strings) falls back to the default.

    Args:
        duration: Duration text from the tracklist.

    Returns:
        Duration in seconds, or DEFAULT_TRACK_DURATION if unparseable.
    """
    if not isinstance(duration, str) or not duration.strip():
        return DEFAULT_TRACK_DURATION

    parts = duration.strip().split(":")
    if len(parts) != 2:
        logger.debug("Unexpected track duration format: %s", duration)
        return DEFAULT_TRACK_DURATION

    try:
        minutes, seconds = int(parts[0]), int(parts[1])
    except ValueError:
        logger.debug("Could not parse track duration: %s", duration)
        return DEFAULT_TRACK_DURATION

    if minutes < 0 or seconds < 0:
        return DEFAULT_TRACK_DURATION
    return minutes * 60 + seconds


def parse_iso8601_duration(duration: str | None) -> int:
    """Parse a YouTube ISO-8601 duration like 'PT4M13S' to seconds.

    Returns 0 for unparseable formats.
    """
    if not duration:
        return 0

    match = _ISO_DURATION_PATTERN.match(duration.strip())
    if not match:
        logger.warning("Could not parse ISO-8601 duration: %s", duration)
        return 0

    hours, minutes, seconds = (int(g) if g else 0 for g in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def format_duration(seconds: int) -> str:
    """Format seconds as 'M:SS' for display."""
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes}:{secs:02d}"
