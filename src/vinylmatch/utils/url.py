"""URL parsing utilities for candidate audio sources."""

import re
from urllib.parse import parse_qs, urlparse

VIDEO_ID_CHARS = re.compile(r"[A-Za-z0-9_-]+")

# Path-based video ID patterns (embed, legacy /v/, shorts, live)
_PATH_VIDEO_ID_PATTERN = re.compile(r"^/(?:embed|v|vi|e|shorts|live)/([A-Za-z0-9_-]+)")

# Recognized YouTube hostnames for video ID extraction
_YOUTUBE_HOSTS = {
    "youtube.com",
    "www.youtube.com",
    "m.youtube.com",
    "music.youtube.com",
    "youtube-nocookie.com",
    "www.youtube-nocookie.com",
}

_SHORT_HOSTS = {"youtu.be", "www.youtu.be"}

# Maximum URL length to prevent potential abuse (standard browser limit)
MAX_URL_LENGTH = 2048


def _with_scheme(url: str) -> str:
    """Add a scheme to bare 'youtube.com/...' URLs so urlparse sees a host."""
    if "://" not in url:
        return f"https://{url.lstrip('/')}"
    return url


def parse_video_id(url: str | None) -> str | None:
    """Extract a YouTube video ID from a candidate source URL.

    Supports the URL shapes found in release video lists:
    ``/watch?v=ID``, ``/embed/ID``, ``youtu.be/ID`` and the legacy ``/v/ID``
    (plus ``/shorts/`` and ``/live/``), with or without scheme and ``www.``.

    Args:
        url: Candidate URL.

    Returns:
        The video ID string, or None if the URL is not a recognized
        YouTube video URL.
    """
    if not url or not isinstance(url, str) or len(url) > MAX_URL_LENGTH:
        return None

    parsed = urlparse(_with_scheme(url.strip()))
    host = (parsed.hostname or "").lower()
    path = parsed.path or ""

    if host in _SHORT_HOSTS:
        segment = path.lstrip("/").split("/")[0]
        return segment if VIDEO_ID_CHARS.fullmatch(segment) else None

    if host not in _YOUTUBE_HOSTS:
        return None

    if path.rstrip("/") == "/watch":
        values = parse_qs(parsed.query).get("v") or []
        if values and VIDEO_ID_CHARS.fullmatch(values[0]):
            return values[0]
        return None

    if match := _PATH_VIDEO_ID_PATTERN.match(path):
        return match.group(1)

    return None


def watch_url(video_id: str) -> str:
    """Canonical watch URL for a video ID."""
    return f"https://youtube.com/watch?v={video_id}"


def embed_url(video_id: str) -> str:
    """Embeddable player URL for a video ID."""
    return f"https://www.youtube.com/embed/{video_id}"
