"""Content types for served media files."""

from __future__ import annotations

from pathlib import PurePath

DEFAULT_MIME_TYPE = "application/octet-stream"

MEDIA_MIME_TYPES: dict[str, str] = {
    ".mp4": "video/mp4",
    ".mkv": "video/x-matroska",
    ".mp3": "audio/mpeg",
}


def mime_type_for(path: str | PurePath) -> str:
    """Return the content type for a media file path.

    Matching is on the lowercased extension. Unknown extensions map to
    application/octet-stream.
    """
    suffix = PurePath(path).suffix.lower()
    return MEDIA_MIME_TYPES.get(suffix, DEFAULT_MIME_TYPE)


def is_known_media_type(path: str | PurePath) -> bool:
    """True if mime_type_for() has a specific type for this path."""
    return PurePath(path).suffix.lower() in MEDIA_MIME_TYPES
