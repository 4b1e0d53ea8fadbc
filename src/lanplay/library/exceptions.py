"""Exceptions raised by the library scan pipeline."""

from __future__ import annotations

from pathlib import Path


class LibraryError(Exception):
    """Base exception for library scanning errors."""

    pass


class MediaRootNotFoundError(LibraryError):
    """Raised when the media root is not configured or not a directory."""

    def __init__(self, media_root: Path | None) -> None:
        self.media_root = media_root
        if media_root is None:
            message = "Media root is not configured"
        else:
            message = f"Media root is not a directory: {media_root}"
        super().__init__(message)
