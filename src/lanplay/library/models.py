"""Library data model.

One internal record type, MediaEntry, carries every field. The public cache
view and the internal data view are projections of it, produced only when
the library is serialized.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

# Category root folder names under the media root (case-sensitive).
MOVIES_DIR = "Movies"
MUSIC_DIR = "Music"
SERIES_DIR = "Series"
THUMBNAILS_DIR = "thumbnails"


@dataclass(frozen=True)
class MediaEntry:
    """A playable file found by a scan."""

    name: str
    """File name with extension, unique within its list."""

    ext: str
    """Lowercase extension including the dot."""

    file_path: Path
    """Absolute path of the source file."""

    thumbnail: str | None = None
    """Public URL path of the thumbnail, None if not applicable or failed."""

    thumbnail_path: Path | None = None
    """Absolute path of the thumbnail file."""

    def to_cache_dict(self) -> dict[str, Any]:
        """Public cache view: name, ext, thumbnail."""
        return {"name": self.name, "ext": self.ext, "thumbnail": self.thumbnail}

    def to_data_dict(self) -> dict[str, Any]:
        """Internal data view, adds absolute paths."""
        return {
            "name": self.name,
            "ext": self.ext,
            "filePath": str(self.file_path),
            "thumbnail": self.thumbnail,
            "thumbnailPath": (
                str(self.thumbnail_path) if self.thumbnail_path is not None else None
            ),
        }


@dataclass
class Library:
    """Snapshot of the media folder produced by one scan pass."""

    movies: list[MediaEntry] = field(default_factory=list)
    music: list[MediaEntry] = field(default_factory=list)
    series: dict[str, list[MediaEntry]] = field(default_factory=dict)

    def to_cache_dict(self) -> dict[str, Any]:
        """Serialize the cache view (the shape served at /library)."""
        return {
            "movies": [e.to_cache_dict() for e in self.movies],
            "music": [e.to_cache_dict() for e in self.music],
            "series": {
                show: [e.to_cache_dict() for e in episodes]
                for show, episodes in self.series.items()
            },
        }

    def to_data_dict(self) -> dict[str, Any]:
        """Serialize the data view with absolute paths."""
        return {
            "movies": [e.to_data_dict() for e in self.movies],
            "music": [e.to_data_dict() for e in self.music],
            "series": {
                show: [e.to_data_dict() for e in episodes]
                for show, episodes in self.series.items()
            },
        }

    @property
    def file_count(self) -> int:
        """Total number of entries across all categories."""
        return (
            len(self.movies)
            + len(self.music)
            + sum(len(episodes) for episodes in self.series.values())
        )


@dataclass
class ScanResult:
    """Summary of one scan pass."""

    started_at: datetime | None = None
    files_found: int = 0
    thumbnails_available: int = 0
    thumbnails_failed: int = 0
    orphans_removed: int = 0
    shows_found: int = 0
    categories_skipped: list[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = asdict(self)
        result["started_at"] = (
            self.started_at.isoformat() if self.started_at is not None else None
        )
        return result
