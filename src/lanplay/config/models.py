"""Configuration dataclasses for LANPlay.

Each section of config.toml maps to one dataclass. Validation happens in
``__post_init__`` and raises ValueError.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

# Video containers that get a thumbnail. Every one of them is also in the
# default allow-list so thumbnail eligibility never refers to a file type
# the scanner would have dropped.
VIDEO_EXTENSIONS: frozenset[str] = frozenset(
    {".mp4", ".mkv", ".avi", ".mov", ".webm", ".flv"}
)

DEFAULT_EXTENSIONS: tuple[str, ...] = (
    ".mp4",
    ".mkv",
    ".avi",
    ".mov",
    ".webm",
    ".flv",
    ".mp3",
)

_OFFSET_PATTERN = re.compile(r"^\d{2}:\d{2}:\d{2}(\.\d+)?$")


def normalize_extension(ext: str) -> str:
    """Return ext lowercased with a leading dot ("MKV" -> ".mkv")."""
    ext = ext.strip().lower()
    if not ext.startswith("."):
        ext = "." + ext
    return ext


@dataclass
class ToolPathsConfig:
    """Paths to external tools. None means look the tool up on PATH."""

    ffmpeg: Path | None = None


@dataclass
class LibraryConfig:
    """Where the media lives and which files count as media."""

    media_root: Path | None = None
    """Folder holding Movies/, Music/, Series/ and thumbnails/."""

    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    """Supported-extension allow-list, lowercase with leading dot."""

    def __post_init__(self) -> None:
        """Normalize and validate configuration."""
        self.extensions = tuple(normalize_extension(e) for e in self.extensions)
        if not self.extensions:
            raise ValueError("extensions must not be empty")
        if self.media_root is not None:
            self.media_root = Path(self.media_root).expanduser()


@dataclass
class ScanConfig:
    """Rescan cadence and thumbnail extraction settings."""

    interval_seconds: int = 600
    thumbnail_offset: str = "00:01:00"
    thumbnail_width: int = 854
    thumbnail_timeout: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.interval_seconds < 1:
            raise ValueError(
                f"interval_seconds must be at least 1, got {self.interval_seconds}"
            )
        if not _OFFSET_PATTERN.match(self.thumbnail_offset):
            raise ValueError(
                "thumbnail_offset must look like HH:MM:SS, "
                f"got {self.thumbnail_offset!r}"
            )
        if self.thumbnail_width < 1:
            raise ValueError(
                f"thumbnail_width must be positive, got {self.thumbnail_width}"
            )
        if self.thumbnail_timeout is not None and self.thumbnail_timeout < 1:
            raise ValueError(
                "thumbnail_timeout must be positive when set, "
                f"got {self.thumbnail_timeout}"
            )


@dataclass
class ServerConfig:
    """Configuration for `lanplay serve`."""

    bind: str = "0.0.0.0"  # nosec B104 - serves the local network
    """Network address to bind to. All interfaces so LAN clients can connect."""

    port: int = 8080
    """Port number for the HTTP server."""

    shutdown_timeout: float = 30.0
    """Seconds to wait for graceful shutdown before cancelling tasks."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not 1 <= self.port <= 65535:
            raise ValueError(f"port must be 1-65535, got {self.port}")
        if self.shutdown_timeout <= 0:
            raise ValueError(
                f"shutdown_timeout must be positive, got {self.shutdown_timeout}"
            )


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class LanPlayConfig:
    """Main configuration container. Aggregates all sections."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    library: LibraryConfig = field(default_factory=LibraryConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    data_dir: Path | None = None
    """Folder for the persisted cache and data artifacts."""

    @property
    def cache_file(self) -> Path:
        """Public cache artifact (cache view)."""
        return self._data_dir() / "cache" / "library.json"

    @property
    def data_file(self) -> Path:
        """Internal data artifact (data view, absolute paths)."""
        return self._data_dir() / "data" / "data.json"

    def _data_dir(self) -> Path:
        if self.data_dir is not None:
            return self.data_dir
        from lanplay.config.loader import get_data_dir

        return get_data_dir()
