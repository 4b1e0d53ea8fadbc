"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (LANPLAY_*)
3. Config file (~/.lanplay/config.toml)
4. Default values

Environment variables:
- LANPLAY_MEDIA_ROOT: Folder holding Movies/, Music/ and Series/
- LANPLAY_EXTENSIONS: Comma-separated supported extensions
- LANPLAY_SCAN_INTERVAL: Seconds between automatic rescans
- LANPLAY_THUMBNAIL_TIMEOUT: Seconds before a thumbnail extraction is killed
- LANPLAY_FFMPEG_PATH: Path to ffmpeg executable
- LANPLAY_SERVER_BIND / LANPLAY_SERVER_PORT: HTTP listen address
- LANPLAY_LOG_LEVEL / LANPLAY_LOG_FILE / LANPLAY_LOG_FORMAT: Logging
- LANPLAY_CONFIG_PATH: Path to config file (overrides default location)
- LANPLAY_DATA_DIR: Path to LANPlay data directory (overrides ~/.lanplay/)
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from lanplay.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from lanplay.config.env import EnvReader
from lanplay.config.models import LanPlayConfig
from lanplay.config.toml_parser import load_toml_file

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".lanplay"

# Cache for loaded config files (path -> (parsed dict, mtime))
_config_cache: dict[Path, tuple[dict, float]] = {}
_config_cache_lock = threading.Lock()


def get_data_dir() -> Path:
    """Get the LANPlay data directory.

    Holds config.toml, cache/library.json and data/data.json.
    Can be overridden by LANPLAY_DATA_DIR (tilde expansion supported).
    """
    env_path = os.environ.get("LANPLAY_DATA_DIR")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_DATA_DIR


def get_default_config_path() -> Path:
    """Get the config file path, honouring LANPLAY_CONFIG_PATH."""
    env_path = os.environ.get("LANPLAY_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return get_data_dir() / "config.toml"


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Results are cached with mtime-based invalidation, so an edited file is
    re-read on the next call. Thread-safe.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise TomlParseError on parse failures.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is not None and cached[1] == current_mtime:
            return cached[0]

        result = load_toml_file(path, strict=strict)
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    media_root: Path | None = None,
    ffmpeg_path: Path | None = None,
    scan_interval_seconds: int | None = None,
    server_bind: str | None = None,
    server_port: int | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> LanPlayConfig:
    """Get LANPlay configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides LANPLAY_CONFIG_PATH).
        media_root: CLI override for the media root.
        ffmpeg_path: CLI override for the ffmpeg path.
        scan_interval_seconds: CLI override for the rescan interval.
        server_bind: CLI override for the bind address.
        server_port: CLI override for the port.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise TomlParseError on config file parse failures.

    Returns:
        LanPlayConfig with merged configuration.

    Raises:
        ValueError: If the merged configuration is invalid.
    """
    reader = env_reader or EnvReader()
    file_config = load_config_file(config_path, strict=strict)

    cli_source = ConfigSource(
        media_root=media_root,
        ffmpeg_path=ffmpeg_path,
        scan_interval_seconds=scan_interval_seconds,
        server_bind=server_bind,
        server_port=server_port,
    )

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config), source_name="file")
    builder.apply(source_from_env(reader), source_name="env")
    builder.apply(cli_source, source_name="cli")

    config = builder.build()
    if config.data_dir is None:
        config.data_dir = get_data_dir()
    return config


def validate_config(config: LanPlayConfig) -> list[str]:
    """Validate cross-field constraints before starting a scan or server.

    Returns:
        List of error strings. Empty list means configuration is usable.
    """
    errors: list[str] = []

    media_root = config.library.media_root
    if media_root is None:
        errors.append(
            "media_root is not set (use --media-root, LANPLAY_MEDIA_ROOT "
            "or [library] media_root)"
        )
    elif not media_root.is_dir():
        errors.append(f"media_root is not a directory: {media_root}")

    ffmpeg = config.tools.ffmpeg
    if ffmpeg is not None and not ffmpeg.exists():
        errors.append(f"ffmpeg path does not exist: {ffmpeg}")

    return errors
