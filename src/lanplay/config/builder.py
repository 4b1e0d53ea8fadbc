"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building LanPlayConfig by composing
multiple configuration sources with explicit precedence handling.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from lanplay.config.env import EnvReader
from lanplay.config.models import (
    DEFAULT_EXTENSIONS,
    LanPlayConfig,
    LibraryConfig,
    LoggingConfig,
    ScanConfig,
    ServerConfig,
    ToolPathsConfig,
)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Tool paths
    ffmpeg_path: Path | None = None

    # Data directory (cache and data artifacts)
    data_dir: Path | None = None

    # Library config
    media_root: Path | None = None
    extensions: list[str] | None = None

    # Scan config
    scan_interval_seconds: int | None = None
    thumbnail_offset: str | None = None
    thumbnail_width: int | None = None
    thumbnail_timeout: int | None = None

    # Server config
    server_bind: str | None = None
    server_port: int | None = None
    server_shutdown_timeout: float | None = None

    # Logging config
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


class ConfigBuilder:
    """Builds LanPlayConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._sources: dict[str, str] = {}

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Apply configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
            source_name: Label recorded for each value the source sets
                (e.g. "file", "env", "cli").
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value
                self._sources[field_obj.name] = source_name

    def source_of(self, key: str) -> str:
        """Return which source set key, or "default" if none did."""
        return self._sources.get(key, "default")

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> LanPlayConfig:
        """Build the final LanPlayConfig with defaults for unset values.

        Raises:
            ValueError: If a resulting section fails validation.
        """
        tools = ToolPathsConfig(ffmpeg=self._get("ffmpeg_path", None))

        library = LibraryConfig(
            media_root=self._get("media_root", None),
            extensions=tuple(self._get("extensions", DEFAULT_EXTENSIONS)),
        )

        scan = ScanConfig(
            interval_seconds=self._get("scan_interval_seconds", 600),
            thumbnail_offset=self._get("thumbnail_offset", "00:01:00"),
            thumbnail_width=self._get("thumbnail_width", 854),
            thumbnail_timeout=self._get("thumbnail_timeout", None),
        )

        server = ServerConfig(
            bind=self._get("server_bind", "0.0.0.0"),  # nosec B104
            port=self._get("server_port", 8080),
            shutdown_timeout=self._get("server_shutdown_timeout", 30.0),
        )

        logging_config = LoggingConfig(
            level=self._get("logging_level", "info"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
            max_bytes=self._get("logging_max_bytes", 10_485_760),
            backup_count=self._get("logging_backup_count", 5),
        )

        return LanPlayConfig(
            tools=tools,
            library=library,
            scan=scan,
            server=server,
            logging=logging_config,
            data_dir=self._get("data_dir", None),
        )


def _optional_path(value: str | None) -> Path | None:
    return Path(value).expanduser() if value else None


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from parsed TOML config file.

    Args:
        file_config: Parsed configuration dictionary from TOML file.

    Returns:
        ConfigSource with values from the config file.
    """
    tools = file_config.get("tools", {})
    library = file_config.get("library", {})
    scan = file_config.get("scan", {})
    server = file_config.get("server", {})
    logging_conf = file_config.get("logging", {})

    return ConfigSource(
        ffmpeg_path=_optional_path(tools.get("ffmpeg")),
        data_dir=_optional_path(file_config.get("data_dir")),
        media_root=_optional_path(library.get("media_root")),
        extensions=library.get("extensions"),
        scan_interval_seconds=scan.get("interval_seconds"),
        thumbnail_offset=scan.get("thumbnail_offset"),
        thumbnail_width=scan.get("thumbnail_width"),
        thumbnail_timeout=scan.get("thumbnail_timeout"),
        server_bind=server.get("bind"),
        server_port=server.get("port"),
        server_shutdown_timeout=server.get("shutdown_timeout"),
        logging_level=logging_conf.get("level"),
        logging_file=_optional_path(logging_conf.get("file")),
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from LANPLAY_* environment variables.

    Args:
        reader: EnvReader instance for reading environment variables.

    Returns:
        ConfigSource with values from environment variables.
    """
    return ConfigSource(
        ffmpeg_path=reader.get_path("LANPLAY_FFMPEG_PATH"),
        media_root=reader.get_path("LANPLAY_MEDIA_ROOT", must_exist=False),
        extensions=reader.get_list("LANPLAY_EXTENSIONS"),
        scan_interval_seconds=reader.get_int("LANPLAY_SCAN_INTERVAL"),
        thumbnail_timeout=reader.get_int("LANPLAY_THUMBNAIL_TIMEOUT"),
        server_bind=reader.get_str("LANPLAY_SERVER_BIND"),
        server_port=reader.get_int("LANPLAY_SERVER_PORT"),
        server_shutdown_timeout=reader.get_float("LANPLAY_SERVER_SHUTDOWN_TIMEOUT"),
        logging_level=reader.get_str("LANPLAY_LOG_LEVEL"),
        logging_file=reader.get_path("LANPLAY_LOG_FILE", must_exist=False),
        logging_format=reader.get_str("LANPLAY_LOG_FORMAT"),
    )
