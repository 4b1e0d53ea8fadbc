"""Shared configuration loading with consistent error handling."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .exit_codes import ExitCode
from .output import error_exit

if TYPE_CHECKING:
    from lanplay.config.models import LanPlayConfig
    from lanplay.library.service import LibraryService


def load_config_or_exit(
    config_path: Path | None = None,
    *,
    json_output: bool = False,
    media_root: Path | None = None,
    scan_interval_seconds: int | None = None,
    server_bind: str | None = None,
    server_port: int | None = None,
    require_media_root: bool = True,
) -> LanPlayConfig:
    """Load configuration with CLI overrides, exiting on invalid values.

    Args:
        config_path: Explicit config file, or None for the default.
        json_output: Whether to format errors as JSON.
        media_root: CLI override for the media root.
        scan_interval_seconds: CLI override for the rescan interval.
        server_bind: CLI override for the bind address.
        server_port: CLI override for the port.
        require_media_root: Also run validate_config() and exit on errors.

    Returns:
        Loaded LanPlayConfig.

    Note:
        Exits the process with CONFIG_ERROR if configuration is invalid.
    """
    from lanplay.config import get_config, validate_config

    try:
        config = get_config(
            config_path=config_path,
            media_root=media_root,
            scan_interval_seconds=scan_interval_seconds,
            server_bind=server_bind,
            server_port=server_port,
            strict=config_path is not None,
        )
    except ValueError as e:
        error_exit(f"Invalid configuration: {e}", ExitCode.CONFIG_ERROR, json_output)

    if require_media_root:
        errors = validate_config(config)
        if errors:
            error_exit("; ".join(errors), ExitCode.CONFIG_ERROR, json_output)

    return config


def build_service_or_exit(
    config: LanPlayConfig, json_output: bool = False
) -> LibraryService:
    """Build the library service for a validated configuration."""
    from lanplay.library.exceptions import MediaRootNotFoundError
    from lanplay.library.service import LibraryService

    try:
        return LibraryService.from_config(config)
    except MediaRootNotFoundError as e:
        error_exit(str(e), ExitCode.TARGET_NOT_FOUND, json_output)
