"""Scan command for lanplay CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from lanplay.cli.config_loader import build_service_or_exit, load_config_or_exit
from lanplay.cli.exit_codes import ExitCode
from lanplay.cli.output import echo_json, echo_scan_summary, error_exit
from lanplay.library.exceptions import MediaRootNotFoundError

logger = logging.getLogger(__name__)


@click.command("scan")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ~/.lanplay/config.toml).",
)
@click.option(
    "--media-root",
    "-m",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Media root holding Movies/, Music/ and Series/.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Print the scanned library as JSON.",
)
def scan_command(
    config_path: Path | None,
    media_root: Path | None,
    json_output: bool,
) -> None:
    """Scan the media library once and refresh the cached library.

    Generates missing thumbnails, removes orphaned ones, and rewrites
    the library cache and internal data files.

    \b
    Examples:
        lanplay scan --media-root /srv/media
        lanplay scan --json
    """
    config = load_config_or_exit(
        config_path, json_output=json_output, media_root=media_root
    )
    service = build_service_or_exit(config, json_output)

    try:
        library = service.rescan_library(trigger="cli")
    except MediaRootNotFoundError as e:
        error_exit(str(e), ExitCode.TARGET_NOT_FOUND, json_output)
    except (OSError, json.JSONDecodeError) as e:
        logger.exception("Scan failed")
        error_exit(f"Scan failed: {e}", ExitCode.OPERATION_FAILED, json_output)

    if json_output:
        echo_json(library)
        return

    echo_scan_summary(service.scanner.media_root, library, service.last_result)
