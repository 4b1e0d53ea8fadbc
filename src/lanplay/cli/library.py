"""Library command for lanplay CLI."""

from __future__ import annotations

import json
from pathlib import Path

import click

from lanplay.cli.config_loader import load_config_or_exit
from lanplay.cli.exit_codes import ExitCode
from lanplay.cli.output import echo_json, error_exit
from lanplay.library.cache import LibraryCache


@click.command("library")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ~/.lanplay/config.toml).",
)
@click.option(
    "--data",
    "show_data",
    is_flag=True,
    default=False,
    help="Print the internal data view with absolute file paths.",
)
def library_command(config_path: Path | None, show_data: bool) -> None:
    """Print the cached library as JSON.

    Reads the last scan result without scanning. Run 'lanplay scan' to
    refresh it.
    """
    config = load_config_or_exit(config_path, require_media_root=False)
    cache = LibraryCache(config.cache_file, config.data_file)

    try:
        view = cache.read_data() if show_data else cache.read_cache()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        error_exit(f"Library cache is corrupt: {e}", ExitCode.OPERATION_FAILED)
    except OSError as e:
        error_exit(f"Cannot read library cache: {e}", ExitCode.OPERATION_FAILED)

    if view is None:
        error_exit(
            "No library cache found. Run 'lanplay scan' first.",
            ExitCode.TARGET_NOT_FOUND,
        )

    echo_json(view)
