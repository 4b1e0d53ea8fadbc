"""CLI module for LANPlay."""

import logging
import os
from pathlib import Path

import click

from lanplay import __version__

_logging_configured: bool = False
_startup_logged: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from CLI options.

    Args:
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    global _logging_configured
    if _logging_configured:
        return

    from lanplay.config.logging_factory import configure_logging_from_cli

    configure_logging_from_cli(level=log_level, log_file=log_file, log_json=log_json)
    _logging_configured = True


def _log_startup_settings() -> None:
    """Log the data directory and where it came from."""
    global _startup_logged
    if _startup_logged:
        return
    _startup_logged = True

    from lanplay.config.loader import get_data_dir

    data_dir = get_data_dir()
    source = "env" if os.environ.get("LANPLAY_DATA_DIR") else "default"
    data_dir_display = str(data_dir).replace(str(Path.home()), "~")
    logger.debug("LANPlay starting: data_dir=%s (%s)", data_dir_display, source)


@click.group()
@click.version_option(version=__version__, prog_name="lanplay")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """LANPlay - Serve a home media library to devices on the local network."""
    ctx.ensure_object(dict)

    try:
        _configure_logging(log_level, log_file, log_json)
    except ValueError as e:
        from lanplay.cli.exit_codes import ExitCode
        from lanplay.cli.output import error_exit

        error_exit(f"Invalid configuration: {e}", ExitCode.CONFIG_ERROR)

    _log_startup_settings()


# Defer import to avoid circular dependency
def _register_commands():
    from lanplay.cli.library import library_command
    from lanplay.cli.scan import scan_command
    from lanplay.cli.serve import serve_command

    main.add_command(library_command)
    main.add_command(scan_command)
    main.add_command(serve_command)


_register_commands()
