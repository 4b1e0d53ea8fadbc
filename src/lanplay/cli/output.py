"""Terminal output for the lanplay commands.

Library views and scan summaries go to stdout. Errors go to stderr, as a
one-line message or, with ``--json``, as an object naming the exit code
so scripts can branch on it.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, NoReturn

import click

from lanplay.cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from lanplay.library.models import ScanResult


def echo_json(data: Any) -> None:
    """Print a library view (or any JSON data) indented on stdout."""
    click.echo(json.dumps(data, indent=2))


def echo_scan_summary(
    media_root: Path, library: dict[str, Any], result: ScanResult | None
) -> None:
    """Print the per-category counts of a finished scan."""
    click.echo(f"Scanned {media_root}")
    click.echo(f"  Movies: {len(library['movies'])}")
    click.echo(f"  Music:  {len(library['music'])}")
    click.echo(f"  Shows:  {len(library['series'])}")
    if result is None:
        return
    click.echo(f"  Thumbnails: {result.thumbnails_available}")
    if result.thumbnails_failed:
        click.echo(f"  Thumbnails failed: {result.thumbnails_failed}")
    if result.orphans_removed:
        click.echo(f"  Orphans removed: {result.orphans_removed}")
    click.echo(f"  Elapsed: {result.elapsed_seconds:.1f}s")


def error_exit(
    message: str,
    code: ExitCode,
    json_output: bool = False,
) -> NoReturn:
    """Report an error on stderr and exit with code.

    With json_output the error is printed as
    ``{"status": "failed", "error": {"code": "<ExitCode name>", "message": ...}}``.
    """
    if json_output:
        error = {"code": code.name, "message": message}
        click.echo(json.dumps({"status": "failed", "error": error}), err=True)
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))
