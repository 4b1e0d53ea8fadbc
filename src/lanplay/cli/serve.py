"""CLI serve command.

This module provides the `lanplay serve` command that runs the media
server as a long-lived service suitable for systemd management.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from lanplay.cli.config_loader import build_service_or_exit, load_config_or_exit
from lanplay.cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from lanplay.config.models import LanPlayConfig
    from lanplay.library.service import LibraryService

logger = logging.getLogger(__name__)


async def run_server(
    config: LanPlayConfig,
    service: LibraryService,
    *,
    auto_rescan: bool = True,
) -> int:
    """Run the HTTP server until a shutdown signal arrives.

    Args:
        config: Loaded configuration (bind address, port, intervals).
        service: Library service backing the API.
        auto_rescan: Start the auto-rescan task with the server.

    Returns:
        Exit code (0 for clean shutdown, non-zero for errors).
    """
    from aiohttp import web

    from lanplay.server.app import create_app
    from lanplay.server.lifecycle import ServerLifecycle
    from lanplay.server.signals import (
        remove_signal_handlers,
        setup_signal_handlers,
    )

    bind = config.server.bind
    port = config.server.port
    lifecycle = ServerLifecycle(shutdown_timeout=config.server.shutdown_timeout)

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    setup_signal_handlers(loop, lifecycle, shutdown_event)

    app = create_app(service, config, auto_rescan=auto_rescan)
    app["lifecycle"] = lifecycle

    runner = web.AppRunner(app, shutdown_timeout=config.server.shutdown_timeout)
    await runner.setup()

    try:
        site = web.TCPSite(runner, bind, port)
        await site.start()

        logger.info(
            "LANPlay server started on http://%s:%d (PID %d)",
            bind,
            port,
            os.getpid(),
        )
        logger.info("Library endpoint: http://%s:%d/library", bind, port)
        logger.info("Press Ctrl+C or send SIGTERM to stop")

        await shutdown_event.wait()

        logger.info(
            "Shutdown initiated, waiting up to %.1fs for cleanup",
            config.server.shutdown_timeout,
        )

    except OSError as e:
        if "Address already in use" in str(e) or e.errno == 98:
            logger.error("Port %d is already in use", port)
            return ExitCode.GENERAL_ERROR
        if "Cannot assign requested address" in str(e) or e.errno == 99:
            logger.error("Cannot bind to address %s", bind)
            return ExitCode.GENERAL_ERROR
        logger.error("Server error: %s", e)
        return ExitCode.GENERAL_ERROR
    finally:
        remove_signal_handlers(loop)
        await runner.cleanup()
        logger.info("LANPlay server stopped")

    return ExitCode.SUCCESS


@click.command("serve")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ~/.lanplay/config.toml).",
)
@click.option(
    "--bind",
    type=str,
    default=None,
    help="Address to bind to (default: 0.0.0.0).",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (default: 8080).",
)
@click.option(
    "--media-root",
    "-m",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Media root holding Movies/, Music/ and Series/.",
)
@click.option(
    "--interval",
    "interval_seconds",
    type=int,
    default=None,
    help="Seconds between automatic rescans (default: 600).",
)
@click.option(
    "--no-auto-rescan",
    is_flag=True,
    default=False,
    help="Do not rescan in the background; scan only on request.",
)
def serve_command(
    config_path: Path | None,
    bind: str | None,
    port: int | None,
    media_root: Path | None,
    interval_seconds: int | None,
    no_auto_rescan: bool,
) -> None:
    """Run the media server.

    Serves the library at /library, rescans at /library/rescan, and the
    media and thumbnail folders as static files. The library is rescanned
    at startup and then every --interval seconds.

    Configuration precedence (highest to lowest):
      1. CLI flags (--bind, --port, --media-root, --interval)
      2. Environment variables (LANPLAY_*)
      3. Config file (--config or ~/.lanplay/config.toml)
      4. Default values

    \b
    Examples:
        lanplay serve --media-root /srv/media
        lanplay serve --port 9000 --interval 300
        lanplay serve --bind 127.0.0.1
    """
    if port is not None and not 1 <= port <= 65535:
        click.echo(f"Error: Port must be 1-65535, got {port}", err=True)
        sys.exit(ExitCode.INVALID_ARGUMENTS)

    config = load_config_or_exit(
        config_path,
        media_root=media_root,
        scan_interval_seconds=interval_seconds,
        server_bind=bind,
        server_port=port,
    )
    service = build_service_or_exit(config)

    if config.server.port < 1024:
        logger.warning("Port %d is privileged and may require root", config.server.port)

    logger.info(
        "Starting LANPlay server (media_root=%s, bind=%s, port=%d, interval=%ds)",
        config.library.media_root,
        config.server.bind,
        config.server.port,
        config.scan.interval_seconds,
    )

    try:
        exit_code = asyncio.run(
            run_server(config, service, auto_rescan=not no_auto_rescan)
        )
        sys.exit(exit_code)
    except KeyboardInterrupt:
        logger.info("Interrupted before server started")
        sys.exit(ExitCode.INTERRUPTED)
