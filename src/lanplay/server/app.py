"""HTTP application for the media server.

This module provides the aiohttp Application serving the library JSON,
the rescan trigger, thumbnails and the media folders themselves.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from aiohttp import web
from aiohttp.web import RequestHandler

from lanplay import __version__
from lanplay.library.exceptions import LibraryError, MediaRootNotFoundError
from lanplay.library.models import MOVIES_DIR, MUSIC_DIR, SERIES_DIR
from lanplay.server.auto_rescan import DEFAULT_INTERVAL_SECONDS
from lanplay.server.errors import (
    CACHE_CORRUPT,
    INTERNAL_ERROR,
    MEDIA_ROOT_NOT_FOUND,
    SCAN_FAILED,
    api_error,
)
from lanplay.server.mime import is_known_media_type, mime_type_for

if TYPE_CHECKING:
    from lanplay.config.models import LanPlayConfig
    from lanplay.library.service import LibraryService
    from lanplay.server.lifecycle import ServerLifecycle

logger = logging.getLogger(__name__)

SERVER_NAME = "LANPlay Server"

# URL prefix -> category folder under the media root
MEDIA_ROUTES: dict[str, str] = {
    "/movies": MOVIES_DIR,
    "/series": SERIES_DIR,
    "/musics": MUSIC_DIR,
}


@dataclass
class HealthStatus:
    """Health check response payload."""

    status: str
    """Overall status: 'healthy', 'degraded', or 'unhealthy'."""

    uptime_seconds: float
    """Seconds since server startup."""

    version: str
    """LANPlay version string."""

    scanning: bool = False
    """True while a scan pass is running."""

    shutting_down: bool = False
    """True if graceful shutdown is in progress."""

    auto_rescan: bool = False
    """True if the auto-rescan task is running."""

    last_scan: dict[str, Any] | None = None
    """Summary of the most recent scan, if one ran in this process."""

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


@web.middleware
async def cors_middleware(
    request: web.Request, handler: RequestHandler
) -> web.StreamResponse:
    """Allow any origin on every response, errors included."""
    try:
        response = await handler(request)
    except web.HTTPException as e:
        e.headers["Access-Control-Allow-Origin"] = "*"
        raise
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


@web.middleware
async def media_type_middleware(
    request: web.Request, handler: RequestHandler
) -> web.StreamResponse:
    """Set the content type of served media files before they are sent."""
    response = await handler(request)
    if (
        isinstance(response, web.FileResponse)
        and request.path.startswith(tuple(f"{p}/" for p in MEDIA_ROUTES))
        and is_known_media_type(request.path)
    ):
        response.headers["Content-Type"] = mime_type_for(request.path)
    return response


def create_app(
    service: LibraryService,
    config: LanPlayConfig | None = None,
    *,
    auto_rescan: bool = True,
) -> web.Application:
    """Create and configure the aiohttp Application.

    Args:
        service: Library service backing the API routes.
        config: Loaded configuration. Supplies the auto-rescan interval.
        auto_rescan: Start the auto-rescan task when the server starts.

    Returns:
        Configured aiohttp Application instance.
    """
    app = web.Application(middlewares=[cors_middleware, media_type_middleware])

    # Store runtime state in app dict
    app["service"] = service
    app["config"] = config
    app["lifecycle"] = None  # Will be set by serve command
    app["auto_rescan_enabled"] = auto_rescan

    app.router.add_get("/ping", ping_handler)
    app.router.add_get("/health", health_handler)
    app.router.add_get("/library", library_handler)
    app.router.add_get("/library/rescan", rescan_handler)
    app.router.add_post("/library/rescan", rescan_handler)

    _setup_static_routes(app, service)

    app.on_startup.append(_start_auto_rescan)
    app.on_cleanup.append(_stop_auto_rescan)

    return app


def _setup_static_routes(app: web.Application, service: LibraryService) -> None:
    """Serve thumbnails and each category folder that exists."""
    thumbnails_dir = service.scanner.generator.thumbnails_dir
    thumbnails_dir.mkdir(parents=True, exist_ok=True)
    app.router.add_static("/thumbnails", thumbnails_dir, name="thumbnails")

    media_root = service.scanner.media_root
    for prefix, folder in MEDIA_ROUTES.items():
        path = media_root / folder
        if path.is_dir():
            app.router.add_static(prefix, path, name=prefix.strip("/"))
        else:
            logger.debug("Not serving %s: %s does not exist", prefix, path)


async def _start_auto_rescan(app: web.Application) -> None:
    """Start the background auto-rescan task."""
    if not app["auto_rescan_enabled"]:
        logger.debug("Auto-rescan disabled")
        return

    config: LanPlayConfig | None = app["config"]
    interval = (
        config.scan.interval_seconds if config is not None else DEFAULT_INTERVAL_SECONDS
    )
    service: LibraryService = app["service"]
    service.start_auto_rescan(interval)
    logger.debug("Started auto-rescan task")


async def _stop_auto_rescan(app: web.Application) -> None:
    """Stop the background auto-rescan task."""
    service: LibraryService = app["service"]
    await service.stop_auto_rescan(timeout=5.0)
    logger.debug("Stopped auto-rescan task")


async def ping_handler(request: web.Request) -> web.Response:
    """Handle GET /ping requests for client discovery."""
    return web.json_response({"status": "ok", "name": SERVER_NAME})


async def health_handler(request: web.Request) -> web.Response:
    """Handle GET /health requests.

    Returns 200 when healthy, 503 when shutting down or when the
    auto-rescan task has failed repeatedly.
    """
    service: LibraryService = request.app["service"]
    lifecycle: ServerLifecycle | None = request.app.get("lifecycle")

    shutting_down = lifecycle.is_shutting_down if lifecycle else False
    uptime = lifecycle.uptime_seconds if lifecycle else 0.0
    task = service.auto_rescan
    last_result = service.last_result

    if shutting_down:
        status = "unhealthy"
    elif task is not None and not task.is_healthy:
        status = "degraded"
    else:
        status = "healthy"

    health = HealthStatus(
        status=status,
        uptime_seconds=round(uptime, 1),
        version=__version__,
        scanning=service.is_scanning,
        shutting_down=shutting_down,
        auto_rescan=task.is_running if task is not None else False,
        last_scan=last_result.to_dict() if last_result is not None else None,
    )

    http_status = 200 if status == "healthy" else 503
    return web.json_response(health.to_dict(), status=http_status)


async def library_handler(request: web.Request) -> web.Response:
    """Handle GET /library requests.

    Returns the cached library, scanning first when no cache exists.
    """
    service: LibraryService = request.app["service"]
    return await _library_response(service.get_library)


async def rescan_handler(request: web.Request) -> web.Response:
    """Handle GET|POST /library/rescan requests.

    Runs a full scan, waiting for any scan already running, and returns
    the fresh library.
    """
    service: LibraryService = request.app["service"]
    return await _library_response(
        service.rescan_library,
        failure_code=SCAN_FAILED,
        failure_message="Library scan failed",
    )


async def _library_response(
    operation: Callable[[], dict[str, Any]],
    *,
    failure_code: str = INTERNAL_ERROR,
    failure_message: str = "Failed to load library",
) -> web.Response:
    """Run a library operation off the event loop and map its failures.

    Args:
        operation: Blocking call returning the cache view.
        failure_code: Error code for filesystem and encoding failures.
        failure_message: Error message for those failures.
    """
    try:
        library = await asyncio.to_thread(operation)
    except MediaRootNotFoundError as e:
        logger.error("Library unavailable: %s", e)
        return api_error(str(e), code=MEDIA_ROOT_NOT_FOUND)
    except LibraryError as e:
        logger.error("Library scan failed: %s", e)
        return api_error(str(e), code=SCAN_FAILED)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error("Library cache is corrupt: %s", e)
        return api_error("Library cache is corrupt", code=CACHE_CORRUPT, details=str(e))
    except (OSError, ValueError) as e:
        logger.exception("%s: %s", failure_message, e)
        return api_error(failure_message, code=failure_code, details=str(e))
    return web.json_response(library)
