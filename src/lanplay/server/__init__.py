"""HTTP server for the media library.

Public API:
    - create_app: build the aiohttp application
    - AutoRescanTask: periodic background rescans
    - ServerLifecycle: uptime and graceful shutdown state
    - mime_type_for: content type for a media file
"""

from lanplay.server.app import create_app
from lanplay.server.auto_rescan import AutoRescanTask
from lanplay.server.lifecycle import ServerLifecycle, ShutdownState
from lanplay.server.mime import mime_type_for

__all__ = [
    "AutoRescanTask",
    "ServerLifecycle",
    "ShutdownState",
    "create_app",
    "mime_type_for",
]
