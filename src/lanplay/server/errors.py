"""JSON error bodies for the library endpoints.

A failed ``/library`` or ``/library/rescan`` request answers with a JSON
body instead of aiohttp's plain-text error page::

    {"error": "Library scan failed", "code": "SCAN_FAILED", "details": "..."}

``details`` carries the underlying exception message when there is one.
"""

from __future__ import annotations

from typing import Any

from aiohttp import web

# The configured media root is unset or not a directory.
MEDIA_ROOT_NOT_FOUND = "MEDIA_ROOT_NOT_FOUND"

# A scan pass could not list a folder or write the library files.
SCAN_FAILED = "SCAN_FAILED"

# The cache file exists but is not valid UTF-8 JSON.
CACHE_CORRUPT = "CACHE_CORRUPT"

# The cached library could not be loaded for another reason.
INTERNAL_ERROR = "INTERNAL_ERROR"


def api_error(
    message: str,
    *,
    code: str,
    status: int = 500,
    details: Any = None,
) -> web.Response:
    """Build a JSON error response.

    Args:
        message: What went wrong, for people.
        code: One of the codes above, for clients.
        status: HTTP status. Library failures are server-side, hence 500.
        details: Exception message or other context, omitted when None.
    """
    body: dict[str, Any] = {"error": message, "code": code}
    if details is not None:
        body["details"] = details
    return web.json_response(body, status=status)
