"""Scan context for structured logging.

Scans run on worker threads and may be started by the scheduler, an HTTP
request or the CLI. The scan id and trigger are kept in contextvars and
injected into every log record emitted while the scan runs.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_scan_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scan_id", default=None
)
_scan_trigger: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scan_trigger", default=None
)


def get_scan_context() -> tuple[str | None, str | None]:
    """Return (scan_id, trigger) for the current context; either may be None."""
    return _scan_id.get(), _scan_trigger.get()


@contextmanager
def scan_context(
    scan_id: str, trigger: str | None = None
) -> Generator[None, None, None]:
    """Set the scan context for the duration of the block.

    Args:
        scan_id: Scan identifier (e.g., "S0003").
        trigger: What started the scan ("auto", "api", "cli", ...).

    Example:
        with scan_context("S0001", "auto"):
            logger.info("Scanning")  # Rendered as "[S0001] ... Scanning"
    """
    id_token = _scan_id.set(scan_id)
    trigger_token = _scan_trigger.set(trigger)
    try:
        yield
    finally:
        _scan_id.reset(id_token)
        _scan_trigger.reset(trigger_token)


class ScanContextFilter(logging.Filter):
    """Logging filter that injects scan context into log records.

    Adds scan_id and scan_trigger for JSON output and a compact scan_tag
    ("[S0003] " or empty) for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        scan_id, trigger = get_scan_context()
        record.scan_id = scan_id
        record.scan_trigger = trigger
        record.scan_tag = f"[{scan_id}] " if scan_id else ""
        return True
