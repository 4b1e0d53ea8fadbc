"""Structured logging module for LANPlay.

Provides configurable logging with JSON format support and file rotation.
Includes scan context support so log lines from concurrent scan triggers
can be told apart.
"""

from lanplay.logging.config import configure_logging
from lanplay.logging.context import (
    ScanContextFilter,
    get_scan_context,
    scan_context,
)
from lanplay.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "ScanContextFilter",
    "configure_logging",
    "get_scan_context",
    "scan_context",
]
