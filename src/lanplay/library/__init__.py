"""Library scan-and-cache pipeline.

Public API:
    - LibraryService: read-through cache, rescans and auto-rescan control
    - LibraryScanner: runs one full scan pass and persists it
    - ScanCoordinator: single-slot token serializing scan passes
    - ThumbnailGenerator: ffmpeg thumbnail extraction
    - scan_directory: scan one folder
    - cleanup_orphan_thumbnails: delete thumbnails with no media file
    - Library, MediaEntry, ScanResult: data model
"""

from lanplay.library.cache import LibraryCache
from lanplay.library.cleanup import cleanup_orphan_thumbnails
from lanplay.library.exceptions import LibraryError, MediaRootNotFoundError
from lanplay.library.models import Library, MediaEntry, ScanResult
from lanplay.library.orchestrator import LibraryScanner
from lanplay.library.scanner import DirectoryScan, scan_directory
from lanplay.library.service import LibraryService, ScanCoordinator
from lanplay.library.thumbnails import ThumbnailGenerator

__all__ = [
    "DirectoryScan",
    "Library",
    "LibraryCache",
    "LibraryError",
    "LibraryScanner",
    "LibraryService",
    "MediaEntry",
    "MediaRootNotFoundError",
    "ScanCoordinator",
    "ScanResult",
    "ThumbnailGenerator",
    "cleanup_orphan_thumbnails",
    "scan_directory",
]
