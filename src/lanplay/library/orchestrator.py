"""Library scan orchestrator.

One scan pass walks the three category roots in order, collects the
thumbnails that are still backed by media files, removes the rest, and
persists the result:

    Movies  -> flat, thumbnails
    Music   -> flat, no thumbnails
    Series  -> one folder per show, each flat, thumbnails

Everything runs sequentially on the calling thread.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from lanplay.config.models import DEFAULT_EXTENSIONS
from lanplay.library.cache import LibraryCache
from lanplay.library.cleanup import cleanup_orphan_thumbnails
from lanplay.library.exceptions import MediaRootNotFoundError
from lanplay.library.models import (
    MOVIES_DIR,
    MUSIC_DIR,
    SERIES_DIR,
    Library,
    MediaEntry,
    ScanResult,
)
from lanplay.library.scanner import display_name, scan_directory
from lanplay.library.thumbnails import ThumbnailGenerator

logger = logging.getLogger(__name__)


class LibraryScanner:
    """Coordinates directory scans, thumbnail cleanup and persistence."""

    def __init__(
        self,
        media_root: Path,
        cache: LibraryCache,
        generator: ThumbnailGenerator,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ) -> None:
        """Initialize the scanner.

        Args:
            media_root: Folder holding Movies/, Music/ and Series/.
            cache: Where the scan result is persisted.
            generator: Thumbnail generator writing into the thumbnails folder.
            extensions: Supported-extension allow-list.
        """
        self.media_root = media_root.absolute()
        self.cache = cache
        self.generator = generator
        self.extensions = tuple(extensions)
        self.last_result: ScanResult | None = None

    def scan_library(self) -> Library:
        """Run one full scan pass and persist it.

        Returns:
            The freshly built library. Both views are on disk when this
            returns.

        Raises:
            MediaRootNotFoundError: If the media root is missing.
            OSError: If a category folder cannot be listed or an artifact
                cannot be written. Previous artifacts are left untouched
                when the failure happens before persistence.
        """
        if not self.media_root.is_dir():
            raise MediaRootNotFoundError(self.media_root)

        logger.info("Scanning media library in %s", self.media_root)
        start = time.monotonic()
        result = ScanResult(started_at=datetime.now(timezone.utc))
        library = Library()
        valid_thumbnails: set[str] = set()

        self.generator.thumbnails_dir.mkdir(parents=True, exist_ok=True)

        movies_path = self.media_root / MOVIES_DIR
        if movies_path.exists():
            library.movies = self._scan_folder(
                movies_path, True, valid_thumbnails, result
            )
        else:
            self._skip(MOVIES_DIR, result)

        music_path = self.media_root / MUSIC_DIR
        if music_path.exists():
            library.music = self._scan_folder(
                music_path, False, valid_thumbnails, result
            )
        else:
            self._skip(MUSIC_DIR, result)

        series_path = self.media_root / SERIES_DIR
        if series_path.exists():
            for show_path in self._list_shows(series_path):
                show_name = display_name(show_path.name)
                library.series[show_name] = self._scan_folder(
                    show_path, True, valid_thumbnails, result
                )
            result.shows_found = len(library.series)
        else:
            self._skip(SERIES_DIR, result)

        removed = cleanup_orphan_thumbnails(
            self.generator.thumbnails_dir, valid_thumbnails
        )
        result.orphans_removed = len(removed)

        self.cache.write(library)

        result.files_found = library.file_count
        result.thumbnails_available = len(valid_thumbnails)
        result.elapsed_seconds = round(time.monotonic() - start, 3)
        self.last_result = result

        logger.info(
            "Library scan complete: %d file(s), %d show(s), "
            "%d thumbnail(s) failed, %d orphan(s) removed in %.1f seconds",
            result.files_found,
            result.shows_found,
            result.thumbnails_failed,
            result.orphans_removed,
            result.elapsed_seconds,
        )
        return library

    def _scan_folder(
        self,
        folder: Path,
        thumbnails: bool,
        valid_thumbnails: set[str],
        result: ScanResult,
    ) -> list[MediaEntry]:
        scan = scan_directory(
            folder,
            extensions=self.extensions,
            generator=self.generator if thumbnails else None,
        )
        valid_thumbnails.update(scan.valid_thumbnails)
        result.thumbnails_failed += scan.thumbnails_failed
        return scan.entries

    @staticmethod
    def _list_shows(series_path: Path) -> list[Path]:
        """Immediate subfolders of the series root, in listing order."""
        return [entry for entry in series_path.iterdir() if entry.is_dir()]

    @staticmethod
    def _skip(category: str, result: ScanResult) -> None:
        logger.debug("Category folder %s not found, skipping", category)
        result.categories_skipped.append(category)
