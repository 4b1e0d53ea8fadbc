"""Library service: the API the HTTP layer and CLI talk to.

Scans may be requested from several threads at once (the auto-rescan
task, HTTP handlers running scans off the event loop, the CLI). The
ScanCoordinator owns a single-slot token so at most one scan pass writes
the artifacts and the thumbnails folder at a time.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from lanplay.library.cache import LibraryCache
from lanplay.library.exceptions import MediaRootNotFoundError
from lanplay.library.models import THUMBNAILS_DIR
from lanplay.library.orchestrator import LibraryScanner
from lanplay.library.thumbnails import ThumbnailGenerator
from lanplay.logging.context import scan_context

if TYPE_CHECKING:
    from lanplay.config.models import LanPlayConfig
    from lanplay.library.models import Library, ScanResult
    from lanplay.server.auto_rescan import AutoRescanTask

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ScanCoordinator:
    """Serializes scan passes behind one lock.

    Usage:
        coordinator = ScanCoordinator(scanner)
        coordinator.scan("api")        # waits for a running scan, then scans
        coordinator.try_scan("auto")   # returns None if a scan is running
        coordinator.scan_unless(read, "cache-miss")  # scans only if read() is None
    """

    def __init__(self, scanner: LibraryScanner) -> None:
        self._scanner = scanner
        self._lock = threading.Lock()
        self._scan_count = 0

    @property
    def is_scanning(self) -> bool:
        """True while a scan pass holds the token."""
        return self._lock.locked()

    @property
    def scan_count(self) -> int:
        """Number of scan passes started so far."""
        return self._scan_count

    def scan(self, trigger: str = "api") -> Library:
        """Run a scan pass, waiting for any running pass to finish first."""
        with self._lock:
            return self._run(trigger)

    def scan_unless(
        self, existing: Callable[[], T | None], trigger: str
    ) -> T | Library:
        """Return existing() if it yields a value once the token is held.

        Otherwise run a scan pass. A caller that waited on a running pass
        gets what that pass produced instead of scanning again.
        """
        with self._lock:
            found = existing()
            if found is not None:
                return found
            return self._run(trigger)

    def try_scan(self, trigger: str = "auto") -> Library | None:
        """Run a scan pass unless one is already running.

        Returns:
            The new library, or None if the token was taken. A skipped
            request is dropped, not queued.
        """
        if not self._lock.acquire(blocking=False):
            logger.info("Scan already in progress, skipping %s scan", trigger)
            return None
        try:
            return self._run(trigger)
        finally:
            self._lock.release()

    def _run(self, trigger: str) -> Library:
        self._scan_count += 1
        with scan_context(f"S{self._scan_count:04d}", trigger):
            logger.debug("Scan started (trigger=%s)", trigger)
            return self._scanner.scan_library()


class LibraryService:
    """Read-through access to the persisted library plus rescan control."""

    def __init__(self, scanner: LibraryScanner, cache: LibraryCache) -> None:
        self.scanner = scanner
        self.cache = cache
        self.coordinator = ScanCoordinator(scanner)
        self._auto_rescan: AutoRescanTask | None = None
        self._auto_rescan_handle: asyncio.Task[None] | None = None

    @classmethod
    def from_config(cls, config: LanPlayConfig) -> LibraryService:
        """Build the scan pipeline described by a configuration.

        Raises:
            MediaRootNotFoundError: If no media root is configured or it is
                not a directory.
        """
        media_root = config.library.media_root
        if media_root is None or not media_root.is_dir():
            raise MediaRootNotFoundError(media_root)

        generator = ThumbnailGenerator(
            media_root / THUMBNAILS_DIR,
            ffmpeg_path=config.tools.ffmpeg,
            offset=config.scan.thumbnail_offset,
            width=config.scan.thumbnail_width,
            timeout=config.scan.thumbnail_timeout,
        )
        cache = LibraryCache(config.cache_file, config.data_file)
        scanner = LibraryScanner(
            media_root,
            cache,
            generator,
            extensions=config.library.extensions,
        )
        return cls(scanner, cache)

    @property
    def is_scanning(self) -> bool:
        """True while a scan pass is running."""
        return self.coordinator.is_scanning

    @property
    def last_result(self) -> ScanResult | None:
        """Summary of the most recent completed scan in this process."""
        return self.scanner.last_result

    @property
    def auto_rescan(self) -> AutoRescanTask | None:
        """The running auto-rescan task, if started."""
        return self._auto_rescan

    def get_library(self) -> dict[str, Any]:
        """Return the cached library, scanning first if no cache exists.

        The cache artifact is returned exactly as stored.

        Raises:
            json.JSONDecodeError: If the cache artifact is corrupt. There is
                no fallback to scanning in that case.
        """
        cached = self.cache.read_cache()
        if cached is not None:
            return cached
        logger.info("No library cache at %s, scanning now", self.cache.cache_file)
        found = self.coordinator.scan_unless(self.cache.read_cache, "cache-miss")
        if isinstance(found, dict):
            return found
        return found.to_cache_dict()

    def rescan_library(self, trigger: str = "api") -> dict[str, Any]:
        """Run a full scan regardless of the cache and return the cache view."""
        return self.coordinator.scan(trigger).to_cache_dict()

    def get_internal_data(self) -> dict[str, Any] | None:
        """Return the data view (with absolute paths), or None if absent."""
        return self.cache.read_data()

    def auto_scan(self) -> bool:
        """Scan unless a scan is already running.

        Returns:
            True if a scan ran, False if the request was skipped.
        """
        return self.coordinator.try_scan("auto") is not None

    def start_auto_rescan(self, interval_seconds: int = 600) -> AutoRescanTask:
        """Scan now and then every interval_seconds in the background.

        Must be called from a running event loop. Calling it again before
        stop_auto_rescan() returns the existing task.
        """
        from lanplay.server.auto_rescan import AutoRescanTask

        if self._auto_rescan is not None:
            return self._auto_rescan

        task = AutoRescanTask(self, interval_seconds=interval_seconds)
        self._auto_rescan = task
        self._auto_rescan_handle = asyncio.get_running_loop().create_task(task.run())
        return task

    async def stop_auto_rescan(self, timeout: float = 5.0) -> None:
        """Stop the auto-rescan task and wait for its loop to exit.

        A scan already running on a worker thread finishes on its own.
        """
        task = self._auto_rescan
        handle = self._auto_rescan_handle
        if task is None:
            return
        task.stop()

        if handle is not None and not handle.done():
            try:
                await asyncio.wait_for(handle, timeout=timeout)
            except asyncio.TimeoutError:
                logger.warning("Auto-rescan task did not stop in time, cancelling")
                handle.cancel()
                try:
                    await handle
                except asyncio.CancelledError:
                    pass

        self._auto_rescan = None
        self._auto_rescan_handle = None
