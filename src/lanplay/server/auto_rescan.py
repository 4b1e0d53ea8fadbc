"""Background auto-rescan task for the server.

Scans the library once at startup and then on a fixed period. Ticks are
scheduled from the previous tick, not from the end of the previous scan,
so a slow scan can overlap the next tick; that tick finds the scan token
taken and is dropped.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lanplay.library.service import LibraryService

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 600

# Number of consecutive failures before marking unhealthy
_UNHEALTHY_THRESHOLD = 3


class AutoRescanTask:
    """Periodically rescans the library on a worker thread.

    Usage:
        task = AutoRescanTask(service, interval_seconds=600)
        asyncio.create_task(task.run())
        # ... later ...
        task.stop()
    """

    def __init__(
        self,
        service: LibraryService,
        *,
        interval_seconds: int = DEFAULT_INTERVAL_SECONDS,
    ) -> None:
        """Initialize the auto-rescan task.

        Args:
            service: Library service whose auto_scan() is called each tick.
            interval_seconds: Seconds between ticks.
        """
        self.interval_seconds = interval_seconds
        self._service = service
        self._stop_event = asyncio.Event()
        self._state_lock = asyncio.Lock()
        self._running = False
        self._scan_tasks: set[asyncio.Task[None]] = set()
        self._last_run: datetime | None = None
        self._ticks = 0
        self._ticks_skipped = 0
        self._consecutive_failures = 0
        self._is_healthy = True

    async def run(self) -> None:
        """Run the tick loop until stop() is called.

        The first tick fires immediately.
        """
        async with self._state_lock:
            if self._running:
                logger.warning("Auto-rescan task already running")
                return
            self._running = True

        logger.info(
            "Auto-rescan task started (interval %d seconds)", self.interval_seconds
        )

        try:
            while not self._stop_event.is_set():
                self._tick()
                try:
                    await asyncio.wait_for(
                        self._stop_event.wait(),
                        timeout=self.interval_seconds,
                    )
                    break
                except asyncio.TimeoutError:
                    pass  # Normal case - interval elapsed
        except asyncio.CancelledError:
            pass
        finally:
            async with self._state_lock:
                self._running = False
            logger.info("Auto-rescan task stopped")

    def stop(self) -> None:
        """Signal the tick loop to stop. Running scans finish on their own."""
        self._stop_event.set()

    @property
    def is_running(self) -> bool:
        """Check if the tick loop is running."""
        return self._running

    @property
    def last_run(self) -> datetime | None:
        """Start time of the last tick whose scan completed."""
        return self._last_run

    @property
    def ticks(self) -> int:
        """Number of ticks fired."""
        return self._ticks

    @property
    def ticks_skipped(self) -> int:
        """Number of ticks dropped because a scan was already running."""
        return self._ticks_skipped

    @property
    def is_healthy(self) -> bool:
        """False after several consecutive failed scans."""
        return self._is_healthy

    def _tick(self) -> None:
        self._ticks += 1
        task = asyncio.create_task(self._run_scan())
        self._scan_tasks.add(task)
        task.add_done_callback(self._scan_tasks.discard)

    async def _run_scan(self) -> None:
        """Execute one tick's scan, logging and absorbing failures."""
        start_time = datetime.now(timezone.utc)
        try:
            scanned = await asyncio.to_thread(self._service.auto_scan)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._consecutive_failures += 1
            if (
                self._consecutive_failures >= _UNHEALTHY_THRESHOLD
                and self._is_healthy
            ):
                self._is_healthy = False
                logger.error(
                    "Auto-rescan marked unhealthy after %d consecutive failures",
                    self._consecutive_failures,
                )
            logger.exception("Auto rescan failed: %s", e)
            return

        if not scanned:
            self._ticks_skipped += 1
            return

        self._last_run = start_time
        self._consecutive_failures = 0
        if not self._is_healthy:
            self._is_healthy = True
            logger.info("Auto-rescan recovered, marking healthy")
