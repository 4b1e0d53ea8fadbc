"""Thumbnail extraction with ffmpeg.

A thumbnail is a single JPEG frame taken a fixed offset into the video,
scaled to a fixed width. Its path depends only on the video's file name,
so an existing thumbnail is reused instead of being extracted again.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - only for TimeoutExpired
from pathlib import Path

from lanplay.core.subprocess_utils import run_command

logger = logging.getLogger(__name__)

THUMBNAIL_SUFFIX = ".jpg"
THUMBNAIL_URL_PREFIX = "/thumbnails"

DEFAULT_OFFSET = "00:01:00"
DEFAULT_WIDTH = 854


def thumbnail_name(file_name: str) -> str:
    """Return the thumbnail file name for a media file name."""
    return Path(file_name).stem + THUMBNAIL_SUFFIX


def thumbnail_url(thumbnail_path: Path) -> str:
    """Return the public URL path a thumbnail is served under."""
    return f"{THUMBNAIL_URL_PREFIX}/{thumbnail_path.name}"


class ThumbnailGenerator:
    """Creates or reuses thumbnails in one thumbnails directory."""

    def __init__(
        self,
        thumbnails_dir: Path,
        ffmpeg_path: Path | str | None = None,
        offset: str = DEFAULT_OFFSET,
        width: int = DEFAULT_WIDTH,
        timeout: float | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            thumbnails_dir: Folder thumbnails are written to.
            ffmpeg_path: ffmpeg executable. None looks "ffmpeg" up on PATH.
            offset: Timestamp (HH:MM:SS) of the extracted frame.
            width: Output width in pixels; height keeps the aspect ratio.
            timeout: Seconds before ffmpeg is killed. None waits forever.
        """
        self.thumbnails_dir = thumbnails_dir
        self.ffmpeg_path = str(ffmpeg_path) if ffmpeg_path else "ffmpeg"
        self.offset = offset
        self.width = width
        self.timeout = timeout

    def thumbnail_path_for(self, file_name: str) -> Path:
        """Deterministic thumbnail path for a media file name."""
        return self.thumbnails_dir / thumbnail_name(file_name)

    def build_command(self, video_path: Path, target: Path) -> list[str | Path]:
        """Build the ffmpeg command that extracts one scaled frame."""
        return [
            self.ffmpeg_path,
            "-y",
            "-ss",
            self.offset,
            "-i",
            video_path,
            "-vf",
            f"scale={self.width}:-1",
            "-frames:v",
            "1",
            target,
        ]

    def generate(self, video_path: Path, file_name: str) -> Path | None:
        """Return the thumbnail for a video, extracting it if needed.

        Args:
            video_path: Absolute path of the source video.
            file_name: The video's file name; determines the thumbnail name.

        Returns:
            Path of the thumbnail, or None if extraction failed. Failures
            are logged and never raised.
        """
        target = self.thumbnail_path_for(file_name)
        if target.exists():
            return target

        target.parent.mkdir(parents=True, exist_ok=True)
        args = self.build_command(video_path, target)

        try:
            _, stderr, returncode = run_command(args, timeout=self.timeout)
        except subprocess.TimeoutExpired:
            logger.warning("Thumbnail timed out: %s", file_name)
            target.unlink(missing_ok=True)
            return None
        except OSError as e:
            logger.warning("Thumbnail failed: %s (%s)", file_name, e)
            return None

        if returncode != 0:
            logger.warning(
                "Thumbnail failed: %s (ffmpeg exit %d)",
                file_name,
                returncode,
                extra={"stderr_tail": stderr[-500:]},
            )
            target.unlink(missing_ok=True)
            return None

        # ffmpeg exits 0 without output when the offset is past the end
        if not target.exists():
            logger.warning("Thumbnail failed: %s (no frame written)", file_name)
            return None

        logger.debug("Created thumbnail %s", target.name)
        return target
