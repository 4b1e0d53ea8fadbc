"""Orphan thumbnail cleanup.

Must run once per scan pass, after every category has been scanned;
running it after a partial scan would delete thumbnails of categories
that were not visited.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from pathlib import Path

logger = logging.getLogger(__name__)


def cleanup_orphan_thumbnails(
    thumbnails_dir: Path, valid_base_names: Collection[str]
) -> list[str]:
    """Delete thumbnails whose base name is not in valid_base_names.

    Args:
        thumbnails_dir: Folder holding the thumbnails.
        valid_base_names: Base names (no extension) backed by a media file
            found in the current scan.

    Returns:
        Names of the deleted files.

    Raises:
        OSError: If the folder cannot be listed or a file cannot be deleted.
    """
    if not thumbnails_dir.exists():
        return []

    removed: list[str] = []
    for thumb in thumbnails_dir.iterdir():
        if not thumb.is_file():
            continue
        if thumb.stem in valid_base_names:
            continue
        thumb.unlink()
        logger.info("Removed orphan thumbnail: %s", thumb.name)
        removed.append(thumb.name)

    return removed
