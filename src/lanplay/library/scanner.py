"""Single-folder media scan.

scan_directory lists one folder (not recursively), keeps files whose
extension is in the allow-list, and attaches thumbnails to video files
when a ThumbnailGenerator is supplied.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from lanplay.config.models import DEFAULT_EXTENSIONS, VIDEO_EXTENSIONS
from lanplay.library.models import MediaEntry
from lanplay.library.thumbnails import thumbnail_url

if TYPE_CHECKING:
    from lanplay.library.thumbnails import ThumbnailGenerator

logger = logging.getLogger(__name__)


@dataclass
class DirectoryScan:
    """Result of scanning one folder."""

    entries: list[MediaEntry] = field(default_factory=list)
    valid_thumbnails: set[str] = field(default_factory=set)
    """Base names (no extension) of files that have a thumbnail."""

    thumbnails_failed: int = 0


def display_name(name: str) -> str:
    """Return a file name that is valid Unicode.

    Names that are not valid UTF-8 come back from the OS with surrogate
    escapes. Those bytes are replaced with U+FFFD so the name can be
    serialized; the real path is kept on the entry.
    """
    return os.fsencode(name).decode("utf-8", "replace")


def is_video(ext: str) -> bool:
    """Return True if a lowercase extension is a video container."""
    return ext in VIDEO_EXTENSIONS


def scan_directory(
    directory: Path,
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    generator: ThumbnailGenerator | None = None,
) -> DirectoryScan:
    """Scan the immediate entries of one folder.

    Entries keep directory-listing order. Subfolders are skipped, even when
    their name ends in a supported extension.

    Args:
        directory: Folder to list. Callers check that it exists.
        extensions: Supported-extension allow-list (lowercase, with dot).
        generator: If given, video files get a thumbnail.

    Returns:
        DirectoryScan with one entry per supported file.

    Raises:
        OSError: If the folder cannot be listed.
    """
    allowed = frozenset(extensions)
    result = DirectoryScan()

    with os.scandir(directory) as it:
        dir_entries = list(it)

    for dir_entry in dir_entries:
        name = display_name(dir_entry.name)
        ext = os.path.splitext(name)[1].lower()
        if ext not in allowed:
            continue
        if dir_entry.is_dir():
            continue

        file_path = Path(dir_entry.path)
        thumb_url: str | None = None
        thumb_path: Path | None = None

        if generator is not None and is_video(ext):
            thumb_path = generator.generate(file_path, name)
            if thumb_path is not None:
                thumb_url = thumbnail_url(thumb_path)
                result.valid_thumbnails.add(Path(name).stem)
            else:
                result.thumbnails_failed += 1

        result.entries.append(
            MediaEntry(
                name=name,
                ext=ext,
                file_path=file_path,
                thumbnail=thumb_url,
                thumbnail_path=thumb_path,
            )
        )

    logger.debug("Scanned %s: %d file(s)", directory, len(result.entries))
    return result
