"""Persisted library artifacts.

Two JSON files are written after every scan pass:
- the cache artifact (cache view), served to API clients
- the data artifact (data view), with absolute paths for local use

Both are replaced atomically and never patched in place.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from lanplay.core.file_utils import read_json, write_json_atomic
from lanplay.library.models import Library

logger = logging.getLogger(__name__)


class LibraryCache:
    """Reads and writes the cache and data artifacts."""

    def __init__(self, cache_file: Path, data_file: Path) -> None:
        self.cache_file = cache_file
        self.data_file = data_file

    def exists(self) -> bool:
        """Return True if a cache artifact has been written."""
        return self.cache_file.exists()

    def read_cache(self) -> dict[str, Any] | None:
        """Return the parsed cache artifact as-is, or None if absent.

        Raises:
            json.JSONDecodeError: If the artifact is corrupt.
        """
        return read_json(self.cache_file)

    def read_data(self) -> dict[str, Any] | None:
        """Return the parsed data artifact, or None if absent.

        Raises:
            json.JSONDecodeError: If the artifact is corrupt.
        """
        return read_json(self.data_file)

    def write(self, library: Library) -> None:
        """Persist both views of a library, replacing previous artifacts."""
        write_json_atomic(self.cache_file, library.to_cache_dict())
        write_json_atomic(self.data_file, library.to_data_dict())
        logger.debug("Persisted library to %s and %s", self.cache_file, self.data_file)
