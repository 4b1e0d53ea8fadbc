"""File helpers shared by the library cache."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def write_json_atomic(path: Path, data: Any, *, indent: int = 2) -> None:
    """Write data as pretty-printed UTF-8 JSON, replacing path atomically.

    The content goes to a temp file in the same directory which is then
    renamed over path, so readers see either the old or the new file.
    Parent directories are created if needed.

    Strings holding lone surrogates (paths with bytes that are not valid
    UTF-8) are written as ``\\udcXX`` escapes, which read_json() turns
    back into the same string.

    Raises:
        OSError: If the file cannot be written. The temp file is removed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=indent, ensure_ascii=False)

    fd, temp_path_str = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=path.parent,
        text=True,
    )
    temp_path = Path(temp_path_str)
    try:
        # Surrogates only occur inside JSON strings, where backslashreplace
        # output is a valid \uXXXX escape.
        with os.fdopen(fd, "w", encoding="utf-8", errors="backslashreplace") as f:
            f.write(content)
        temp_path.replace(path)  # Atomic on POSIX
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %s (%d bytes)", path, len(content))


def read_json(path: Path) -> Any | None:
    """Read and parse a JSON file, or return None if it does not exist.

    Raises:
        json.JSONDecodeError: If the file exists but is not valid JSON.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    return json.loads(content)
