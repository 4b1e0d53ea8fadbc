"""Core utilities package.

Small helpers with no dependencies on the rest of LANPlay: subprocess
invocation and JSON file persistence.
"""

from lanplay.core.file_utils import read_json, write_json_atomic
from lanplay.core.subprocess_utils import run_command

__all__ = [
    "read_json",
    "run_command",
    "write_json_atomic",
]
