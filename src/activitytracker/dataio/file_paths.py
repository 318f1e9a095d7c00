"""Helpers for constructing output file paths."""

from __future__ import annotations

import re
import time
from pathlib import Path

from ..config.app_config import AppPaths
from ..core.errors import DirectoryUnresolved

# Characters that cannot appear in a file name on at least one desktop OS.
_UNSAFE_FILENAME_RE = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def sanitize_task_name(name: str) -> str:
    """
    Sanitize a task name for use as a file name prefix.

    - Replace spaces with '_'.
    - Replace path separators and other characters illegal in file names with '_'.
    """
    cleaned = name.replace(" ", "_")
    return _UNSAFE_FILENAME_RE.sub("_", cleaned)


def activity_filename(task_name: str, timestamp: int | None = None) -> str:
    """
    Return the CSV file name for a finished session.

    Example: "deep_work_1760781600.csv"
    """
    if timestamp is None:
        timestamp = int(time.time())
    return f"{sanitize_task_name(task_name)}_{int(timestamp)}.csv"


def resolve_output_dir(paths: AppPaths | None = None) -> Path:
    """Return the directory recordings are written to.

    Raises :class:`DirectoryUnresolved` when the location is unknown or does
    not exist.
    """
    paths = paths or AppPaths()
    directory = paths.output_dir
    if directory is None or not directory.is_dir():
        raise DirectoryUnresolved()
    return directory
