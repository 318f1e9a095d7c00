"""CSV writing helpers for recorded activity data."""

from __future__ import annotations

import csv
import logging
import time
from pathlib import Path
from typing import IO, Iterable, Sequence

from ..config.app_config import AppPaths
from ..core.errors import EmptyRecording, FileCreateFailed
from ..core.models import ActivityRecord, SaveResult
from .file_paths import activity_filename, resolve_output_dir

logger = logging.getLogger(__name__)

HEADERS: tuple[str, ...] = ("timestamp", "mouse_x", "mouse_y", "keys_pressed")
KEY_SEPARATOR = "+"


def format_keys(keys: Sequence[str]) -> str:
    """Join key identifiers with ``+`` in the order they were pressed."""
    return KEY_SEPARATOR.join(keys)


def write_records(fh: IO[str], records: Iterable[ActivityRecord]) -> int:
    """
    Write the header row and one row per record to an open text stream.

    The keys column is always double-quoted; numeric columns never are.
    Returns the number of data rows written.
    """
    header_writer = csv.writer(fh, lineterminator="\n")
    row_writer = csv.writer(fh, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    header_writer.writerow(HEADERS)
    count = 0
    for record in records:
        row_writer.writerow(
            (
                int(record.timestamp),
                int(record.mouse_x),
                int(record.mouse_y),
                format_keys(record.keys_pressed),
            )
        )
        count += 1
    return count


def write_activity_csv(path: Path, records: Sequence[ActivityRecord]) -> int:
    """Write ``records`` to ``path``; wraps OS failures in :class:`FileCreateFailed`."""
    try:
        with path.open("w", newline="", encoding="utf-8") as csvfile:
            return write_records(csvfile, records)
    except OSError as exc:
        logger.error("Could not write %s: %s", path, exc)
        raise FileCreateFailed() from exc


def save_session(
    task_name: str,
    records: Sequence[ActivityRecord],
    *,
    output_dir: Path | None = None,
    paths: AppPaths | None = None,
    timestamp: int | None = None,
) -> SaveResult:
    """
    Save a finished session to ``<task>_<timestamp>.csv``.

    ``output_dir`` is used as-is when given; otherwise the directory comes
    from ``paths`` (default :class:`AppPaths`) and must already exist.

    Raises :class:`EmptyRecording`, :class:`DirectoryUnresolved` or
    :class:`FileCreateFailed`.
    """
    if not records:
        raise EmptyRecording()

    directory = output_dir if output_dir is not None else resolve_output_dir(paths)
    path = directory / activity_filename(task_name, timestamp)
    started = time.perf_counter()
    count = write_activity_csv(path, records)
    logger.info(
        "Saved %d records (%d bytes) to %s in %.1f ms",
        count,
        path.stat().st_size,
        path,
        (time.perf_counter() - started) * 1000.0,
    )
    return SaveResult(path=path, record_count=count, message=f"Activity data saved to {path}")
