"""Utilities for loading recorded activity CSV logs."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import List

import numpy as np

from ..core.models import ActivityRecord
from .csv_writer import HEADERS, KEY_SEPARATOR


def parse_keys(field: str) -> tuple[str, ...]:
    """Split a ``+``-joined keys field; an empty field means no keys held."""
    if not field:
        return ()
    return tuple(field.split(KEY_SEPARATOR))


def load_records(path: Path) -> List[ActivityRecord]:
    """
    Load a CSV file written by :mod:`csv_writer`.

    The header row is required; rows are returned in file order.
    """
    with path.open("r", newline="", encoding="utf-8") as fh:
        reader = csv.reader(fh)
        header = next(reader, None)
        if header is None or tuple(h.strip() for h in header) != HEADERS:
            raise ValueError(f"{path} does not look like an activity log (header={header!r})")

        records: List[ActivityRecord] = []
        for line_no, row in enumerate(reader, start=2):
            if not row:
                continue
            if len(row) != len(HEADERS):
                raise ValueError(f"{path}:{line_no}: expected {len(HEADERS)} fields, got {len(row)}")
            timestamp, mouse_x, mouse_y, keys = row
            records.append(
                ActivityRecord(
                    timestamp=int(timestamp),
                    mouse_x=int(mouse_x),
                    mouse_y=int(mouse_y),
                    keys_pressed=parse_keys(keys),
                )
            )
    return records


def load_positions(path: Path) -> np.ndarray:
    """Return an ``(n, 3)`` integer array of timestamp, mouse_x, mouse_y."""
    records = load_records(path)
    if not records:
        return np.empty((0, 3), dtype=np.int64)
    return np.array(
        [(r.timestamp, r.mouse_x, r.mouse_y) for r in records],
        dtype=np.int64,
    )
