"""Shared dataclasses for activity sessions and samples."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator, List, Optional


@dataclass(frozen=True)
class ActivityRecord:
    timestamp: int
    mouse_x: int
    mouse_y: int
    keys_pressed: tuple[str, ...] = ()


class SessionState(enum.Enum):
    IDLE = "idle"
    COUNTDOWN = "countdown"
    RECORDING = "recording"


@dataclass
class SessionInfo:
    task_name: str
    started_at: datetime
    output_path: Optional[Path] = None
    sample_count: int = 0


@dataclass(frozen=True)
class SaveResult:
    path: Optional[Path]
    record_count: int
    message: str


@dataclass
class ActivityLog:
    """
    Append-only sequence of :class:`ActivityRecord` owned by one session.

    Only the session controller touches a log, so no locking is needed here;
    records arrive from the sampler thread through a queue.
    """

    _records: List[ActivityRecord] = field(default_factory=list)

    def append(self, record: ActivityRecord) -> None:
        self._records.append(record)

    def extend(self, records: Iterable[ActivityRecord]) -> None:
        for record in records:
            self.append(record)

    def drain(self) -> List[ActivityRecord]:
        """Return every record in append order and leave the log empty."""
        records, self._records = self._records, []
        return records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ActivityRecord]:
        return iter(list(self._records))
