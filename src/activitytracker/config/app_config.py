"""Default application paths and configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QStandardPaths

from .runtime import TrackerConfig

OUTPUT_DIR_ENV = "ACTIVITYTRACKER_OUTPUT_DIR"


def default_download_dir() -> Optional[Path]:
    """Return the platform downloads folder, or ``None`` if Qt cannot resolve one."""
    location = QStandardPaths.writableLocation(QStandardPaths.DownloadLocation)
    if not location:
        return None
    return Path(location)


@dataclass
class AppPaths:
    """
    Where finished recordings are written.

    ``ACTIVITYTRACKER_OUTPUT_DIR`` wins over an explicit ``override`` (from the
    config file or command line), which wins over the platform downloads
    folder.
    """

    override: Optional[Path] = None
    output_dir: Optional[Path] = field(init=False)

    def __post_init__(self) -> None:
        env_output_dir = os.environ.get(OUTPUT_DIR_ENV)
        if env_output_dir:
            self.output_dir = Path(env_output_dir).expanduser()
        elif self.override is not None:
            self.output_dir = Path(self.override).expanduser()
        else:
            self.output_dir = default_download_dir()


@dataclass
class AppConfig:
    """In-memory configuration snapshot used by the GUI runtime."""

    tracker: TrackerConfig = field(default_factory=TrackerConfig)

    def __post_init__(self) -> None:
        self.tracker = self.tracker.sanitized().resolved()

    @property
    def input_monitoring_notice(self) -> bool:
        return bool(self.tracker.input_monitoring_notice)

    def paths(self) -> AppPaths:
        return AppPaths(override=self.tracker.output_dir)
