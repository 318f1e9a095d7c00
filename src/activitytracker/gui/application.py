"""Qt application entry point for the activity tracker GUI.

This module wires up argument parsing and logging, resolves the runtime
configuration once, builds the :class:`~activitytracker.gui.main_window.MainWindow`,
and starts the Qt event loop. Both launchers (the ``activity-tracker``
script and ``python -m activitytracker``) flow through ``main()`` here.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Tuple

from PySide6.QtCore import QLoggingCategory
from PySide6.QtWidgets import QApplication, QMainWindow

from ..config.app_config import AppConfig
from ..config.runtime import TrackerConfig, load_config
from ..sensors.input_devices import PynputDeviceReader
from .main_window import MainWindow

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Record mouse and keyboard activity to CSV")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML file with tracker settings (sample_interval_s, start_delay_s, output_dir, ...)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Folder for saved CSV files (default: the Downloads folder)",
    )
    parser.add_argument(
        "--countdown",
        type=float,
        default=None,
        help="Seconds to wait before recording starts (default: 5)",
    )
    notice = parser.add_mutually_exclusive_group()
    notice.add_argument(
        "--input-monitoring-notice",
        dest="input_monitoring_notice",
        action="store_true",
        default=None,
        help="Show the macOS input-monitoring permission notes",
    )
    notice.add_argument(
        "--no-input-monitoring-notice",
        dest="input_monitoring_notice",
        action="store_false",
        help="Hide the macOS input-monitoring permission notes",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def _parse_cli_args(
    argv: list[str],
) -> tuple[argparse.Namespace, list[str]]:
    parser = _build_arg_parser()
    args, qt_args = parser.parse_known_args(argv[1:])
    qt_argv = [argv[0], *qt_args]
    return args, qt_argv


def build_tracker_config(args: argparse.Namespace) -> TrackerConfig:
    """Merge the optional YAML file with command-line overrides."""
    tracker = load_config(args.config)
    if args.output_dir is not None:
        tracker.output_dir = Path(args.output_dir).expanduser()
    if args.countdown is not None:
        tracker.start_delay_s = float(args.countdown)
    if args.input_monitoring_notice is not None:
        tracker.input_monitoring_notice = bool(args.input_monitoring_notice)
    return tracker.sanitized()


def create_app(
    argv: list[str] | None = None,
    *,
    app_config: AppConfig | None = None,
) -> Tuple[QApplication, QMainWindow]:
    """
    Create the QApplication and the main activity tracker window.

    Returns
    -------
    app:
        The QApplication instance (owned by caller).
    window:
        The main window, wired to a pynput device reader.
    """
    qt_args = argv if argv is not None else sys.argv
    app = QApplication.instance() or QApplication(qt_args)

    # Suppress noisy QObject::connect warnings from QStyleHints and similar internals
    QLoggingCategory.setFilterRules("qt.core.qobject.connect=false")

    window = MainWindow(PynputDeviceReader(), app_config=app_config)
    return app, window


def main(argv: list[str] | None = None) -> None:
    raw_argv = argv if argv is not None else sys.argv
    args, qt_argv = _parse_cli_args(raw_argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app_config = AppConfig(tracker=build_tracker_config(args))
    logger.info("Starting activity tracker with %s", app_config.tracker)
    app, win = create_app(qt_argv, app_config=app_config)
    win.show()
    raise SystemExit(app.exec())


if __name__ == "__main__":
    main()
