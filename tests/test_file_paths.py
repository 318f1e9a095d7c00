from __future__ import annotations

from pathlib import Path

import pytest

from activitytracker.config.app_config import AppConfig, AppPaths
from activitytracker.config.runtime import TrackerConfig
from activitytracker.core.errors import DirectoryUnresolved
from activitytracker.dataio.file_paths import (
    activity_filename,
    resolve_output_dir,
    sanitize_task_name,
)


def test_spaces_become_underscores() -> None:
    assert sanitize_task_name("write the report") == "write_the_report"


def test_path_separators_are_replaced() -> None:
    assert sanitize_task_name("a/b\\c:d") == "a_b_c_d"


def test_activity_filename_pattern() -> None:
    assert activity_filename("code review", 1700000000) == "code_review_1700000000.csv"


def test_activity_filename_defaults_to_now() -> None:
    name = activity_filename("x")
    stem, ts = name[: -len(".csv")].rsplit("_", 1)
    assert stem == "x"
    assert ts.isdigit()


def test_env_override_wins(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("ACTIVITYTRACKER_OUTPUT_DIR", str(tmp_path))
    paths = AppPaths(override=Path("/elsewhere"))
    assert paths.output_dir == tmp_path
    assert resolve_output_dir(paths) == tmp_path


def test_override_used_when_no_env(tmp_path) -> None:
    assert resolve_output_dir(AppPaths(override=tmp_path)) == tmp_path


def test_missing_directory_raises(tmp_path) -> None:
    with pytest.raises(DirectoryUnresolved):
        resolve_output_dir(AppPaths(override=tmp_path / "absent"))


def test_unresolved_download_location(monkeypatch) -> None:
    monkeypatch.setattr(
        "activitytracker.config.app_config.default_download_dir", lambda: None
    )
    with pytest.raises(DirectoryUnresolved):
        resolve_output_dir(AppPaths())


def test_app_config_resolves_notice_once(tmp_path) -> None:
    cfg = AppConfig(tracker=TrackerConfig(output_dir=tmp_path, input_monitoring_notice=True))
    assert cfg.input_monitoring_notice is True
    assert cfg.paths().output_dir == tmp_path
