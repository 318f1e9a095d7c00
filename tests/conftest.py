from __future__ import annotations

import os
import sys
import threading
from pathlib import Path
from typing import Sequence, Tuple

import pytest

# Ensure src/ is on path for direct test execution
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Headless runs: no input backend for pynput, no display for Qt.
os.environ.setdefault("PYNPUT_BACKEND", "dummy")
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from activitytracker.core.sampler import SamplerHandle  # noqa: E402


class FakeReader:
    """Scripted device reader: returns positions in order and can fail on demand."""

    def __init__(self, positions=None, keys: Sequence[str] = (), fail_every: int = 0) -> None:
        self._positions = list(positions or [(10, 20)])
        self._keys = tuple(keys)
        self._fail_every = fail_every
        self._lock = threading.Lock()
        self.reads = 0
        self.primed = 0
        self.started = 0
        self.stopped = 0

    def position(self) -> Tuple[int, int]:
        with self._lock:
            self.reads += 1
            if self._fail_every and self.reads % self._fail_every == 0:
                raise OSError("device unavailable")
            return self._positions[(self.reads - 1) % len(self._positions)]

    def pressed_keys(self) -> Sequence[str]:
        return self._keys

    def prime(self) -> None:
        self.primed += 1

    def start(self) -> None:
        self.started += 1

    def stop(self) -> None:
        self.stopped += 1


class ScriptedSamplers:
    """Sampler factory that pre-loads each session's channel with records."""

    def __init__(self, records=()) -> None:
        self.records = list(records)
        self.handles: list[SamplerHandle] = []

    def __call__(self, channel) -> SamplerHandle:
        for record in self.records:
            channel.put(record)
        stop_event = threading.Event()
        thread = threading.Thread(target=stop_event.wait, daemon=True)
        thread.start()
        handle = SamplerHandle(thread=thread, stop_event=stop_event, channel=channel)
        self.handles.append(handle)
        return handle


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_reader() -> FakeReader:
    return FakeReader(positions=[(1, 2), (3, 4), (5, 6)], keys=("shift", "a"))


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def qapp():
    from PySide6.QtWidgets import QApplication

    return QApplication.instance() or QApplication([])


@pytest.fixture(autouse=True)
def _no_output_dir_env(monkeypatch):
    monkeypatch.delenv("ACTIVITYTRACKER_OUTPUT_DIR", raising=False)
