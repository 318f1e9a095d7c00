"""Session controller: countdown, recording and saving of one task at a time."""

from __future__ import annotations

import logging
import math
import queue
import time
from datetime import datetime
from typing import Callable, NoReturn, Optional

from ..config.app_config import AppPaths
from ..config.runtime import TrackerConfig
from ..dataio.csv_writer import save_session
from .errors import (
    ActivityTrackerError,
    EmptyTaskName,
    NoActiveSession,
    PrematureStop,
    SessionActive,
)
from .models import ActivityLog, ActivityRecord, SaveResult, SessionInfo, SessionState
from .sampler import DeviceReader, SamplerHandle, drain_channel, start_sampler

logger = logging.getLogger(__name__)

INPUT_MONITORING_NOTICE = (
    "Note: On macOS, you may need to grant permission for input monitoring in "
    "System Preferences → Security & Privacy → Privacy → Input Monitoring"
)
DOWNLOADS_NOTE = "Note: On macOS, you may need to look in ~/Downloads"

SamplerFactory = Callable[["queue.Queue[ActivityRecord]"], SamplerHandle]


class SessionController:
    """
    Drive one recording session at a time: Idle → Countdown → Recording → Idle.

    The controller is the only owner of the session's :class:`ActivityLog`.
    The sampler thread sends records over a per-session queue and is
    cancelled through its stop event when the session ends. Call
    :meth:`poll` periodically (the GUI does so from a timer) to advance the
    countdown and collect queued records.

    Every rejected request raises a subclass of
    :class:`~activitytracker.core.errors.ActivityTrackerError` whose message
    is also stored in :attr:`status`.
    """

    def __init__(
        self,
        reader: DeviceReader,
        config: TrackerConfig | None = None,
        *,
        paths: AppPaths | None = None,
        clock: Callable[[], float] = time.monotonic,
        sampler_factory: SamplerFactory | None = None,
    ) -> None:
        self._reader = reader
        self._config = (config or TrackerConfig()).sanitized().resolved()
        self._paths = paths
        self._clock = clock
        self._sampler_factory = sampler_factory or self._default_sampler

        self._state = SessionState.IDLE
        self._task_name = ""
        self._started_at: Optional[float] = None
        self._sampler: Optional[SamplerHandle] = None
        self._channel: Optional["queue.Queue[ActivityRecord]"] = None
        self._log = ActivityLog()
        self._info: Optional[SessionInfo] = None
        self._status = ""

        if self.input_monitoring_notice:
            prime = getattr(reader, "prime", None)
            if callable(prime):
                prime()
            self._status = INPUT_MONITORING_NOTICE

    # --------------------------------------------------------------- properties
    @property
    def config(self) -> TrackerConfig:
        return self._config

    @property
    def input_monitoring_notice(self) -> bool:
        return bool(self._config.input_monitoring_notice)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def status(self) -> str:
        return self._status

    @property
    def task_name(self) -> str:
        return self._task_name

    @property
    def session_info(self) -> Optional[SessionInfo]:
        return self._info

    @property
    def is_active(self) -> bool:
        return self._state is not SessionState.IDLE

    @property
    def sample_count(self) -> int:
        return len(self._log)

    def elapsed_s(self) -> float:
        if self._started_at is None:
            return 0.0
        return max(0.0, self._clock() - self._started_at)

    def remaining_seconds(self) -> int:
        """Whole seconds left in the countdown (0 once recording)."""
        if self._state is SessionState.IDLE:
            return 0
        return max(0, math.ceil(self._config.start_delay_s - self.elapsed_s()))

    def ready_to_stop(self) -> bool:
        return self.is_active and self.elapsed_s() >= self._config.start_delay_s

    def effective_rate_hz(self) -> float:
        """Samples collected per second of recording so far."""
        recording_s = self.elapsed_s() - self._config.start_delay_s
        if recording_s <= 0:
            return 0.0
        return len(self._log) / recording_s

    # --------------------------------------------------------------- start/stop
    def start(self, task_name: str) -> SessionInfo:
        if self.is_active:
            self._reject(SessionActive())
        name = (task_name or "").strip()
        if not name:
            self._reject(EmptyTaskName())

        self._task_name = name
        self._log = ActivityLog()
        self._channel = queue.Queue()
        start_reader = getattr(self._reader, "start", None)
        if callable(start_reader):
            start_reader()
        self._sampler = self._sampler_factory(self._channel)
        self._started_at = self._clock()
        self._state = SessionState.COUNTDOWN
        self._info = SessionInfo(task_name=name, started_at=datetime.now())
        self._status = f"Preparing to record ({self._config.start_delay_s:g} second countdown)..."
        logger.info("Session %r started, recording begins in %.1fs", name, self._config.start_delay_s)
        return self._info

    def poll(self) -> SessionState:
        """Advance countdown state and collect records queued by the sampler."""
        if not self.is_active:
            return self._state
        self._collect()
        if self._state is SessionState.COUNTDOWN:
            if self.elapsed_s() >= self._config.start_delay_s:
                self._state = SessionState.RECORDING
                self._status = "Recording in progress..."
                logger.info("Session %r recording", self._task_name)
            else:
                self._status = f"Recording will start in {self.remaining_seconds()} seconds..."
        if self._info is not None:
            self._info.sample_count = len(self._log)
        return self._state

    def stop(self) -> SaveResult:
        """
        End the session and save its records.

        Raises :class:`PrematureStop` (session keeps running) before the
        countdown has elapsed. Writer failures are raised after the session
        has returned to Idle.
        """
        if not self.is_active:
            self._reject(NoActiveSession())
        if not self.ready_to_stop():
            logger.info("Stop requested for %r before countdown finished", self._task_name)
            self._reject(PrematureStop())

        self._halt_sampler()
        self._collect()
        records = self._log.drain()
        self._state = SessionState.IDLE
        self._started_at = None
        logger.info("Session %r stopped with %d records", self._task_name, len(records))

        try:
            result = save_session(self._task_name, records, paths=self._resolve_paths())
        except ActivityTrackerError as exc:
            self._status = str(exc)
            logger.warning("Session %r not saved: %s", self._task_name, exc)
            raise

        if self._info is not None:
            self._info.output_path = result.path
            self._info.sample_count = result.record_count
        message = result.message
        if self.input_monitoring_notice:
            message = f"{message}\n{DOWNLOADS_NOTE}"
        self._status = message
        return result

    def shutdown(self) -> None:
        """Cancel any running session without writing a file."""
        if not self.is_active:
            return
        logger.info("Discarding active session %r", self._task_name)
        self._halt_sampler()
        if self._channel is not None:
            drain_channel(self._channel)
        self._log = ActivityLog()
        self._state = SessionState.IDLE
        self._started_at = None

    # --------------------------------------------------------------- helpers
    def _default_sampler(self, channel: "queue.Queue[ActivityRecord]") -> SamplerHandle:
        return start_sampler(
            self._reader,
            channel=channel,
            interval_s=self._config.sample_interval_s,
            start_delay_s=self._config.start_delay_s,
        )

    def _resolve_paths(self) -> AppPaths:
        if self._paths is not None:
            return self._paths
        return AppPaths(override=self._config.output_dir)

    def _collect(self) -> None:
        if self._channel is not None:
            self._log.extend(drain_channel(self._channel))

    def _halt_sampler(self) -> None:
        sampler = self._sampler
        self._sampler = None
        if sampler is not None:
            sampler.stop(join=True, timeout=self._config.join_timeout_s)
        stop_reader = getattr(self._reader, "stop", None)
        if callable(stop_reader):
            stop_reader()

    def _reject(self, exc: ActivityTrackerError) -> NoReturn:
        self._status = str(exc)
        raise exc


__all__ = [
    "DOWNLOADS_NOTE",
    "INPUT_MONITORING_NOTICE",
    "SessionController",
]
