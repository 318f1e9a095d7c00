from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from ..core.errors import ActivityTrackerError
from ..core.models import SessionState
from ..core.session import SessionController

logger = logging.getLogger(__name__)


class RecorderController(QObject):
    """Non-visual controller that runs activity sessions from the Qt event loop.

    A QTimer polls the :class:`SessionController` while a session is active so
    the countdown text updates and queued samples are collected on the GUI
    thread.
    """

    status_changed = Signal(str)
    state_changed = Signal(object)
    session_started = Signal(str)
    session_saved = Signal(str)
    error_reported = Signal(str)

    def __init__(
        self,
        session: SessionController,
        *,
        poll_interval_ms: int = 200,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._session = session
        self._last_state = session.state
        self._timer = QTimer(self)
        self._timer.setInterval(max(10, int(poll_interval_ms)))
        self._timer.timeout.connect(self._on_tick)

    # --------------------------------------------------------------- accessors
    def session(self) -> SessionController:
        return self._session

    def status(self) -> str:
        return self._session.status

    def is_active(self) -> bool:
        return self._session.is_active

    # --------------------------------------------------------------- start/stop
    @Slot(str)
    def toggle(self, task_name: str) -> None:
        """Create a task when idle, otherwise try to end the running one."""
        if self._session.is_active:
            self.end_task()
        else:
            self.start_task(task_name)

    @Slot(str)
    def start_task(self, task_name: str) -> None:
        try:
            self._session.start(task_name)
        except ActivityTrackerError as exc:
            self._report(exc)
            return
        self._timer.start()
        self.session_started.emit(self._session.task_name)
        self._publish()

    @Slot()
    def end_task(self) -> None:
        try:
            result = self._session.stop()
        except ActivityTrackerError as exc:
            self._report(exc)
            return
        finally:
            if not self._session.is_active:
                self._timer.stop()
        self.session_saved.emit(str(result.path))
        self._publish()

    @Slot()
    def shutdown(self) -> None:
        self._timer.stop()
        self._session.shutdown()
        self._publish()

    # --------------------------------------------------------------- helpers
    @Slot()
    def _on_tick(self) -> None:
        state = self._session.poll()
        if state is SessionState.IDLE:
            self._timer.stop()
        self._publish()

    def _publish(self) -> None:
        status = self._session.status
        if self._session.state is SessionState.RECORDING:
            status = f"{status} ({self._session.sample_count} samples)"
        self.status_changed.emit(status)
        state = self._session.state
        if state is not self._last_state:
            self._last_state = state
            self.state_changed.emit(state)

    def _report(self, exc: ActivityTrackerError) -> None:
        logger.warning("RecorderController: %s", exc)
        self.error_reported.emit(str(exc))
        self._publish()
