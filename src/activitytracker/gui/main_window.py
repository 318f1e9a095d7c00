"""Main window for the activity tracker GUI."""

from __future__ import annotations

import logging

from PySide6.QtCore import Slot
from PySide6.QtGui import QCloseEvent, QFont
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..config.app_config import AppConfig
from ..core.models import SessionState
from ..core.sampler import DeviceReader
from ..core.session import SessionController
from .recorder_controller import RecorderController

CREATE_LABEL = "Create Task"
END_LABEL = "End Task"
ERROR_MESSAGE_MS = 5000


class MainWindow(QMainWindow):
    """Single-panel window: task name, Create/End toggle and a status line."""

    def __init__(self, reader: DeviceReader, app_config: AppConfig | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Activity Tracker")
        self.resize(500, 300)

        self._app_config = app_config or AppConfig()
        self._logger = logging.getLogger(__name__)

        session = SessionController(
            reader,
            self._app_config.tracker,
            paths=self._app_config.paths(),
        )
        self.recorder = RecorderController(session, parent=self)

        self._build_ui()

        self.recorder.status_changed.connect(self.status_label.setText)
        self.recorder.state_changed.connect(self._on_state_changed)
        self.recorder.session_started.connect(self._on_session_started)
        self.recorder.session_saved.connect(self._on_session_saved)
        self.recorder.error_reported.connect(self._on_error_reported)
        self.status_label.setText(self.recorder.status())

    def closeEvent(self, event: QCloseEvent) -> None:
        try:
            self.recorder.shutdown()
        except Exception:  # pragma: no cover - best-effort shutdown
            self._logger.exception("Failed to stop sampler on close")
        super().closeEvent(event)

    def _build_ui(self) -> None:
        container = QWidget(self)
        layout = QVBoxLayout(container)

        heading = QLabel("Activity Tracker", container)
        font = QFont(heading.font())
        font.setPointSize(font.pointSize() + 6)
        font.setBold(True)
        heading.setFont(font)
        layout.addWidget(heading)

        name_row = QHBoxLayout()
        name_row.addWidget(QLabel("Task Name: ", container))
        self.task_name_edit = QLineEdit(container)
        self.task_name_edit.returnPressed.connect(self._on_toggle_clicked)
        name_row.addWidget(self.task_name_edit)
        layout.addLayout(name_row)

        layout.addSpacing(10)

        button_row = QHBoxLayout()
        self.toggle_button = QPushButton(CREATE_LABEL, container)
        self.toggle_button.clicked.connect(self._on_toggle_clicked)
        button_row.addWidget(self.toggle_button)
        button_row.addStretch()
        layout.addLayout(button_row)

        layout.addSpacing(20)

        self.status_label = QLabel("", container)
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

        if self._app_config.input_monitoring_notice:
            layout.addSpacing(10)
            hint = QLabel(
                "⚠️ Note: If inputs aren't recording, check macOS privacy settings.",
                container,
            )
            hint.setWordWrap(True)
            layout.addWidget(hint)

        layout.addStretch()
        self.setCentralWidget(container)

    @Slot()
    def _on_toggle_clicked(self) -> None:
        self.recorder.toggle(self.task_name_edit.text())

    @Slot(object)
    def _on_state_changed(self, state: SessionState) -> None:
        idle = state is SessionState.IDLE
        self.toggle_button.setText(CREATE_LABEL if idle else END_LABEL)
        self.task_name_edit.setEnabled(idle)
        if idle:
            self.setWindowTitle("Activity Tracker")

    @Slot(str)
    def _on_session_started(self, task_name: str) -> None:
        self.statusBar().clearMessage()
        self.setWindowTitle(f"Activity Tracker - {task_name}")

    @Slot(str)
    def _on_error_reported(self, message: str) -> None:
        # The status label is rewritten on every poll; keep the error visible.
        self.statusBar().showMessage(message, ERROR_MESSAGE_MS)

    @Slot(str)
    def _on_session_saved(self, path: str) -> None:
        self._logger.info("Recording saved to %s", path)
