"""Core capture logic: records, the sampling loop, and session control.

:mod:`sampler` runs the background device-sampling thread, and
:mod:`session` owns the per-session log and decides when a session may stop
and be written to disk.
"""

from .errors import (
    ActivityTrackerError,
    DirectoryUnresolved,
    EmptyRecording,
    EmptyTaskName,
    FileCreateFailed,
    NoActiveSession,
    PrematureStop,
    SessionActive,
)
from .models import ActivityLog, ActivityRecord, SaveResult, SessionInfo, SessionState

__all__ = [
    "ActivityLog",
    "ActivityRecord",
    "ActivityTrackerError",
    "DirectoryUnresolved",
    "EmptyRecording",
    "EmptyTaskName",
    "FileCreateFailed",
    "NoActiveSession",
    "PrematureStop",
    "SaveResult",
    "SessionActive",
    "SessionInfo",
    "SessionState",
]
