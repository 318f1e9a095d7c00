"""Errors raised by the session controller and the CSV writer.

Every error carries the status text shown to the user as its message, so the
GUI can surface ``str(exc)`` directly.
"""

from __future__ import annotations


class ActivityTrackerError(RuntimeError):
    """Base class for recoverable tracker errors (reported, never fatal)."""

    default_message = "Activity tracker error."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class EmptyTaskName(ActivityTrackerError):
    default_message = "Please enter a task name."


class SessionActive(ActivityTrackerError):
    default_message = "A task is already being recorded."


class NoActiveSession(ActivityTrackerError):
    default_message = "No task is being recorded."


class PrematureStop(ActivityTrackerError):
    default_message = "Please wait for timer to complete."


class EmptyRecording(ActivityTrackerError):
    default_message = "No activity data recorded."


class DirectoryUnresolved(ActivityTrackerError):
    default_message = "Could not find Downloads directory."


class FileCreateFailed(ActivityTrackerError):
    default_message = "Failed to create output file."


__all__ = [
    "ActivityTrackerError",
    "EmptyTaskName",
    "SessionActive",
    "NoActiveSession",
    "PrematureStop",
    "EmptyRecording",
    "DirectoryUnresolved",
    "FileCreateFailed",
]
