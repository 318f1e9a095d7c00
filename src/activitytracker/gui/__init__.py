"""Desktop GUI implementation built with PySide6/Qt.

:mod:`main_window` holds the task-name field, the Create/End toggle and the
status line; :mod:`recorder_controller` adapts the Qt event loop to the
:class:`~activitytracker.core.session.SessionController`.
"""
