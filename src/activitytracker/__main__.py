"""``python -m activitytracker`` launches the desktop GUI."""

from .gui.application import main

main()
