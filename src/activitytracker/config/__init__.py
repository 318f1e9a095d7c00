"""Configuration objects and helpers for the activity tracker.

A YAML file (``--config``) may override the sampling interval, countdown,
output folder and the macOS input-monitoring notice. The resulting typed
dataclass (see :mod:`runtime`) is resolved once at startup and injected into
the session controller and GUI.
"""

from .runtime import TrackerConfig, config_from_mapping, load_config

__all__ = ["TrackerConfig", "config_from_mapping", "load_config"]
