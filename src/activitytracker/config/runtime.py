"""Runtime configuration for sampling, countdown and output location."""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

import yaml


@dataclass(slots=True)
class TrackerConfig:
    """
    Tuning knobs for how activity is sampled and where it is saved.

    The defaults sample at 10 Hz after a 5 second countdown and save into the
    platform downloads folder.
    """

    sample_interval_s: float = 0.1
    start_delay_s: float = 5.0
    join_timeout_s: float = 1.0
    output_dir: Optional[Path] = None

    # None means "decide from the running platform" (see resolved()).
    input_monitoring_notice: Optional[bool] = None

    def sanitized(self) -> TrackerConfig:
        """Return a copy with limits applied and types normalized."""
        output_dir = self.output_dir
        if output_dir is not None and not isinstance(output_dir, Path):
            output_dir = Path(str(output_dir)).expanduser()
        notice = self.input_monitoring_notice
        return TrackerConfig(
            sample_interval_s=max(0.001, float(self.sample_interval_s)),
            start_delay_s=max(0.0, float(self.start_delay_s)),
            join_timeout_s=max(0.0, float(self.join_timeout_s)),
            output_dir=output_dir,
            input_monitoring_notice=None if notice is None else bool(notice),
        )

    def resolved(self, platform: str | None = None) -> TrackerConfig:
        """Return a copy with ``input_monitoring_notice`` decided for ``platform``."""
        if self.input_monitoring_notice is not None:
            return self
        platform = platform if platform is not None else sys.platform
        return replace(self, input_monitoring_notice=platform == "darwin")

    @property
    def sample_rate_hz(self) -> float:
        return 1.0 / self.sample_interval_s


def _recognized_fields() -> set[str]:
    """Return the dataclass field names accepted by :class:`TrackerConfig`."""
    return {f.name for f in fields(TrackerConfig)}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten known nesting patterns (e.g. top-level ``tracker`` key)."""
    if "tracker" in data and isinstance(data["tracker"], Mapping):
        merged: MutableMapping[str, Any] = {}
        for key, value in data.items():
            if key == "tracker":
                merged.update(value)
            else:
                merged[key] = value
        return merged
    return dict(data)


def config_from_mapping(data: Mapping[str, Any] | None) -> TrackerConfig:
    """Build :class:`TrackerConfig` from ``data`` (ignoring unknown keys)."""
    if not data:
        return TrackerConfig()
    normalized = _normalize_mapping(data)
    known = _recognized_fields()
    payload = {key: normalized[key] for key in normalized.keys() & known}
    return TrackerConfig(**payload).sanitized()


def load_config(path: str | Path | None) -> TrackerConfig:
    """
    Load configuration from ``path``.

    Missing files fall back to default :class:`TrackerConfig`.
    """
    if path is None:
        return TrackerConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return TrackerConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


__all__ = ["TrackerConfig", "config_from_mapping", "load_config"]
