from __future__ import annotations

"""
Background sampling loop that reads pointer/keyboard state on a fixed
interval and hands :class:`ActivityRecord` objects to the session controller
through a queue.
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence, Tuple

from .models import ActivityRecord

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_INTERVAL_S = 0.1
DEFAULT_START_DELAY_S = 5.0


class DeviceReader(Protocol):
    """Anything that can report the current pointer position and held keys."""

    def position(self) -> Tuple[int, int]: ...

    def pressed_keys(self) -> Sequence[str]: ...


def read_sample(reader: DeviceReader, timestamp: int) -> ActivityRecord:
    x, y = reader.position()
    keys = tuple(str(k) for k in reader.pressed_keys())
    return ActivityRecord(
        timestamp=int(timestamp),
        mouse_x=int(x),
        mouse_y=int(y),
        keys_pressed=keys,
    )


def sampler_loop(
    reader: DeviceReader,
    channel: "queue.Queue[ActivityRecord]",
    stop_event: threading.Event,
    *,
    interval_s: float = DEFAULT_SAMPLE_INTERVAL_S,
    start_delay_s: float = DEFAULT_START_DELAY_S,
    wall_clock: Callable[[], float] = time.time,
) -> int:
    """Sample ``reader`` into ``channel`` until ``stop_event`` is set.

    The loop first waits ``start_delay_s``; a cancel during that wait ends the
    loop without producing any record. Returns the number of records sent.
    """
    if stop_event.wait(max(0.0, start_delay_s)):
        return 0

    interval_s = max(0.001, float(interval_s))
    sent = 0
    next_due = time.monotonic()
    while not stop_event.is_set():
        try:
            record = read_sample(reader, int(wall_clock()))
        except Exception as exc:
            logger.debug("Skipping sample, device read failed: %s", exc)
        else:
            channel.put(record)
            sent += 1

        next_due += interval_s
        now = time.monotonic()
        if next_due < now:
            # Fell behind (slow read or suspended process); resume from now.
            next_due = now
        if stop_event.wait(next_due - now):
            break
    return sent


@dataclass
class SamplerHandle:
    thread: threading.Thread
    stop_event: threading.Event
    channel: "queue.Queue[ActivityRecord]"

    def stop(self, *, join: bool = False, timeout: Optional[float] = None) -> None:
        self.stop_event.set()
        if join:
            self.thread.join(timeout)
            if self.thread.is_alive():
                logger.warning("Sampler thread %s did not exit within %.1fs", self.thread.name, timeout or 0.0)

    def is_alive(self) -> bool:
        return self.thread.is_alive()


def start_sampler(
    reader: DeviceReader,
    *,
    channel: "Optional[queue.Queue[ActivityRecord]]" = None,
    interval_s: float = DEFAULT_SAMPLE_INTERVAL_S,
    start_delay_s: float = DEFAULT_START_DELAY_S,
    thread_name: Optional[str] = None,
) -> SamplerHandle:
    """
    Start a background thread that samples ``reader`` into a queue.
    """

    out: "queue.Queue[ActivityRecord]" = channel if channel is not None else queue.Queue()
    stop_event = threading.Event()

    def _target() -> None:
        logger.debug("Sampler started (delay=%.2fs, interval=%.3fs)", start_delay_s, interval_s)
        sent = sampler_loop(
            reader,
            out,
            stop_event,
            interval_s=interval_s,
            start_delay_s=start_delay_s,
        )
        logger.debug("Sampler stopped after %d samples", sent)

    thread = threading.Thread(
        target=_target,
        name=thread_name or "ActivitySampler",
        daemon=True,
    )
    thread.start()
    return SamplerHandle(thread=thread, stop_event=stop_event, channel=out)


def drain_channel(channel: "queue.Queue[ActivityRecord]") -> list[ActivityRecord]:
    """Return everything currently queued without blocking."""
    records: list[ActivityRecord] = []
    try:
        while True:
            records.append(channel.get_nowait())
    except queue.Empty:
        pass
    return records


__all__ = [
    "DEFAULT_SAMPLE_INTERVAL_S",
    "DEFAULT_START_DELAY_S",
    "DeviceReader",
    "SamplerHandle",
    "drain_channel",
    "read_sample",
    "sampler_loop",
    "start_sampler",
]
