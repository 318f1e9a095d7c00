"""pynput-backed reader for pointer position and held keys.

pynput only reports key *events*, so :class:`PynputDeviceReader` keeps a
press-ordered set of held keys updated from a background keyboard listener.
Press and release are matched on the listener's canonical key, because the
character reported for a key depends on the modifiers held at that moment
(Shift+A pressed reports "A", released after Shift reports "a").
Pointer coordinates come straight from :class:`pynput.mouse.Controller`.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

from pynput import keyboard, mouse

logger = logging.getLogger(__name__)


def key_identifier(key: Any) -> str:
    """Return a stable name for a pynput key.

    Character keys use the character itself (``+`` becomes ``plus`` so it
    cannot be confused with the CSV key separator); special keys use their
    pynput name (``shift``, ``ctrl_l``, ``space``...).
    """
    char = getattr(key, "char", None)
    if char:
        return "plus" if char == "+" else char
    name = getattr(key, "name", None)
    if name:
        return str(name)
    vk = getattr(key, "vk", None)
    if vk is not None:
        return f"vk{vk}"
    return str(key)


class HeldKeys:
    """Thread-safe, press-ordered mapping of held key -> reported name.

    ``key`` is whatever identifies the physical key across press and release;
    ``name`` is what ends up in the CSV.
    """

    def __init__(self) -> None:
        self._keys: Dict[Hashable, str] = {}
        self._lock = threading.Lock()

    def press(self, key: Hashable, name: str) -> None:
        with self._lock:
            self._keys.setdefault(key, name)

    def release(self, key: Hashable) -> None:
        with self._lock:
            self._keys.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._keys.clear()

    def snapshot(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._keys.values())


class PynputDeviceReader:
    """Device reader used by the sampler in the desktop application."""

    def __init__(
        self,
        listener_factory: Callable[..., keyboard.Listener] = keyboard.Listener,
    ) -> None:
        self._listener_factory = listener_factory
        self._mouse = mouse.Controller()
        self._held = HeldKeys()
        self._listener: Optional[keyboard.Listener] = None

    def start(self) -> None:
        """Start the keyboard listener (idempotent)."""
        if self._listener is not None:
            return
        self._held.clear()
        self._listener = self._listener_factory(
            on_press=self._on_press,
            on_release=self._on_release,
        )
        self._listener.daemon = True
        self._listener.start()
        logger.debug("Keyboard listener started")

    def stop(self) -> None:
        listener = self._listener
        self._listener = None
        if listener is not None:
            listener.stop()
            logger.debug("Keyboard listener stopped")
        self._held.clear()

    def prime(self) -> None:
        """Read the pointer once so the OS shows its input-monitoring prompt."""
        try:
            self.position()
        except Exception as exc:
            logger.info("Initial pointer read failed (permission pending?): %s", exc)

    def position(self) -> Tuple[int, int]:
        x, y = self._mouse.position
        return int(x), int(y)

    def pressed_keys(self) -> Tuple[str, ...]:
        return self._held.snapshot()

    def _identify(self, key: Any) -> Tuple[Hashable, str]:
        listener = self._listener
        canonical = listener.canonical(key) if listener is not None else key
        # canonical() maps special keys to bare virtual-key codes, so only
        # character keys take their name from it.
        name = key_identifier(canonical if getattr(canonical, "char", None) else key)
        return canonical, name

    def _on_press(self, key: Any) -> None:
        if key is not None:
            self._held.press(*self._identify(key))

    def _on_release(self, key: Any) -> None:
        if key is not None:
            canonical, _ = self._identify(key)
            self._held.release(canonical)
