from __future__ import annotations

import types

from pynput import keyboard

from activitytracker.sensors.input_devices import HeldKeys, PynputDeviceReader, key_identifier


class IdleListener(keyboard.Listener):
    """Keyboard listener that never starts its platform thread."""

    def start(self) -> None:
        pass


def make_reader() -> PynputDeviceReader:
    reader = PynputDeviceReader(listener_factory=IdleListener)
    reader.start()
    return reader


def test_character_keys_use_the_character() -> None:
    assert key_identifier(types.SimpleNamespace(char="a", name=None)) == "a"


def test_plus_key_is_spelled_out() -> None:
    assert key_identifier(types.SimpleNamespace(char="+")) == "plus"


def test_special_keys_use_their_name() -> None:
    assert key_identifier(types.SimpleNamespace(char=None, name="shift")) == "shift"


def test_unknown_keys_fall_back_to_virtual_key_code() -> None:
    assert key_identifier(types.SimpleNamespace(char=None, name=None, vk=65437)) == "vk65437"


def test_held_keys_keep_press_order() -> None:
    held = HeldKeys()
    held.press("ctrl_l", "ctrl_l")
    held.press("shift", "shift")
    held.press("ctrl_l", "ctrl_l")
    held.press("z", "z")
    held.release("shift")

    assert held.snapshot() == ("ctrl_l", "z")

    held.clear()
    assert held.snapshot() == ()


def test_shifted_letter_is_released_after_shift_goes_up() -> None:
    reader = make_reader()
    shift = keyboard.KeyCode.from_vk(65505)

    reader._on_press(shift)
    reader._on_press(keyboard.KeyCode.from_char("A"))
    assert reader.pressed_keys() == ("vk65505", "a")

    reader._on_release(shift)
    reader._on_release(keyboard.KeyCode.from_char("a"))
    assert reader.pressed_keys() == ()
    reader.stop()


def test_character_case_does_not_create_duplicate_entries() -> None:
    reader = make_reader()

    reader._on_press(keyboard.KeyCode.from_char("q"))
    reader._on_press(keyboard.KeyCode.from_char("Q"))
    assert reader.pressed_keys() == ("q",)

    reader._on_release(keyboard.KeyCode.from_char("Q"))
    assert reader.pressed_keys() == ()
    reader.stop()


def test_plus_key_is_tracked_under_its_spelled_out_name() -> None:
    reader = make_reader()

    reader._on_press(keyboard.KeyCode.from_char("+"))
    assert reader.pressed_keys() == ("plus",)
    reader._on_release(keyboard.KeyCode.from_char("+"))
    assert reader.pressed_keys() == ()
    reader.stop()


def test_stop_clears_held_keys_and_start_is_idempotent() -> None:
    reader = make_reader()
    listener = reader._listener
    reader.start()
    assert reader._listener is listener

    reader._on_press(keyboard.KeyCode.from_char("x"))
    reader.stop()

    assert reader.pressed_keys() == ()
    assert reader._listener is None
