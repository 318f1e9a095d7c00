"""Input-device readers.

:mod:`input_devices` wraps pynput so the sampler can ask for the pointer
position and the keys currently held without knowing about listeners.
"""
