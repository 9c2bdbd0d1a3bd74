"""Synthetic signal source for exercising the scope without hardware."""

from __future__ import annotations

import enum
import math
from typing import Callable, Optional

SampleCallback = Callable[[int, int], None]


class Mode(enum.Enum):
    """What the generator is currently producing."""

    OFF = "off"
    SINE = "sine"
    DC = "dc"


class DataGenerator:
    """Produces sine or DC samples on both channels.

    The generator does not own a timer; whoever drives it calls
    :meth:`generate` every :attr:`interval_ms` milliseconds while
    :attr:`running` is true.
    """

    SINE_INTERVAL_MS = 1
    DC_INTERVAL_MS = 10

    def __init__(self, on_sample: SampleCallback) -> None:
        self._on_sample = on_sample
        self.phase = 0.0
        self.amplitude = 0.0
        self.frequency = 0.0
        self.mode = Mode.OFF
        self.interval_ms = 0

    @property
    def running(self) -> bool:
        return self.mode is not Mode.OFF

    def start_sine(self, amp: float, freq: float) -> None:
        """Start a sine wave of the given amplitude and frequency in Hz."""
        self.amplitude = float(amp)
        self.frequency = float(freq)
        self.mode = Mode.SINE
        self.phase = 0.0
        self.interval_ms = self.SINE_INTERVAL_MS

    def start_dc(self, value: float) -> None:
        """Start a constant level."""
        self.amplitude = float(value)
        self.frequency = 0.0
        self.mode = Mode.DC
        self.interval_ms = self.DC_INTERVAL_MS

    def stop(self) -> None:
        self.mode = Mode.OFF

    def generate(self) -> Optional[int]:
        """Produce one sample, pass it to the callback and return it.

        Returns None, without calling back, while the generator is off.
        """
        if self.mode is Mode.SINE:
            dt = self.interval_ms / 1000.0
            self.phase += 2.0 * math.pi * self.frequency * dt
            sample = int(self.amplitude * math.sin(self.phase))
        elif self.mode is Mode.DC:
            sample = int(self.amplitude)
        else:
            return None
        self._on_sample(sample, sample)
        return sample