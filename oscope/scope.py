"""Sample buffer, trigger, zoom/pan state and display geometry of the scope."""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable, List, Optional, TextIO, Tuple

Point = Tuple[float, float]
Segment = Tuple[Point, Point]
Line = Tuple[int, int, int, int]
Label = Tuple[int, int, str]
Sample = Tuple[int, int, int]


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class Scope:
    """Two-channel capture with edge trigger and view geometry.

    ``clock`` returns milliseconds; timestamps are relative to the moment
    the scope was created or the trigger was last switched.
    """

    BUFFER_SIZE = 5000
    TIME_PER_DIV = 10.0  # ms per division
    VERTICAL_DIVS = 8
    HORIZONTAL_DIVS = 10
    MIN_TIME_ZOOM = 0.1
    MAX_TIME_ZOOM = 10.0
    WHEEL_STEP = 1.1

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        self._clock = clock or _monotonic_ms
        self._start = self._clock()
        self._data: deque[Sample] = deque(maxlen=self.BUFFER_SIZE)
        self._lock = threading.Lock()
        self.trigger_level = 128
        self.trigger_enabled = False
        self.triggered = False
        self.prev_ch1 = 0
        self.time_zoom = 1.0
        self.volt_zoom = 1.0
        self.adc_to_volt_factor = 1.0
        self.volts_per_division = 1000.0
        self.time_offset = 0.0
        self.panning = False
        self.last_pan_x = 0

    def _elapsed(self) -> int:
        return self._clock() - self._start

    def add_sample(self, ch1: int, ch2: int) -> None:
        """Record a sample, waiting for a rising edge while the trigger is armed."""
        with self._lock:
            if self.trigger_enabled and not self.triggered:
                if self.prev_ch1 < self.trigger_level <= ch1:
                    self.triggered = True
                    self._data.clear()
                else:
                    self.prev_ch1 = ch1
                    return
            self._data.append((self._elapsed(), ch1, ch2))
            self.prev_ch1 = ch1

    def enable_trigger(self, enabled: bool) -> None:
        """Switch the trigger, discarding captured data and restarting the clock."""
        with self._lock:
            self.trigger_enabled = enabled
            self.triggered = False
            self.prev_ch1 = 0
            self._data.clear()
            self._start = self._clock()

    def samples(self) -> List[Sample]:
        """Snapshot of the buffer as ``(timestamp_ms, ch1, ch2)`` tuples."""
        with self._lock:
            return list(self._data)

    def waveform(self, width: int, height: int) -> Tuple[List[Segment], List[Segment]]:
        """Visible line segments of channel 1 and channel 2."""
        data = self.samples()
        if len(data) < 2:
            return [], []
        mid_y = height // 2
        x_scale = width / self.BUFFER_SIZE * self.time_zoom
        pixels_per_div = height / self.VERTICAL_DIVS
        y_scale = pixels_per_div * self.volt_zoom / self.volts_per_division
        offset_px = self.time_offset * x_scale
        factor = self.adc_to_volt_factor

        channels: Tuple[List[Segment], List[Segment]] = ([], [])
        for i, (prev, curr) in enumerate(zip(data, data[1:]), start=1):
            x1 = (i - 1) * x_scale - offset_px
            x2 = i * x_scale - offset_px
            if x2 < 0 or x1 > width:
                continue
            for segments, column in zip(channels, (1, 2)):
                y1 = mid_y - prev[column] * factor * y_scale
                y2 = mid_y - curr[column] * factor * y_scale
                segments.append(((x1, y1), (x2, y2)))
        return channels

    def grid_lines(self, width: int, height: int) -> Tuple[List[Line], Line]:
        """Dotted division lines and the solid centre line."""
        vertical = [
            (x, 0, x, height)
            for x in (i * width // self.HORIZONTAL_DIVS for i in range(1, self.HORIZONTAL_DIVS))
        ]
        horizontal = [
            (0, y, width, y)
            for y in (i * height // self.VERTICAL_DIVS for i in range(1, self.VERTICAL_DIVS))
        ]
        return vertical + horizontal, (0, height // 2, width, height // 2)

    def axis_labels(self, width: int, height: int) -> List[Label]:
        """Time labels along the bottom, then voltage labels along the left."""
        labels: List[Label] = []
        total_ms = self.TIME_PER_DIV * self.HORIZONTAL_DIVS * self.time_zoom
        for i in range(self.HORIZONTAL_DIVS + 1):
            t = total_ms * i / self.HORIZONTAL_DIVS
            x = i * width // self.HORIZONTAL_DIVS
            labels.append((x + 2, height - 5, f"{t:.0f} ms"))
        for i in range(self.VERTICAL_DIVS + 1):
            y = i * height // self.VERTICAL_DIVS
            divs = self.VERTICAL_DIVS / 2.0 - i
            value = divs * self.volts_per_division / self.volt_zoom
            labels.append((4, y - 2, f"{value:.1f}"))
        return labels

    def press(self, x: int) -> None:
        """Begin panning at horizontal position ``x``."""
        self.panning = True
        self.last_pan_x = x

    def drag(self, x: int, width: int) -> None:
        """Pan the time axis by the pointer movement, within the buffer."""
        if not self.panning:
            return
        dx = x - self.last_pan_x
        self.last_pan_x = x
        x_scale = width / self.BUFFER_SIZE * self.time_zoom
        offset = self.time_offset - dx / x_scale
        self.time_offset = min(max(offset, 0.0), float(self.BUFFER_SIZE))

    def release(self) -> None:
        self.panning = False

    def wheel(self, delta_y: int) -> float:
        """Zoom the time axis in or out by one step; returns the new zoom."""
        if delta_y > 0:
            zoom = self.time_zoom * self.WHEEL_STEP
        else:
            zoom = self.time_zoom / self.WHEEL_STEP
        self.time_zoom = min(max(zoom, self.MIN_TIME_ZOOM), self.MAX_TIME_ZOOM)
        return self.time_zoom

    def write_csv(self, stream: TextIO, max_samples: int = BUFFER_SIZE) -> int:
        """Write the newest ``max_samples`` rows; returns the number written."""
        data = self.samples()
        rows = data[max(0, len(data) - max_samples):]
        for timestamp, ch1, ch2 in rows:
            stream.write(f"{timestamp},{ch1},{ch2}\n")
        return len(rows)

    def save_csv(self, path, max_samples: int = BUFFER_SIZE) -> int:
        """Write the newest samples to the file at ``path``."""
        with open(path, "w", encoding="utf-8", newline="") as stream:
            return self.write_csv(stream, max_samples)