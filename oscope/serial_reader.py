"""Line-oriented reader of two-channel samples from a serial port."""

from __future__ import annotations

import re
import threading
from typing import Callable, List, Optional, Tuple

import serial
from serial.tools import list_ports

SampleCallback = Callable[[int, int], None]

BAUD_RATE = 115200

_INT_RE = re.compile(rb"\s*([+-]?[0-9]+)\s*")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def _to_int(field: bytes) -> Optional[int]:
    match = _INT_RE.fullmatch(field)
    if match is None:
        return None
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        return None
    return value


def parse_line(line: bytes) -> Optional[Tuple[int, int]]:
    """Parse ``b"ch1,ch2"`` into a pair of ints, or None if malformed."""
    parts = line.strip().split(b",")
    if len(parts) != 2:
        return None
    ch1 = _to_int(parts[0])
    ch2 = _to_int(parts[1])
    if ch1 is None or ch2 is None:
        return None
    return ch1, ch2


def available_ports() -> List[str]:
    """Device names of the serial ports present on this machine."""
    return [info.device for info in list_ports.comports()]


class SerialReader:
    """Reads ``ch1,ch2`` lines from a serial port and reports each sample."""

    def __init__(self, on_sample: SampleCallback) -> None:
        self._on_sample = on_sample
        self._port: Optional[serial.SerialBase] = None
        self._buffer = bytearray()
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._port is not None and self._port.is_open

    def start(self, port_name: str) -> None:
        """Open ``port_name`` at 115200 baud, closing any port already open.

        Raises serial.SerialException if the port cannot be opened.
        """
        self.stop()
        self._port = serial.serial_for_url(port_name, baudrate=BAUD_RATE, timeout=0)

    def stop(self) -> None:
        if self._port is not None:
            if self._port.is_open:
                self._port.close()
            self._port = None

    def feed(self, data: bytes) -> List[Tuple[int, int]]:
        """Add raw bytes and report every complete, well-formed line."""
        with self._lock:
            self._buffer += data
            samples = []
            while True:
                newline = self._buffer.find(b"\n")
                if newline < 0:
                    break
                line = bytes(self._buffer[:newline])
                del self._buffer[: newline + 1]
                sample = parse_line(line)
                if sample is not None:
                    samples.append(sample)
        for ch1, ch2 in samples:
            self._on_sample(ch1, ch2)
        return samples

    def poll(self) -> List[Tuple[int, int]]:
        """Read whatever the open port has waiting and feed it."""
        if not self.is_open:
            return []
        waiting = self._port.in_waiting
        if not waiting:
            return []
        return self.feed(self._port.read(waiting))