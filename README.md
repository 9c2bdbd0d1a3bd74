# oscope

`oscope` plots two channels of samples in a desktop window. The samples come
from a serial port or from a built-in test signal generator.

## Installing

```
pip install .
```

The window is drawn with Tkinter, so your Python must include it.

## Running

```
oscope
```

This opens the window titled "Oscilloscope". Pick a serial port from the list
and press **▶ Start**. **■ Stop** closes the port, and **Refresh** reloads the
list of ports. If a port cannot be opened, an error box shows the reason.

### Serial data format

The port is opened at 115200 baud and checked for new data every 5 ms. Input
is split into lines at `\n`. Each line holds two integers separated by a
comma, for example `512,300`. The first is channel 1 and the second is
channel 2. Blank space around the line and around each number is ignored, and
a number may carry a `+` or `-` sign. A line that is not in this form, or
whose numbers do not fit a signed 32-bit integer, is dropped.

### Controls

- **Volt/Div** slider: vertical zoom, from x1 to x10.
- **Time/Div** slider: horizontal zoom, from x1 to x10.
- **Mouse wheel**: zoom the time axis by a factor of 1.1 per step, kept
  between 0.1 and 10.
- **Left-drag**: pan along the time axis, within the sample buffer.
- **Reset Zoom**: set both zooms and both sliders back to x1.
- **Trigger** and its slider: switch a rising-edge trigger on channel 1. The
  level runs from 0 to 255 and starts at 128. Switching the trigger on or off
  clears the captured samples and restarts the time count. While the trigger
  is on and has not fired, no samples are kept.
- **Save CSV**: write up to the last 5000 samples as
  `milliseconds,ch1,ch2` lines.
- **Dark Mode**: switch between a dark and a light palette. The choice is
  saved in `settings.json` in your user configuration directory and used at
  the next start.

The scope keeps the newest 5000 samples and redraws about every 30 ms.

### Test signals

When the window has focus, these keys start and stop the built-in generator:

- `S`: a sine wave of amplitude 230 at 50 Hz on both channels, one sample
  every millisecond.
- `D`: a constant level of 12 on both channels, one sample every 10 ms.

Press the same key again to stop it. Pressing the other key switches to the
other signal.

## Using it as a library

The sample buffer, trigger, zoom and pan logic is in `oscope.scope.Scope` and
needs no display:

```python
from oscope.scope import Scope

scope = Scope()
scope.add_sample(100, 200)
scope.add_sample(110, 190)
print(scope.samples())          # [(timestamp_ms, ch1, ch2), ...]
scope.save_csv("capture.csv", 5000)
```

`Scope` also gives the geometry to draw: `waveform(width, height)` returns the
visible line segments of each channel, `grid_lines(width, height)` the grid
and centre line, and `axis_labels(width, height)` the time and voltage labels.
`press`, `drag`, `release` and `wheel` handle panning and zoom. `Scope(clock)`
takes an optional function that returns milliseconds, which is useful in
tests.

`oscope.serial_reader.parse_line` turns one line of serial input (bytes) into
a pair of ints, or returns `None` if the line is not valid.
`oscope.serial_reader.SerialReader` buffers raw bytes given to `feed` and
passes each complete sample to a callback; `available_ports()` lists the
serial devices present.

`oscope.generator.DataGenerator` makes the sine and DC test signals. It has no
timer of its own: call `generate()` every `interval_ms` milliseconds while
`running` is true, and it passes each sample to its callback and returns it.

## Running the tests

```
pip install .[test]
pytest
```