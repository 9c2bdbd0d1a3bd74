import io
import itertools

import pytest

from oscope.scope import Scope


def make_scope():
    ticks = itertools.count(0, 2)
    return Scope(clock=lambda: next(ticks))


def test_samples_have_increasing_relative_timestamps():
    scope = make_scope()
    scope.add_sample(1, 2)
    scope.add_sample(3, 4)
    data = scope.samples()
    assert [(c1, c2) for _, c1, c2 in data] == [(1, 2), (3, 4)]
    assert data[0][0] < data[1][0]
    assert data[0][0] >= 0


def test_buffer_keeps_newest_samples():
    scope = make_scope()
    for i in range(Scope.BUFFER_SIZE + 3):
        scope.add_sample(i, -i)
    data = scope.samples()
    assert len(data) == Scope.BUFFER_SIZE
    assert data[0][1] == 3
    assert data[-1][1] == Scope.BUFFER_SIZE + 2


def test_trigger_waits_for_rising_edge():
    scope = make_scope()
    scope.add_sample(9, 9)
    scope.enable_trigger(True)
    assert scope.samples() == []
    scope.add_sample(100, 1)
    assert scope.samples() == []
    scope.add_sample(130, 2)
    assert [(c1, c2) for _, c1, c2 in scope.samples()] == [(130, 2)]
    assert scope.triggered is True
    scope.add_sample(0, 3)
    assert len(scope.samples()) == 2


def test_trigger_level_not_crossed_from_equal_start():
    scope = make_scope()
    scope.trigger_level = 0
    scope.enable_trigger(True)
    scope.add_sample(5, 5)
    assert scope.samples() == []
    scope.add_sample(-1, 0)
    scope.add_sample(3, 7)
    assert [(c1, c2) for _, c1, c2 in scope.samples()] == [(3, 7)]


def test_disabling_trigger_clears_and_records_freely():
    scope = make_scope()
    scope.add_sample(1, 1)
    scope.enable_trigger(False)
    assert scope.samples() == []
    scope.add_sample(2, 2)
    assert len(scope.samples()) == 1


def test_waveform_needs_two_samples():
    scope = make_scope()
    scope.add_sample(1, 1)
    assert scope.waveform(500, 400) == ([], [])


def test_waveform_zero_signal_lies_on_centre_line():
    scope = make_scope()
    for _ in range(10):
        scope.add_sample(0, 0)
    ch1, ch2 = scope.waveform(500, 400)
    assert len(ch1) == len(ch2) == 9
    for (p1, p2) in ch1 + ch2:
        assert p1[1] == p2[1] == 200
        assert p2[0] > p1[0]


def test_waveform_positive_values_are_drawn_above_centre():
    scope = make_scope()
    scope.add_sample(0, 0)
    scope.add_sample(500, -500)
    (seg1,), (seg2,) = scope.waveform(Scope.BUFFER_SIZE, 800)
    assert seg1[1][1] < 400 < seg2[1][1]
    assert seg1[1][1] - 400 == pytest.approx(400 - seg2[1][1])


def test_waveform_pan_hides_segments():
    scope = make_scope()
    for i in range(10):
        scope.add_sample(i, i)
    scope.time_offset = float(Scope.BUFFER_SIZE)
    assert scope.waveform(Scope.BUFFER_SIZE, 800) == ([], [])


def test_grid_lines_count_and_centre():
    scope = make_scope()
    lines, centre = scope.grid_lines(1000, 800)
    assert len(lines) == (Scope.HORIZONTAL_DIVS - 1) + (Scope.VERTICAL_DIVS - 1)
    assert centre == (0, 400, 1000, 400)
    assert all(0 < x < 1000 for x, _, x2, _ in lines[: Scope.HORIZONTAL_DIVS - 1] if x == x2)


def test_axis_labels_scale_with_zoom():
    scope = make_scope()
    labels = scope.axis_labels(1000, 800)
    assert len(labels) == Scope.HORIZONTAL_DIVS + 1 + Scope.VERTICAL_DIVS + 1
    assert labels[0][2] == "0 ms"
    assert labels[Scope.HORIZONTAL_DIVS][2] == "100 ms"
    scope.time_zoom = 2.0
    zoomed = scope.axis_labels(1000, 800)
    assert zoomed[Scope.HORIZONTAL_DIVS][2] == "200 ms"
    volts = [text for _, _, text in labels[Scope.HORIZONTAL_DIVS + 1:]]
    assert volts[0] == "4000.0"
    assert volts[-1] == "-" + volts[0]


def test_drag_clamps_offset():
    scope = make_scope()
    scope.press(100)
    scope.drag(200, 5000)
    assert scope.time_offset == 0.0
    scope.drag(-10**7, 5000)
    assert scope.time_offset == float(Scope.BUFFER_SIZE)
    scope.release()
    scope.drag(10**7, 5000)
    assert scope.time_offset == float(Scope.BUFFER_SIZE)


def test_drag_left_moves_forward_in_time():
    scope = make_scope()
    scope.press(300)
    scope.drag(250, 5000)
    assert scope.time_offset > 0.0
    assert scope.last_pan_x == 250


def test_wheel_clamps_zoom():
    scope = make_scope()
    assert scope.wheel(120) > 1.0
    for _ in range(100):
        scope.wheel(120)
    assert scope.time_zoom == Scope.MAX_TIME_ZOOM
    for _ in range(200):
        scope.wheel(-120)
    assert scope.time_zoom == Scope.MIN_TIME_ZOOM


def test_csv_round_trip():
    scope = make_scope()
    for i in range(5):
        scope.add_sample(i, i * 10)
    out = io.StringIO()
    assert scope.write_csv(out) == 5
    rows = [tuple(int(v) for v in line.split(",")) for line in out.getvalue().splitlines()]
    assert rows == scope.samples()


def test_csv_keeps_only_newest_rows():
    scope = make_scope()
    for i in range(5):
        scope.add_sample(i, i)
    out = io.StringIO()
    assert scope.write_csv(out, 2) == 2
    lines = out.getvalue().splitlines()
    assert [line.split(",")[1] for line in lines] == ["3", "4"]


def test_save_csv_writes_file(tmp_path):
    scope = make_scope()
    scope.add_sample(7, 8)
    path = tmp_path / "capture.csv"
    assert scope.save_csv(path) == 1
    ts, c1, c2 = scope.samples()[0]
    assert path.read_text(encoding="utf-8") == f"{ts},{c1},{c2}\n"


def test_save_csv_to_missing_directory_raises(tmp_path):
    scope = make_scope()
    with pytest.raises(OSError):
        scope.save_csv(tmp_path / "missing" / "capture.csv")