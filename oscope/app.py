"""Main window: controls around the scope canvas, and the program entry."""

from __future__ import annotations

import argparse
import json
import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox, ttk
from typing import Any, Optional

import serial
from platformdirs import user_config_dir

from .generator import DataGenerator, Mode
from .scope import Scope
from .serial_reader import SerialReader, available_ports
from .view import Palette, ScopeCanvas

CSV_MAX_SAMPLES = 5000
SERIAL_POLL_MS = 5
SINE_AMPLITUDE = 230.0
SINE_FREQUENCY = 50.0
DC_LEVEL = 12.0


def _default_settings_path() -> Path:
    return Path(user_config_dir("Oscilloscope", "QtOsc")) / "settings.json"


class Settings:
    """Small persistent key/value store kept as JSON."""

    def __init__(self, path=None) -> None:
        self.path = Path(path) if path is not None else _default_settings_path()

    def _load(self) -> dict:
        try:
            with open(self.path, encoding="utf-8") as stream:
                data = json.load(stream)
        except (OSError, ValueError):
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as stream:
            json.dump(data, stream, indent=2)


class MainWindow:
    """Port selection, acquisition, zoom, trigger and theme controls."""

    def __init__(self, root: tk.Tk, settings: Optional[Settings] = None) -> None:
        self.root = root
        self.settings = settings or Settings()
        self.scope = Scope()
        self.reader = SerialReader(self.scope.add_sample)
        self.generator = DataGenerator(self.scope.add_sample)
        self.gen_mode = Mode.OFF
        self._gen_job = None
        self._poll_job = None
        self._tk_widgets: list[tk.Widget] = []

        self._setup_ui()
        self.refresh_ports()

        dark = bool(self.settings.get("dark", True))
        self.dark_var.set(dark)
        self.apply_palette(dark)

        root.bind("<KeyPress>", lambda event: self.on_key(event.keysym))
        root.protocol("WM_DELETE_WINDOW", self.close)
        self._poll_job = root.after(SERIAL_POLL_MS, self._poll_serial)

    def _setup_ui(self) -> None:
        root = self.root
        root.title("Oscilloscope")
        root.geometry("1000x600")

        self.view = ScopeCanvas(root, self.scope)
        self.view.canvas.configure(height=400)
        self.view.canvas.pack(side=tk.TOP, fill=tk.BOTH, expand=True)

        controls = ttk.Frame(root)
        controls.pack(side=tk.TOP, fill=tk.X)

        ttk.Label(controls, text="Serial Port:").pack(side=tk.LEFT)
        self.port_combo = ttk.Combobox(controls, state="readonly")
        self.port_combo.pack(side=tk.LEFT)
        ttk.Button(controls, text="Refresh", command=self.refresh_ports).pack(side=tk.LEFT)
        ttk.Button(controls, text="▶ Start", command=self.start_acquisition).pack(side=tk.LEFT)
        ttk.Button(controls, text="■ Stop", command=self.stop_acquisition).pack(side=tk.LEFT)
        ttk.Button(controls, text="Reset Zoom", command=self.reset_zoom).pack(side=tk.LEFT)
        ttk.Button(controls, text="Save CSV", command=self.on_save_csv).pack(side=tk.LEFT)

        volt_box = ttk.Frame(controls)
        volt_box.pack(side=tk.LEFT)
        self.volt_label = ttk.Label(volt_box, text="Volt/Div")
        self.volt_label.pack()
        self.volt_slider = tk.Scale(
            volt_box, from_=10, to=1, orient=tk.VERTICAL, showvalue=False,
            command=self.on_volt_slider_changed,
        )
        self.volt_slider.set(1)
        self.volt_slider.pack()

        trig_box = ttk.Frame(controls)
        trig_box.pack(side=tk.LEFT)
        self.trigger_var = tk.BooleanVar(value=False)
        ttk.Checkbutton(
            trig_box, text="Trigger", variable=self.trigger_var,
            command=lambda: self.on_trigger_enabled(self.trigger_var.get()),
        ).pack()
        self.trigger_slider = tk.Scale(
            trig_box, from_=255, to=0, orient=tk.VERTICAL, showvalue=False,
            command=self.on_trigger_level_changed,
        )
        self.trigger_slider.set(128)
        self.trigger_slider.pack()

        self.dark_var = tk.BooleanVar(value=True)
        ttk.Checkbutton(
            controls, text="Dark Mode", variable=self.dark_var,
            command=lambda: self.apply_palette(self.dark_var.get()),
        ).pack(side=tk.LEFT)

        time_box = ttk.Frame(root)
        time_box.pack(side=tk.TOP, fill=tk.X)
        self.time_label = ttk.Label(time_box, text="Time/Div: x1")
        self.time_label.pack(anchor=tk.W)
        self.time_slider = tk.Scale(
            time_box, from_=1, to=10, orient=tk.HORIZONTAL, showvalue=False,
            command=self.on_time_slider_changed,
        )
        self.time_slider.set(1)
        self.time_slider.pack(fill=tk.X)

        self._tk_widgets = [self.volt_slider, self.trigger_slider, self.time_slider]

    def _poll_serial(self) -> None:
        try:
            self.reader.poll()
        except serial.SerialException:
            self.reader.stop()
        self._poll_job = self.root.after(SERIAL_POLL_MS, self._poll_serial)

    def start_acquisition(self) -> None:
        port = self.port_combo.get()
        if not port:
            return
        try:
            self.reader.start(port)
        except serial.SerialException as exc:
            messagebox.showerror("Serial Port", str(exc), parent=self.root)

    def stop_acquisition(self) -> None:
        self.reader.stop()

    def refresh_ports(self) -> None:
        ports = available_ports()
        self.port_combo["values"] = ports
        self.port_combo.set(ports[0] if ports else "")

    def on_volt_slider_changed(self, value) -> None:
        level = int(float(value))
        self.scope.volt_zoom = float(level)
        self.volt_label.configure(text=f"Volt/Div: x{level}")

    def on_time_slider_changed(self, value) -> None:
        level = int(float(value))
        self.scope.time_zoom = float(level)
        self.time_label.configure(text=f"Time/Div: x{level}")

    def on_trigger_level_changed(self, value) -> None:
        self.scope.trigger_level = int(float(value))

    def on_trigger_enabled(self, checked) -> None:
        self.scope.enable_trigger(bool(checked))

    def reset_zoom(self) -> None:
        self.scope.time_zoom = 1.0
        self.scope.volt_zoom = 1.0
        self.time_slider.set(1)
        self.volt_slider.set(1)
        self.time_label.configure(text="Time/Div: x1")
        self.volt_label.configure(text="Volt/Div: x1")

    def on_save_csv(self) -> None:
        path = filedialog.asksaveasfilename(
            parent=self.root, title="Save CSV", filetypes=[("CSV Files", "*.csv")]
        )
        if path:
            self.scope.save_csv(path, CSV_MAX_SAMPLES)

    def apply_palette(self, dark) -> None:
        dark = bool(dark)
        palette = Palette.dark() if dark else Palette.light()
        self.root.configure(background=palette.window)
        style = ttk.Style(self.root)
        style.configure(".", background=palette.window, foreground=palette.window_text)
        style.configure("TButton", background=palette.button, foreground=palette.button_text)
        for widget in self._tk_widgets:
            widget.configure(
                background=palette.button,
                troughcolor=palette.window,
                highlightbackground=palette.window,
            )
        self.view.set_palette(palette)
        self.settings.set("dark", dark)

    def _schedule_generator(self) -> None:
        self._cancel_generator()
        self._gen_job = self.root.after(self.generator.interval_ms, self._generator_tick)

    def _cancel_generator(self) -> None:
        if self._gen_job is not None:
            self.root.after_cancel(self._gen_job)
            self._gen_job = None

    def _generator_tick(self) -> None:
        self._gen_job = None
        if self.generator.running:
            self.generator.generate()
            self._gen_job = self.root.after(self.generator.interval_ms, self._generator_tick)

    def on_key(self, key: str) -> None:
        """Toggle the sine (``s``) or DC (``d``) test signal."""
        key = key.lower()
        if key == "s":
            target = Mode.SINE
        elif key == "d":
            target = Mode.DC
        else:
            return
        if self.gen_mode is target:
            self.generator.stop()
            self._cancel_generator()
            self.gen_mode = Mode.OFF
            return
        if target is Mode.SINE:
            self.generator.start_sine(SINE_AMPLITUDE, SINE_FREQUENCY)
        else:
            self.generator.start_dc(DC_LEVEL)
        self.gen_mode = target
        self._schedule_generator()

    def close(self) -> None:
        self.reader.stop()
        self.generator.stop()
        self._cancel_generator()
        if self._poll_job is not None:
            self.root.after_cancel(self._poll_job)
            self._poll_job = None
        self.view.stop()
        self.root.destroy()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="oscope", description="Two-channel serial oscilloscope.")
    parser.parse_args(argv)
    root = tk.Tk()
    MainWindow(root, Settings())
    root.geometry("800x600")
    root.mainloop()
    return 0