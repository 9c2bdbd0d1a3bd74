"""Tk canvas that renders a :class:`~oscope.scope.Scope`."""

from __future__ import annotations

import tkinter as tk
from dataclasses import dataclass
from typing import Optional

from .scope import Scope


@dataclass(frozen=True)
class Palette:
    """Colours used to paint the scope and the surrounding window."""

    window: str
    window_text: str
    mid: str
    midlight: str
    highlight: str
    link: str
    button: str
    button_text: str

    @classmethod
    def dark(cls) -> "Palette":
        # Grid colours are translucent white blended onto the window colour.
        return cls(
            window="#121212",
            window_text="#ffffff",
            mid="#373737",
            midlight="#6f6f6f",
            highlight="#00ff00",
            link="#ff0000",
            button="#333333",
            button_text="#ffffff",
        )

    @classmethod
    def light(cls) -> "Palette":
        return cls(
            window="#efefef",
            window_text="#000000",
            mid="#b8b8b8",
            midlight="#cacaca",
            highlight="#308cc6",
            link="#0000ff",
            button="#efefef",
            button_text="#000000",
        )


class ScopeCanvas:
    """Draws waveforms, grid and axis labels, and handles pan and zoom."""

    UPDATE_MS = 30
    FONT = ("Consolas", 8)
    GRID_DASH = (1, 3)

    def __init__(self, master, scope: Scope, palette: Optional[Palette] = None) -> None:
        self.scope = scope
        self.palette = palette or Palette.dark()
        self.canvas = tk.Canvas(
            master, highlightthickness=0, background=self.palette.window
        )
        self.canvas.bind("<ButtonPress-1>", self._on_press)
        self.canvas.bind("<B1-Motion>", self._on_drag)
        self.canvas.bind("<ButtonRelease-1>", self._on_release)
        self.canvas.bind("<MouseWheel>", self._on_wheel)
        self.canvas.bind("<Button-4>", lambda event: self._zoom(1))
        self.canvas.bind("<Button-5>", lambda event: self._zoom(-1))
        self._job = self.canvas.after(self.UPDATE_MS, self._tick)

    def _tick(self) -> None:
        self.redraw()
        self._job = self.canvas.after(self.UPDATE_MS, self._tick)

    def stop(self) -> None:
        """Stop the periodic refresh."""
        if self._job is not None:
            self.canvas.after_cancel(self._job)
            self._job = None

    def _size(self) -> tuple[int, int]:
        return max(self.canvas.winfo_width(), 1), max(self.canvas.winfo_height(), 1)

    def set_palette(self, palette: Palette) -> None:
        self.palette = palette
        self.canvas.configure(background=palette.window)
        self.redraw()

    def redraw(self) -> None:
        """Repaint everything from the scope's current state."""
        width, height = self._size()
        canvas = self.canvas
        pal = self.palette
        canvas.delete("all")
        canvas.create_rectangle(0, 0, width, height, fill=pal.window, outline="")

        ch1, ch2 = self.scope.waveform(width, height)
        for segments, colour in ((ch1, pal.highlight), (ch2, pal.link)):
            for (x1, y1), (x2, y2) in segments:
                canvas.create_line(x1, y1, x2, y2, fill=colour, width=1)

        dotted, centre = self.scope.grid_lines(width, height)
        for line in dotted:
            canvas.create_line(*line, fill=pal.mid, dash=self.GRID_DASH)
        canvas.create_line(*centre, fill=pal.midlight, width=1)

        for x, y, text in self.scope.axis_labels(width, height):
            canvas.create_text(
                x, y, text=text, anchor="sw", fill=pal.window_text, font=self.FONT
            )

    def _on_press(self, event) -> None:
        self.scope.press(event.x)

    def _on_drag(self, event) -> None:
        if self.scope.panning:
            self.scope.drag(event.x, self._size()[0])
            self.redraw()

    def _on_release(self, event) -> None:
        self.scope.release()

    def _on_wheel(self, event) -> None:
        self._zoom(event.delta)

    def _zoom(self, delta_y: int) -> None:
        self.scope.wheel(delta_y)
        self.redraw()