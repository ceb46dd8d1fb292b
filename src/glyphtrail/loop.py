"""The engine: input handling plus the rate-capped update/render cycle.

The host calls ``on_frame`` at its natural refresh rate (about 60 Hz). Trace
growth runs on every call, like independent timers; the update/render cycle
runs only when more than ``frame_interval`` ms have passed since the last
one, which caps the animation at roughly 30 cycles per second.

Everything runs on the host's single thread: input callbacks, trace growth
and cycles never overlap, so the shared pointer and cell state needs no lock.
"""

import time

import numpy as np

from .cells import ActiveCellSet
from .config import CELL_SIZE, DECAY, FRAME_INTERVAL, MIN_ALPHA, STEP_DELAY, TRACE_LENGTH
from .grid import GridIndexer
from .render import Renderer
from .trace import TraceGenerator


def now_ms():
    return time.perf_counter() * 1000.0


class AnimationLoop:
    def __init__(
        self,
        surface=None,
        cell_size=CELL_SIZE,
        rng=None,
        clock=now_ms,
        renderer=None,
        frame_interval=FRAME_INTERVAL,
        trace_length=TRACE_LENGTH,
        step_delay=STEP_DELAY,
        decay=DECAY,
        min_alpha=MIN_ALPHA,
    ):
        self.clock = clock
        self.frame_interval = frame_interval
        self.renderer = renderer if renderer is not None else Renderer()

        self.grid = GridIndexer(cell_size)
        self.cells = ActiveCellSet(decay=decay, min_alpha=min_alpha)
        self.traces = TraceGenerator(
            self.grid,
            self.cells,
            rng=rng if rng is not None else np.random.default_rng(),
            length=trace_length,
            step_delay=step_delay,
        )

        self.surface = None
        self.glyph = None
        self.pointer_cell = None
        self.last_triggered = None
        self.last_frame_time = None
        self.frames = 0

        if surface is not None:
            self.attach(surface)

    # --- Host wiring ---

    def attach(self, surface):
        self.surface = surface
        self.resize(*surface.get_size())

    def set_glyph(self, glyph):
        self.glyph = glyph

    def resize(self, width, height):
        """Recompute the grid and throw away all animation state."""
        self.grid.configure(width, height)
        self.cells.reset(self.grid.total)
        self.traces.clear()
        self.pointer_cell = None
        self.last_triggered = None

    # --- Input ---

    def pointer_move(self, x, y):
        self.pointer_cell = self.grid.cell_of(x, y)

    def pointer_leave(self):
        self.pointer_cell = None

    def touch_start(self, points):
        if points:
            x, y = points[0]
            self.pointer_cell = self.grid.cell_of(x, y)

    def touch_move(self, points):
        """Track the first touch point. Returns True: the host must not scroll."""
        self.touch_start(points)
        return True

    def touch_end(self):
        self.pointer_cell = None

    # --- Frame cycle ---

    def on_frame(self, now=None):
        """Host "next frame" callback. Returns True if a cycle ran."""
        if now is None:
            now = self.clock()

        self.traces.advance(now)

        if self.last_frame_time is not None and now - self.last_frame_time <= self.frame_interval:
            return False

        self.cycle(now)
        self.last_frame_time = now
        return True

    def cycle(self, now):
        self.cells.tick()
        self.traces.collect(self.cells)

        if self.pointer_cell is not None and self.pointer_cell != self.last_triggered:
            self.last_triggered = self.pointer_cell
            self.traces.start(self.pointer_cell, now)

        if self.surface is not None:
            self.renderer.draw(self.surface, self.grid, self.cells, self.glyph)
        self.frames += 1

    def stats(self):
        return {
            "cols": self.grid.cols,
            "rows": self.grid.rows,
            "cells": len(self.cells),
            "traces": len(self.traces),
            "frames": self.frames,
        }
