import numpy as np
import pygame
import pytest

from glyphtrail.loop import AnimationLoop


@pytest.fixture
def surface():
    return pygame.Surface((320, 320))


@pytest.fixture
def engine(surface, glyph):
    loop = AnimationLoop(surface, cell_size=32, rng=np.random.default_rng(42))
    loop.set_glyph(glyph)
    return loop


def lit_pixels(surface):
    return int(np.count_nonzero(pygame.surfarray.array3d(surface).sum(axis=2)))


def test_attach_configures_grid(engine):
    assert (engine.grid.cols, engine.grid.rows, engine.grid.total) == (10, 10, 100)
    assert engine.cells.capacity == 100


def test_frame_gate(engine):
    assert engine.on_frame(1000)
    assert not engine.on_frame(1016)
    assert not engine.on_frame(1033)
    assert engine.on_frame(1034)
    assert not engine.on_frame(1050)
    assert engine.frames == 2


def test_clock_is_used_when_no_time_given(surface):
    times = iter([0.0, 10.0, 50.0])
    loop = AnimationLoop(surface, clock=lambda: next(times))
    assert loop.on_frame()
    assert not loop.on_frame()
    assert loop.on_frame()


def test_pointer_starts_trace_at_full_opacity(engine):
    engine.pointer_move(50, 50)
    assert engine.pointer_cell == 11
    engine.on_frame(0)
    assert 11 in engine.traces
    assert engine.cells.alpha[11] == 1.0
    assert engine.last_triggered == 11


def test_same_cell_does_not_retrigger(engine):
    engine.pointer_move(40, 40)
    engine.on_frame(0)
    engine.pointer_move(60, 60)
    engine.on_frame(40)
    engine.on_frame(80)
    assert len(engine.traces) == 1

    engine.pointer_move(100, 100)
    engine.on_frame(120)
    assert len(engine.traces) == 2
    assert 33 in engine.traces


def test_pointer_outside_grid(engine):
    engine.pointer_move(-5, 400)
    assert engine.pointer_cell is None
    engine.on_frame(0)
    assert len(engine.traces) == 0


def test_pointer_leave_keeps_last_trigger(engine):
    engine.pointer_move(40, 40)
    engine.on_frame(0)
    engine.pointer_leave()
    assert engine.pointer_cell is None
    engine.pointer_move(40, 40)
    engine.on_frame(40)
    assert len(engine.traces) == 1


def test_touch_uses_first_point(engine):
    engine.touch_start([(40, 40), (300, 300)])
    assert engine.pointer_cell == 11
    assert engine.touch_move([(100, 40), (10, 10)]) is True
    assert engine.pointer_cell == 13
    engine.touch_start([])
    assert engine.pointer_cell == 13
    engine.touch_end()
    assert engine.pointer_cell is None


def test_idle_decay(engine):
    engine.pointer_move(150, 150)
    engine.cycle(0)
    seed = engine.pointer_cell
    for i in range(10):
        engine.cycle(40 * (i + 1))
    assert engine.cells.has(seed)
    assert engine.cells.alpha[seed] == pytest.approx(0.9**10)


def test_resize_resets_everything(engine, glyph):
    engine.pointer_move(150, 150)
    for t in range(0, 400, 17):
        engine.on_frame(t)
    assert len(engine.cells) > 1

    big = pygame.Surface((640, 320))
    engine.attach(big)
    assert (engine.grid.cols, engine.grid.rows) == (20, 10)
    assert len(engine.cells) == 0
    assert len(engine.traces) == 0
    assert engine.pointer_cell is None
    assert engine.last_triggered is None

    engine.on_frame(1000)
    assert lit_pixels(big) == 0


def test_stale_growth_after_resize(engine):
    engine.pointer_move(150, 150)
    engine.on_frame(0)
    engine.resize(64, 64)
    engine.on_frame(100)
    assert len(engine.cells) == 0
    assert len(engine.traces) == 0


def test_no_glyph_draws_nothing(surface, glyph):
    loop = AnimationLoop(surface, rng=np.random.default_rng(0))
    loop.pointer_move(40, 40)
    loop.on_frame(0)
    assert len(loop.cells) == 1
    assert lit_pixels(surface) == 0

    loop.set_glyph(glyph)
    loop.on_frame(100)
    assert lit_pixels(surface) > 0


def test_runs_without_surface():
    loop = AnimationLoop(rng=np.random.default_rng(0))
    loop.resize(320, 320)
    loop.pointer_move(40, 40)
    assert loop.on_frame(0)
    assert loop.cells.has(11)


def test_full_lifecycle(engine, surface):
    engine.pointer_move(150, 150)
    seed = engine.pointer_cell
    t = 0.0
    longest = 0
    while t < 5000:
        engine.on_frame(t)
        if t > 20:
            engine.pointer_leave()
        trace = engine.traces.get(seed)
        if trace is not None:
            longest = max(longest, len(trace.path))
        t += 1000 / 60
    assert longest == 25
    assert len(engine.traces) == 0
    assert len(engine.cells) == 0
    assert lit_pixels(surface) == 0


def test_stats(engine):
    engine.pointer_move(40, 40)
    engine.on_frame(0)
    assert engine.stats() == {"cols": 10, "rows": 10, "cells": 1, "traces": 1, "frames": 1}
