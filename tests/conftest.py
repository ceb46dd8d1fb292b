import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from glyphtrail.cells import ActiveCellSet
from glyphtrail.grid import GridIndexer
from glyphtrail.trace import TraceGenerator


@pytest.fixture
def grid():
    g = GridIndexer()
    g.configure(320, 320, 32)
    return g


@pytest.fixture
def cells(grid):
    return ActiveCellSet(grid.total)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def traces(grid, cells, rng):
    return TraceGenerator(grid, cells, rng=rng)


@pytest.fixture
def glyph():
    surf = pygame.Surface((32, 32), pygame.SRCALPHA)
    surf.fill((255, 255, 255, 255))
    return surf
