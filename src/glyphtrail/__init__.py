"""Glyph trail: a shimmering grid of glyphs that ripples under the pointer.

Modules:
- grid: pixel <-> cell index translation
- cells: per-cell opacity/rotation state with decay
- trace: random-walk traces grown one step at a time
- render: draws the active cells with pygame
- loop: the rate-capped update/render engine
- glyph: glyph bitmaps built with Pillow
- app: the pygame host window
"""

from .cells import ActiveCellSet
from .grid import GridIndexer
from .loop import AnimationLoop
from .render import Renderer
from .trace import Trace, TraceGenerator

__all__ = [
    "ActiveCellSet",
    "AnimationLoop",
    "GridIndexer",
    "Renderer",
    "Trace",
    "TraceGenerator",
]
