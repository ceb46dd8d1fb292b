import math

import pygame

from .config import BACKGROUND, MAX_OPACITY


class Renderer:
    """Draws every active cell's glyph, rotated and faded by its alpha.

    A cell at full alpha is drawn upright; as it fades it sweeps toward a
    quarter turn in the direction of its rotation sign.
    """

    def __init__(self, background=BACKGROUND, max_opacity=MAX_OPACITY):
        self.background = background
        self.max_opacity = max_opacity
        self._source = None
        self._scaled = None
        self._scaled_key = None

    def glyph_for(self, glyph, cell_size):
        key = (glyph.get_size(), cell_size)
        if glyph is not self._source or key != self._scaled_key:
            if glyph.get_size() == (cell_size, cell_size):
                self._scaled = glyph
            else:
                self._scaled = pygame.transform.smoothscale(glyph, (cell_size, cell_size))
            self._source = glyph
            self._scaled_key = key
        return self._scaled

    @staticmethod
    def angle_of(alpha, sign):
        """Rotation in radians, clockwise positive."""
        return (1.0 - alpha) * (math.pi / 2) * sign

    def draw(self, surface, grid, cells, glyph):
        if glyph is None:
            return

        surface.fill(self.background)
        sprite = self.glyph_for(glyph, grid.cell_size)
        half = grid.cell_size / 2

        for index, alpha, sign in cells.entries():
            x, y = grid.origin_of(index)
            # pygame rotates counter-clockwise for positive degrees
            degrees = -math.degrees(self.angle_of(alpha, sign))
            rotated = pygame.transform.rotate(sprite, degrees)
            # rotate() returns a new surface, so the alpha below stays on this copy
            rotated.set_alpha(round(255 * alpha * self.max_opacity))
            surface.blit(rotated, rotated.get_rect(center=(x + half, y + half)))
