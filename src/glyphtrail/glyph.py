"""Glyph bitmaps.

Bitmaps are built with Pillow and handed to the engine as pygame surfaces.
``GlyphLoader`` builds them off the main thread; the engine draws nothing
until ``poll`` hands one over.
"""

from concurrent.futures import ThreadPoolExecutor

import pygame
from PIL import Image, ImageDraw, ImageFont

from .config import CELL_SIZE, GLYPH_CHAR


def text_glyph(char=GLYPH_CHAR, size=CELL_SIZE, color=(255, 255, 255), font_path=None):
    """Render one character centered in a transparent ``size`` x ``size`` square."""
    font_size = max(1, int(size * 0.9))
    if font_path:
        font = ImageFont.truetype(font_path, font_size)
    else:
        font = ImageFont.load_default(size=font_size)

    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.text((size / 2, size / 2), char, fill=tuple(color) + (255,), font=font, anchor="mm")
    return img


def tint_glyph(img, color):
    """Flat-fill the RGB channels with ``color``, keeping the alpha mask."""
    img = img.convert("RGBA")
    tinted = Image.new("RGBA", img.size, tuple(color) + (255,))
    tinted.putalpha(img.getchannel("A"))
    return tinted


def load_image_glyph(path, size=CELL_SIZE, color=None):
    with Image.open(path) as src:
        img = src.convert("RGBA")
    if img.size != (size, size):
        img = img.resize((size, size), Image.LANCZOS)
    if color is not None:
        img = tint_glyph(img, color)
    return img


def to_surface(img):
    img = img.convert("RGBA")
    # frombuffer shares memory with the bytes object; copy() detaches it
    return pygame.image.frombuffer(img.tobytes(), img.size, "RGBA").copy()


class GlyphLoader:
    """Builds a glyph image in the background.

    ``build`` is any zero-argument callable returning a Pillow image. Call
    ``poll`` once per frame: it returns the pygame surface exactly once,
    when the image is ready, and None otherwise.
    """

    def __init__(self, build):
        self._executor = ThreadPoolExecutor(max_workers=1)
        self._future = self._executor.submit(build)
        self._delivered = False

    @property
    def ready(self):
        return self._future.done()

    def poll(self):
        if self._delivered or not self._future.done():
            return None
        self._delivered = True
        self._executor.shutdown(wait=False)
        # re-raises a failed build here, on the caller's thread
        return to_surface(self._future.result())

    def cancel(self):
        """Abandon the build; ``poll`` will never deliver."""
        self._delivered = True
        self._future.cancel()
        self._executor.shutdown(wait=False)

    def wait(self, timeout=None):
        self._future.result(timeout=timeout)
        return self.poll()
