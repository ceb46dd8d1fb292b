"""Glyph trail window.

Move the mouse (or drag a finger) across the window: every cell the pointer
enters sends out a wandering trail of glyphs that spin and fade.

    python -m glyphtrail [--cell-size 32] [--glyph +] [--palette amber]
    python -m glyphtrail --image logo.png --palette ice --save-gif out.gif

Keys: ESC quit, C clear, P next palette.
"""

import argparse
import os
import sys
import time
from collections import deque

import imageio
import numpy as np
import pygame

from .config import (
    CELL_SIZE,
    DISPLAY_FPS,
    GIF_FPS,
    GIF_FRAMES,
    GLYPH_CHAR,
    PALETTE_NAMES,
    PALETTES,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
)
from .glyph import GlyphLoader, load_image_glyph, text_glyph
from .loop import AnimationLoop


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Glyph trail animation")
    parser.add_argument(
        "--width", type=int, default=SCREEN_WIDTH, help=f"Window width (default: {SCREEN_WIDTH})"
    )
    parser.add_argument(
        "--height", type=int, default=SCREEN_HEIGHT, help=f"Window height (default: {SCREEN_HEIGHT})"
    )
    parser.add_argument(
        "--cell-size", type=int, default=CELL_SIZE, help=f"Cell edge in pixels (default: {CELL_SIZE})"
    )
    parser.add_argument(
        "--glyph", type=str, default=GLYPH_CHAR, help=f"Character to draw (default: {GLYPH_CHAR})"
    )
    parser.add_argument("--font", type=str, default=None, help="TrueType font for --glyph")
    parser.add_argument(
        "--image", type=str, default=None, help="Image to use as the glyph instead of a character"
    )
    parser.add_argument(
        "--palette",
        choices=PALETTE_NAMES,
        default="white",
        help="Glyph tint (default: white)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--save-gif", type=str, default=None, help=f"Write the last {GIF_FRAMES} frames to this GIF"
    )
    args = parser.parse_args(argv)

    if args.cell_size <= 0:
        parser.error("--cell-size must be positive")
    return args


def glyph_builder(args, color):
    if args.image:
        return lambda: load_image_glyph(args.image, args.cell_size, color)
    return lambda: text_glyph(args.glyph, args.cell_size, color, args.font)


class TouchTracker:
    """Keeps fingers in the order they went down; the first one drives the pointer."""

    def __init__(self):
        self.fingers = {}

    def update(self, event, size):
        w, h = size
        if event.type == pygame.FINGERUP:
            self.fingers.pop(event.finger_id, None)
        else:
            self.fingers[event.finger_id] = (event.x * w, event.y * h)
        return list(self.fingers.values())

    def clear(self):
        self.fingers.clear()


def handle_event(event, engine, touches, screen):
    """Route one pygame event into the engine. Returns False to quit."""
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
        return False

    if event.type == pygame.MOUSEMOTION:
        # touch already drives the pointer; ignore the mouse events SDL synthesizes from it
        if not getattr(event, "touch", False):
            engine.pointer_move(*event.pos)
    elif event.type == pygame.WINDOWLEAVE:
        engine.pointer_leave()
    elif event.type == pygame.FINGERDOWN:
        engine.touch_start(touches.update(event, screen.get_size()))
    elif event.type == pygame.FINGERMOTION:
        engine.touch_move(touches.update(event, screen.get_size()))
    elif event.type == pygame.FINGERUP:
        touches.update(event, screen.get_size())
        engine.touch_end()
    elif event.type in (pygame.VIDEORESIZE, pygame.WINDOWSIZECHANGED):
        engine.attach(pygame.display.get_surface())
        touches.clear()
    return True


def main(argv=None):
    args = parse_args(argv)

    if args.image and not os.path.exists(args.image):
        print(f"Image not found: {args.image}")
        sys.exit(1)

    rng = np.random.default_rng(args.seed)
    palette_idx = PALETTE_NAMES.index(args.palette)

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
    clock = pygame.time.Clock()

    engine = AnimationLoop(screen, cell_size=args.cell_size, rng=rng)
    loader = GlyphLoader(glyph_builder(args, PALETTES[args.palette]))
    touches = TouchTracker()
    frames = deque(maxlen=GIF_FRAMES)

    print(
        f"Grid {engine.grid.cols}x{engine.grid.rows} ({engine.grid.total} cells, "
        f"{args.cell_size}px)  glyph={args.image or repr(args.glyph)}  "
        f"palette={args.palette}  seed={args.seed}"
    )

    elapsed = 0.0
    running = True
    while running:
        for event in pygame.event.get():
            if not handle_event(event, engine, touches, screen):
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_c:
                    engine.resize(*screen.get_size())
                elif event.key == pygame.K_p:
                    palette_idx = (palette_idx + 1) % len(PALETTE_NAMES)
                    color = PALETTES[PALETTE_NAMES[palette_idx]]
                    loader.cancel()
                    loader = GlyphLoader(glyph_builder(args, color))
        screen = pygame.display.get_surface()

        glyph = loader.poll()
        if glyph is not None:
            engine.set_glyph(glyph)

        start = time.time()
        if engine.on_frame():
            pygame.display.flip()
            elapsed = (time.time() - start) * 1000

            if args.save_gif:
                frame = pygame.surfarray.array3d(screen)
                frames.append(np.transpose(frame, (1, 0, 2)))

        stats = engine.stats()
        pygame.display.set_caption(
            f"Glyph trail  |  tick={stats['frames']}  cells={stats['cells']}  "
            f"traces={stats['traces']}  palette={PALETTE_NAMES[palette_idx]}  "
            f"{elapsed:.0f}ms  [C=clear P=palette]"
        )

        clock.tick(DISPLAY_FPS)

    pygame.quit()

    if args.save_gif and frames:
        imageio.mimsave(args.save_gif, list(frames), fps=GIF_FPS)
        print(f"Saved: {args.save_gif} ({len(frames)} frames)")


if __name__ == "__main__":
    main()
