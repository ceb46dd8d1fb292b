"""Tunable constants shared by the engine and the host window."""

# --- Grid ---
CELL_SIZE = 32

# --- Traces ---
TRACE_LENGTH = 25
STEP_DELAY = 30  # ms between growth steps of one trace

# --- Decay ---
DECAY = 0.9
MIN_ALPHA = 0.02  # cells below this are pruned

# --- Frame gate ---
FRAME_INTERVAL = 33  # ms; a cycle runs only when more than this has elapsed
DISPLAY_FPS = 60  # host callback cadence

# --- Display ---
SCREEN_WIDTH = 960
SCREEN_HEIGHT = 640
BACKGROUND = (0, 0, 0)
MAX_OPACITY = 0.8

# --- Glyph ---
GLYPH_CHAR = "+"

PALETTES = {
    "white": (255, 255, 255),
    "amber": (255, 176, 0),
    "mint": (120, 255, 180),
    "ice": (140, 200, 255),
    "rose": (255, 110, 160),
}

PALETTE_NAMES = list(PALETTES.keys())

# --- Capture ---
GIF_FRAMES = 100
GIF_FPS = 30
