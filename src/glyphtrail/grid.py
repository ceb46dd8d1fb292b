import math

from .config import CELL_SIZE


class GridIndexer:
    """Maps surface pixels to square cells addressed by a single index.

    Index layout is row-major: ``row = index // cols``, ``col = index % cols``.
    Coordinates outside the grid map to ``None`` ("no cell").
    """

    def __init__(self, cell_size=CELL_SIZE):
        self.cell_size = cell_size
        self.width = 0
        self.height = 0
        self.cols = 0
        self.rows = 0
        self.total = 0

    def configure(self, width, height, cell_size=None):
        """Recompute cols, rows and total for a surface of the given size."""
        if cell_size is not None:
            self.cell_size = cell_size
        if self.cell_size <= 0:
            raise ValueError(f"cell size must be positive, got {self.cell_size}")
        if width < 0 or height < 0:
            raise ValueError(f"surface size must be non-negative, got {width}x{height}")

        self.width = width
        self.height = height
        self.cols = math.ceil(width / self.cell_size)
        self.rows = math.ceil(height / self.cell_size)
        self.total = self.cols * self.rows

    def cell_of(self, x, y):
        """Cell index under pixel (x, y), or None outside the grid."""
        col = math.floor(x / self.cell_size)
        row = math.floor(y / self.cell_size)
        if 0 <= col < self.cols and 0 <= row < self.rows:
            return row * self.cols + col
        return None

    def row_col(self, index):
        """(row, col) of a cell index."""
        return divmod(index, self.cols)

    def origin_of(self, index):
        """Top-left pixel of the cell."""
        row, col = self.row_col(index)
        return col * self.cell_size, row * self.cell_size
