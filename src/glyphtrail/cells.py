"""Per-cell visual state: opacity and rotation direction.

The set is a dense arena sized to the grid. ``alpha[i] > 0`` means cell ``i``
is active; decay multiplies every entry at once and zeroes anything that
drops below the visibility threshold.
"""

import numpy as np

from .config import DECAY, MIN_ALPHA


class ActiveCellSet:
    def __init__(self, total=0, decay=DECAY, min_alpha=MIN_ALPHA):
        self.decay = decay
        self.min_alpha = min_alpha
        self.reset(total)

    def reset(self, total):
        """Reallocate for a grid of ``total`` cells, all inactive."""
        self.alpha = np.zeros(total, dtype=np.float64)
        self.sign = np.zeros(total, dtype=np.int8)

    def clear(self):
        self.alpha[:] = 0.0
        self.sign[:] = 0

    @property
    def capacity(self):
        return self.alpha.size

    def register(self, index, sign):
        """Insert or refresh a cell at full visibility."""
        self.alpha[index] = 1.0
        self.sign[index] = sign

    def tick(self):
        """Decay every cell once and drop those that fell below ``min_alpha``."""
        self.alpha *= self.decay
        faded = self.alpha < self.min_alpha
        self.alpha[faded] = 0.0
        self.sign[faded] = 0

    def has(self, index):
        return bool(self.alpha[index] > 0.0)

    def any_active(self, indices):
        """True if any of ``indices`` is still visible."""
        if len(indices) == 0:
            return False
        return bool(np.any(self.alpha[np.asarray(indices)] > 0.0))

    def entries(self):
        """Yield ``(index, alpha, sign)`` for every active cell, by index."""
        for index in np.flatnonzero(self.alpha):
            yield int(index), float(self.alpha[index]), int(self.sign[index])

    def __len__(self):
        return int(np.count_nonzero(self.alpha))

    def __contains__(self, index):
        return 0 <= index < self.capacity and self.has(index)
