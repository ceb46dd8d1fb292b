"""Random-walk traces.

A trace starts at the cell under the pointer and wanders one axis-aligned
step at a time, lighting every cell it lands on. Each trace stores the time
its next step is due instead of holding a timer; ``advance`` is called from
the host loop and grows whatever is due. Clearing the registry is all it
takes to cancel pending growth.

The walk keeps no visited set, so a trace may land on a cell it already
passed through and light it up again.
"""

from dataclasses import dataclass, field

import numpy as np

from .config import STEP_DELAY, TRACE_LENGTH

# (d_row, d_col) for up, right, down, left
MOVES = ((-1, 0), (0, 1), (1, 0), (0, -1))


@dataclass
class Trace:
    seed: int
    path: list = field(default_factory=list)
    complete: bool = False
    due: float = 0.0


def random_sign(rng):
    return int(rng.integers(0, 2)) * 2 - 1


class TraceGenerator:
    def __init__(
        self,
        grid,
        cells,
        rng=None,
        length=TRACE_LENGTH,
        step_delay=STEP_DELAY,
    ):
        self.grid = grid
        self.cells = cells
        self.rng = rng if rng is not None else np.random.default_rng()
        self.length = length
        self.step_delay = step_delay
        self.traces = {}

    def __len__(self):
        return len(self.traces)

    def __contains__(self, seed):
        return seed in self.traces

    def get(self, seed):
        return self.traces.get(seed)

    def clear(self):
        self.traces.clear()

    def legal_moves(self, index):
        """Index offsets for the up/right/down/left neighbors that stay on the grid."""
        row, col = self.grid.row_col(index)
        rows, cols = self.grid.rows, self.grid.cols
        moves = []
        if row > 0:
            moves.append(-cols)
        if col < cols - 1:
            moves.append(1)
        if row < rows - 1:
            moves.append(cols)
        if col > 0:
            moves.append(-1)
        return moves

    def next_step(self, index):
        """Pick a random in-bounds neighbor of ``index``, or None if there is none."""
        moves = self.legal_moves(index)
        if not moves:
            return None
        return index + moves[int(self.rng.integers(len(moves)))]

    def start(self, seed, now=0.0):
        """Begin a trace at ``seed``, light it, and schedule its first step."""
        if seed is None:
            return None
        trace = Trace(seed=seed, path=[seed], due=now + self.step_delay)
        self.traces[seed] = trace
        self.cells.register(seed, random_sign(self.rng))
        return trace

    def grow_step(self, seed, now=0.0):
        """Grow the trace started at ``seed`` by one cell.

        Returns True when another step has been scheduled.
        """
        trace = self.traces.get(seed)
        if trace is None or trace.complete:
            return False

        if len(trace.path) >= self.length:
            trace.complete = True
            return False

        index = self.next_step(trace.path[-1])
        if index is None:
            trace.complete = True
            return False

        trace.path.append(index)
        self.cells.register(index, random_sign(self.rng))
        trace.due = now + self.step_delay
        return True

    def advance(self, now):
        """Grow every unfinished trace whose next step is due by ``now``."""
        for seed, trace in self.traces.items():
            if not trace.complete and trace.due <= now:
                self.grow_step(seed, now)

    def collect(self, cells=None):
        """Drop finished traces whose cells have all faded out."""
        cells = cells if cells is not None else self.cells
        finished = [
            seed
            for seed, trace in self.traces.items()
            if trace.complete and not cells.any_active(trace.path)
        ]
        for seed in finished:
            del self.traces[seed]
        return len(finished)
