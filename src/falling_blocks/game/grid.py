from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np


Coordinate = Tuple[int, int]

EMPTY = 0

WIDTH = 10
HEIGHT = 20


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def shifted(self, dx: int = 0, dy: int = 0) -> "Position":
        return Position(self.x + dx, self.y + dy)


def occupied_cells(shape: np.ndarray, position: Position) -> List[Coordinate]:
    """Absolute (x, y) of every occupied cell of `shape` placed at `position`."""
    ys, xs = np.nonzero(shape)
    return [(position.x + int(dx), position.y + int(dy)) for dy, dx in zip(ys, xs)]


class GameGrid:
    """Fixed-size occupancy grid of locked cells.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values are palette codes handed over by the locking piece.
    Row 0 is the top of the board.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_valid_move(self, shape: np.ndarray, position: Position) -> bool:
        # Rows above the board are always allowed so pieces can spawn and rotate there.
        for x, y in occupied_cells(shape, position):
            if x < 0 or x >= self.width or y >= self.height:
                return False
            if y >= 0 and self.grid[y, x] != EMPTY:
                return False
        return True

    def lock(self, shape: np.ndarray, position: Position, color: int) -> int:
        """Write `color` into the cells covered by `shape`, return cells written."""
        written = 0
        for x, y in occupied_cells(shape, position):
            if self.is_inside(x, y):
                self.grid[y, x] = color
                written += 1
        return written

    def completed_rows(self) -> List[int]:
        return [int(r) for r in np.flatnonzero(np.all(self.grid != EMPTY, axis=1))]

    def clear_rows(self, rows: Sequence[int]) -> int:
        # Processed top to bottom: prepending above a removed row never moves rows below it.
        for row in rows:
            self.grid = np.vstack(
                (np.zeros((1, self.width), dtype=np.int8), np.delete(self.grid, row, axis=0))
            )
        return len(rows)

    def overlay(self, shape: np.ndarray, position: Position, color: int) -> np.ndarray:
        state = self.clone_state()
        for x, y in occupied_cells(shape, position):
            if self.is_inside(x, y):
                state[y, x] = color
        return state

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
