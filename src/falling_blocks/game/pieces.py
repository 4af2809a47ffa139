from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 0
    O = 1
    T = 2
    J = 3
    L = 4
    Z = 5
    S = 6


Shape = np.ndarray


def _freeze(rows) -> Shape:
    lengths = {len(r) for r in rows}
    if len(lengths) != 1:
        raise ValueError(f"shape rows must all have the same length, got {sorted(lengths)}")
    shape = np.array(rows, dtype=np.bool_)
    shape.flags.writeable = False
    return shape


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _freeze([[1, 1, 1, 1]]),
    TetrominoType.O: _freeze([[1, 1], [1, 1]]),
    TetrominoType.T: _freeze([[1, 1, 1], [0, 1, 0]]),
    TetrominoType.J: _freeze([[1, 1, 1], [1, 0, 0]]),
    TetrominoType.L: _freeze([[1, 1, 1], [0, 0, 1]]),
    TetrominoType.Z: _freeze([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.S: _freeze([[0, 1, 1], [1, 1, 0]]),
}

# Color tokens, paired with shapes by index: board cells store `index + 1`, 0 is empty.
PALETTE_RGB: Dict[int, Tuple[int, int, int]] = {
    0: (20, 20, 26),
    1: (0, 200, 240),   # I
    2: (160, 60, 220),  # O
    3: (60, 220, 120),  # T
    4: (90, 70, 230),   # J
    5: (240, 170, 30),  # L
    6: (235, 60, 90),   # Z
    7: (40, 190, 200),  # S
}


def color_code(kind: TetrominoType) -> int:
    return int(kind) + 1


def rotate_cw(shape: Shape) -> Shape:
    # Transposed with each row reversed: one clockwise quarter turn.
    rotated = np.ascontiguousarray(shape.T[:, ::-1])
    rotated.flags.writeable = False
    return rotated


@dataclass(frozen=True, eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape
    color: int

    @classmethod
    def of(cls, kind: TetrominoType) -> "Piece":
        return cls(kind=kind, shape=BASE_SHAPES[kind], color=color_code(kind))

    def rotated(self) -> "Piece":
        return Piece(self.kind, rotate_cw(self.shape), self.color)


class PieceGenerator:
    """Uniform random piece source.

    Pass a `random.Random` (or a seed) to make the sequence reproducible.
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> None:
        self.rng = rng if rng is not None else random.Random(seed)

    def next_piece(self) -> Piece:
        index = self.rng.randrange(len(TetrominoType))
        return Piece.of(TetrominoType(index))
