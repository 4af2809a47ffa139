from __future__ import annotations

import random
from typing import Iterable, Tuple

from falling_blocks.game import FallingBlockGame, GameConfig, GameGrid, Piece, Position, ScoringRules, TetrominoType


class ScriptedRandom(random.Random):
    """Random source whose `randrange` replays fixed piece indices, then falls back to 0."""

    def __init__(self, indices: Iterable[int] = ()) -> None:
        super().__init__(0)
        self.indices = list(indices)

    def randrange(self, *args, **kwargs):  # type: ignore[override]
        if self.indices:
            return self.indices.pop(0)
        return 0


def started_game(indices: Iterable[int] = (), rules: ScoringRules | None = None) -> FallingBlockGame:
    game = FallingBlockGame(GameConfig(), rules, rng=ScriptedRandom(indices))
    game.init_game()
    return game


def place(game: FallingBlockGame, kind: TetrominoType, x: int, y: int, rotations: int = 0) -> Piece:
    piece = Piece.of(kind)
    for _ in range(rotations):
        piece = piece.rotated()
    game.current_piece = piece
    game.position = Position(x, y)
    return piece


def fill_row(game: FallingBlockGame, row: int, value: int = 1, skip: Iterable[int] = ()) -> None:
    skipped = set(skip)
    fill_cells(game.grid, [(x, row) for x in range(game.grid.width) if x not in skipped], value)


def fill_cells(grid: GameGrid, cells: Iterable[Tuple[int, int]], value: int = 1) -> None:
    for x, y in cells:
        grid.grid[y, x] = value
