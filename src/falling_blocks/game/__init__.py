"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- GameGrid: Board occupancy, placement validation and line clearing
- Piece: Immutable shape/color value with clockwise rotation
- PieceGenerator: Uniform (optionally seeded) piece source
- ScoringRules: Score table, level thresholds and tick speed
- FallingBlockGame: Tick engine and state management
- TickScheduler: Background timer driving the engine
"""

from .grid import HEIGHT, WIDTH, GameGrid, Position, occupied_cells
from .pieces import PALETTE_RGB, BASE_SHAPES, Piece, PieceGenerator, TetrominoType, rotate_cw
from .rules import ScoringRules
from .core import Action, FallingBlockGame, GameConfig, GameSnapshot, GameStatus
from .scheduler import TickScheduler

__all__ = [
    "WIDTH",
    "HEIGHT",
    "GameGrid",
    "Position",
    "occupied_cells",
    "PALETTE_RGB",
    "BASE_SHAPES",
    "Piece",
    "PieceGenerator",
    "TetrominoType",
    "rotate_cw",
    "ScoringRules",
    "Action",
    "FallingBlockGame",
    "GameConfig",
    "GameSnapshot",
    "GameStatus",
    "TickScheduler",
]
