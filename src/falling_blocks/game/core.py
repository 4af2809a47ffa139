from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, List, Optional

import numpy as np

from .grid import HEIGHT, WIDTH, GameGrid, Position
from .pieces import Piece, PieceGenerator
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3


class GameStatus(Enum):
    NOT_STARTED = "not_started"
    PLAYING = "playing"
    GAME_OVER = "game_over"


# Listener events
EVENT_STATE = "state"
EVENT_LEVEL = "level"
EVENT_GAME_OVER = "game_over"

Listener = Callable[["FallingBlockGame", str], None]


@dataclass
class GameConfig:
    random_seed: Optional[int] = None


@dataclass(frozen=True)
class GameSnapshot:
    board: np.ndarray
    current_piece_overlay: np.ndarray
    score: int
    level: int
    started: bool
    game_over: bool
    status: GameStatus
    tick_interval_ms: int


class FallingBlockGame:
    """Game-state engine: one falling piece over a grid of locked cells.

    Every mutator holds the same re-entrant lock for its whole duration, so the
    timer thread and the input source never observe a half-applied step.
    Listeners are called after the lock has been released.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.generator = PieceGenerator(rng=rng, seed=self.config.random_seed)
        self.grid = GameGrid(WIDTH, HEIGHT)
        self.score = 0
        self.level = 1
        self.started = False
        self.game_over = False
        self.current_piece: Optional[Piece] = None
        self.position = Position(0, 0)
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []

    def add_listener(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, events: List[str]) -> None:
        for event in events:
            for callback in list(self._listeners):
                callback(self, event)

    @property
    def status(self) -> GameStatus:
        if self.game_over:
            return GameStatus.GAME_OVER
        if self.started:
            return GameStatus.PLAYING
        return GameStatus.NOT_STARTED

    @property
    def is_playing(self) -> bool:
        return self.started and not self.game_over

    @property
    def tick_interval_ms(self) -> int:
        return self.rules.tick_interval_ms(self.level)

    @property
    def spawn_position(self) -> Position:
        return Position(self.grid.width // 2, 0)

    def init_game(self) -> None:
        with self._lock:
            self.grid.reset()
            self.score = 0
            self.level = 1
            self.current_piece = self.generator.next_piece()
            self.position = self.spawn_position
            self.game_over = False
            self.started = True
            logger.info("New game, first piece %s", self.current_piece.kind.name)
        self._notify([EVENT_LEVEL, EVENT_STATE])

    def submit_intent(self, action: Action) -> None:
        if not self.is_playing:
            return
        if action == Action.MOVE_LEFT:
            self.move_horizontal(-1)
        elif action == Action.MOVE_RIGHT:
            self.move_horizontal(1)
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.SOFT_DROP:
            self.move_down()

    def on_tick(self) -> None:
        self.move_down()

    def move_horizontal(self, direction: int) -> None:
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or 1, got {direction!r}")
        with self._lock:
            if self.current_piece is None or not self.is_playing:
                return
            candidate = self.position.shifted(dx=direction)
            if not self.grid.is_valid_move(self.current_piece.shape, candidate):
                return
            self.position = candidate
        self._notify([EVENT_STATE])

    def rotate(self) -> None:
        with self._lock:
            if self.current_piece is None or not self.is_playing:
                return
            rotated = self.current_piece.rotated()
            if not self.grid.is_valid_move(rotated.shape, self.position):
                return
            self.current_piece = rotated
        self._notify([EVENT_STATE])

    def move_down(self) -> None:
        with self._lock:
            if self.current_piece is None or not self.is_playing:
                return
            candidate = self.position.shifted(dy=1)
            if self.grid.is_valid_move(self.current_piece.shape, candidate):
                self.position = candidate
                events = [EVENT_STATE]
            else:
                events = self._land()
        self._notify(events)

    def _land(self) -> List[str]:
        assert self.current_piece is not None
        events = [EVENT_STATE]
        piece = self.current_piece
        written = self.grid.lock(piece.shape, self.position, piece.color)
        logger.debug(
            "Locked %s at (%d, %d), %d cells on the board",
            piece.kind.name, self.position.x, self.position.y, written,
        )

        rows = self.grid.completed_rows()
        if rows:
            score_before = self.score
            self.score += self.rules.score_for_lines(len(rows), self.level)
            basis = self.score if self.rules.level_from_post_clear_score else score_before
            new_level = self.rules.next_level(basis, self.level)
            if new_level != self.level:
                self.level = new_level
                events.append(EVENT_LEVEL)
                logger.info("Level up to %d (interval %d ms)", self.level, self.tick_interval_ms)
            self.grid.clear_rows(rows)
            logger.debug("Cleared rows %s, score %d", rows, self.score)

        next_piece = self.generator.next_piece()
        spawn = self.spawn_position
        if not self.grid.is_valid_move(next_piece.shape, spawn):
            self.game_over = True
            self.started = False
            events.append(EVENT_GAME_OVER)
            logger.info("Game over: score %d, level %d", self.score, self.level)
            return events
        self.current_piece = next_piece
        self.position = spawn
        logger.debug("Spawned %s", next_piece.kind.name)
        return events

    def get_state(self) -> GameSnapshot:
        with self._lock:
            board = self.grid.clone_state()
            if self.current_piece is not None:
                overlay = self.grid.overlay(
                    self.current_piece.shape, self.position, self.current_piece.color
                )
            else:
                overlay = board.copy()
            return GameSnapshot(
                board=board,
                current_piece_overlay=overlay,
                score=self.score,
                level=self.level,
                started=self.started,
                game_over=self.game_over,
                status=self.status,
                tick_interval_ms=self.tick_interval_ms,
            )
