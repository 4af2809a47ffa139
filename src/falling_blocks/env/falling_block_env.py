from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import HEIGHT, WIDTH, Action, FallingBlockGame, GameConfig, PALETTE_RGB, ScoringRules


class FallingBlockEnv(gym.Env):
    """
    Headless driver around `FallingBlockGame`.

    Actions (5 total):
      0: Move Left
      1: Move Right
      2: Rotate
      3: Soft Drop
      4: No-op

    Every step applies the chosen intent and then one gravity tick, so an
    episode always makes progress. The reward is the engine score gained
    during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 10}

    ACT_NOOP = 4

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 5000,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.rules = rules
        self.game = FallingBlockGame(self.config, rules)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self._steps = 0

        h, w = HEIGHT, WIDTH
        self.observation_space = spaces.Box(low=0, high=len(PALETTE_RGB) - 1, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action) + 1)

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state().current_piece_overlay.astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "level": self.game.level,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game = FallingBlockGame(self.config, self.rules, rng=random.Random(seed))
        self.game.init_game()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = int(action)
        if not self.action_space.contains(action):
            raise ValueError(f"invalid action {action!r}")
        score_before = self.game.score
        if action != self.ACT_NOOP:
            self.game.submit_intent(Action(action))
        self.game.on_tick()
        self._steps += 1

        reward = float(self.game.score - score_before)
        terminated = bool(self.game.game_over)
        truncated = not terminated and self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self._get_obs()
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = PALETTE_RGB[int(grid[y, x])]
        return img

    def close(self) -> None:
        pass
