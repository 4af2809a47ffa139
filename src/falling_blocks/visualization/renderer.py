from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from falling_blocks.game import GameSnapshot, PALETTE_RGB


def _color_for_value(v: int) -> Tuple[int, int, int]:
    return PALETTE_RGB.get(int(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 160) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        width = cols * self.cell_size + self.margin * 3 + self.panel_width
        height = rows * self.cell_size + self.margin * 2
        return width, height

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(state[y, x]), rect)
        return surf

    def _text(self, screen: pygame.Surface, text: str, pos: Tuple[int, int]) -> None:
        if not pygame.font.get_init():
            return
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        screen.blit(self._font.render(text, True, (230, 230, 230)), pos)

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        state = snapshot.current_piece_overlay
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(state), (self.margin, self.margin))
        panel_x = self.margin * 2 + state.shape[1] * self.cell_size
        self._text(screen, f"Score {snapshot.score}", (panel_x, self.margin))
        self._text(screen, f"Level {snapshot.level}", (panel_x, self.margin + 30))
        if snapshot.game_over:
            self._text(screen, "Game Over", (panel_x, self.margin + 80))
            self._text(screen, "R: restart", (panel_x, self.margin + 110))
        elif not snapshot.started:
            self._text(screen, "R: start", (panel_x, self.margin + 80))
