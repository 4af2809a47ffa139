from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional, Sequence

import pygame

from falling_blocks.game import Action, FallingBlockGame, GameConfig
from .renderer import Renderer


logger = logging.getLogger(__name__)

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.SOFT_DROP,
}


def handle_key(game: FallingBlockGame, key: int) -> bool:
    """Apply one key press; returns False when the player asked to quit."""
    if key == pygame.K_ESCAPE:
        return False
    if key == pygame.K_r:
        if not game.is_playing:
            game.init_game()
        return True
    action = KEY_TO_ACTION.get(key)
    if action is not None:
        game.submit_intent(action)
    return True


def run(seed: Optional[int] = None, cell_size: int = 28) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = FallingBlockGame(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game.grid.height, game.grid.width))
        pygame.display.set_caption("Falling Blocks")

        # Opens NotStarted; R starts the first game and restarts after game over
        last_fall = pygame.time.get_ticks()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    was_playing = game.is_playing
                    if not handle_key(game, event.key):
                        running = False
                    if game.is_playing and not was_playing:
                        last_fall = pygame.time.get_ticks()

            # Gravity follows the engine's level-dependent interval
            now = pygame.time.get_ticks()
            if game.is_playing and now - last_fall >= game.tick_interval_ms:
                game.on_tick()
                last_fall = now

            renderer.draw(screen, game.get_state())
            pygame.display.flip()
            clock.tick(60)
        logger.info("Session ended: score %d, level %d", game.score, game.level)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks with the keyboard.")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(seed=args.seed, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
