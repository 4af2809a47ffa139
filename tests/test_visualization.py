import pygame

from falling_blocks.game import Action, FallingBlockGame, GameConfig, GameStatus, PALETTE_RGB, TetrominoType, occupied_cells
from falling_blocks.visualization.human_play import KEY_TO_ACTION, build_parser, handle_key
from falling_blocks.visualization.renderer import Renderer

from helpers import started_game


def test_renderer_paints_current_piece():
    game = started_game([TetrominoType.L])
    renderer = Renderer(cell_size=10, margin=5)
    screen = pygame.Surface(renderer.window_size(20, 10))
    renderer.draw(screen, game.get_state())

    x, y = occupied_cells(game.current_piece.shape, game.position)[0]
    pixel = screen.get_at((5 + x * 10 + 3, 5 + y * 10 + 3))
    assert tuple(pixel)[:3] == PALETTE_RGB[game.current_piece.color]
    empty = screen.get_at((5 + 3, 5 + 19 * 10 + 3))
    assert tuple(empty)[:3] == PALETTE_RGB[0]


def test_keyboard_mapping_covers_every_intent():
    assert set(KEY_TO_ACTION.values()) == set(Action)
    assert KEY_TO_ACTION[pygame.K_UP] is Action.ROTATE


def test_play_parser_defaults():
    args = build_parser().parse_args(["--seed", "4"])
    assert args.seed == 4
    assert args.cell_size == 28
    assert args.log_level == "WARNING"


def test_front_end_waits_for_start_key():
    game = FallingBlockGame(GameConfig(random_seed=2))
    assert handle_key(game, pygame.K_LEFT)
    assert handle_key(game, pygame.K_DOWN)
    assert game.status is GameStatus.NOT_STARTED
    assert game.current_piece is None

    assert handle_key(game, pygame.K_r)
    assert game.status is GameStatus.PLAYING

    x = game.position.x
    handle_key(game, pygame.K_LEFT)
    assert game.position.x == x - 1
    assert not handle_key(game, pygame.K_ESCAPE)


def test_restart_key_ignored_while_playing():
    game = FallingBlockGame(GameConfig(random_seed=2))
    handle_key(game, pygame.K_r)
    game.move_down()
    position = game.position
    handle_key(game, pygame.K_r)
    assert game.position == position


def test_renderer_draws_empty_board_before_start():
    game = FallingBlockGame(GameConfig(random_seed=2))
    renderer = Renderer(cell_size=10, margin=5)
    screen = pygame.Surface(renderer.window_size(20, 10))
    renderer.draw(screen, game.get_state())
    for col, row in [(0, 0), (5, 0), (6, 1), (9, 19)]:
        pixel = screen.get_at((5 + col * 10 + 3, 5 + row * 10 + 3))
        assert tuple(pixel)[:3] == PALETTE_RGB[0]
