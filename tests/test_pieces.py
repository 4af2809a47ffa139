import random

import numpy as np
import pytest

from falling_blocks.game import BASE_SHAPES, PALETTE_RGB, Piece, PieceGenerator, Position, TetrominoType, occupied_cells, rotate_cw


def test_shape_table_pairs_with_palette():
    assert len(BASE_SHAPES) == 7
    assert sorted(PALETTE_RGB) == list(range(8))
    for kind in TetrominoType:
        piece = Piece.of(kind)
        assert piece.color == int(kind) + 1
        assert int(piece.shape.sum()) == 4


def test_rotate_cw_is_transpose_with_reversed_rows():
    t = BASE_SHAPES[TetrominoType.T]
    assert np.array_equal(rotate_cw(t), np.array([[0, 1], [1, 1], [0, 1]], dtype=bool))
    i = BASE_SHAPES[TetrominoType.I]
    assert rotate_cw(i).shape == (4, 1)


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_four_rotations_restore_shape(kind):
    piece = Piece.of(kind)
    turned = piece.rotated().rotated().rotated().rotated()
    assert np.array_equal(turned.shape, piece.shape)
    assert turned.color == piece.color


def test_rotation_returns_new_piece():
    piece = Piece.of(TetrominoType.L)
    turned = piece.rotated()
    assert turned is not piece
    assert np.array_equal(piece.shape, BASE_SHAPES[TetrominoType.L])
    with pytest.raises(ValueError):
        piece.shape[0, 0] = False


def test_occupied_cells():
    piece = Piece.of(TetrominoType.T)
    assert sorted(occupied_cells(piece.shape, Position(5, 0))) == [(5, 0), (6, 0), (6, 1), (7, 0)]


def test_seeded_generators_agree():
    a = PieceGenerator(seed=11)
    b = PieceGenerator(rng=random.Random(11))
    assert [a.next_piece().kind for _ in range(30)] == [b.next_piece().kind for _ in range(30)]


def test_generator_covers_all_kinds():
    gen = PieceGenerator(seed=1)
    seen = {gen.next_piece().kind for _ in range(500)}
    assert seen == set(TetrominoType)
