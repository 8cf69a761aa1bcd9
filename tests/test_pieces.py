import random

import pytest

from termblocks.game.pieces import SHAPES, Color, Piece, PieceFactory, Position, TetrominoType


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_every_rotation_has_four_distinct_cells_in_box(kind):
    shape = SHAPES[kind]
    assert 1 <= shape.symmetry <= 4
    for rotation in range(shape.symmetry):
        piece = Piece(kind, Color.RED, rotation=rotation, x=3, y=5)
        cells = piece.cells()
        assert len(set(cells)) == 4
        assert all(3 <= x < 7 and 5 <= y < 9 for x, y in cells)


def test_cells_are_origin_plus_offsets():
    piece = Piece(TetrominoType.O, Color.BLUE, x=2, y=7)
    assert sorted(piece.cells()) == [(3, 7), (3, 8), (4, 7), (4, 8)]


def test_cells_at_candidate_position_leave_piece_untouched():
    piece = Piece(TetrominoType.I, Color.CYAN, rotation=0, x=0, y=0)
    assert piece.cells(Position(4, 2, 1)) == [(4, 3), (5, 3), (6, 3), (7, 3)]
    assert piece.position == Position(0, 0, 0)


def test_rotation_wraps_modulo_symmetry():
    piece = Piece(TetrominoType.S, Color.GREEN, rotation=1)
    assert piece.moved(0, 0, 1).rotation == 0
    square = Piece(TetrominoType.O, Color.GREEN)
    assert square.moved(0, 0, 1).rotation == 0
    t = Piece(TetrominoType.T, Color.GREEN, rotation=3)
    assert t.moved(1, 1, 1) == Position(1, 1, 0)


def test_factory_is_reproducible_with_seeded_rng():
    a = PieceFactory(random.Random(7))
    b = PieceFactory(random.Random(7))
    for _ in range(20):
        pa, pb = a(), b()
        assert (pa.kind, pa.rotation, pa.color) == (pb.kind, pb.rotation, pb.color)
        assert 0 <= pa.rotation < pa.symmetry


def test_factory_sets_visibility():
    assert PieceFactory(random.Random(1))(visible=False).visible is False


def test_kind_and_color_are_fixed_after_creation():
    piece = Piece(TetrominoType.T, Color.RED)
    with pytest.raises(AttributeError):
        piece.color = Color.BLUE
    with pytest.raises(AttributeError):
        piece.kind = TetrominoType.O
    piece.position = Position(2, 3, 1)
    piece.visible = False
    assert (piece.kind, piece.color, piece.position) == (TetrominoType.T, Color.RED, Position(2, 3, 1))
