# tests/test_pieces.py
from __future__ import annotations

import numpy as np
import pytest

from tetris_ai.errors import InvalidPieceError, TetrisAIError
from tetris_ai.game.core.pieces import PieceKind, distinct_rotations, piece_kind, piece_shape, rotate


@pytest.mark.parametrize("kind", list(PieceKind))
def test_rotate_four_times_is_identity(kind: PieceKind) -> None:
    base = piece_shape(kind, 0)
    m = base
    for _ in range(4):
        m = rotate(m)
    assert m.shape == base.shape
    assert np.array_equal(m, base)


@pytest.mark.parametrize("kind", list(PieceKind))
def test_every_rotation_has_four_cells(kind: PieceKind) -> None:
    for rot in range(4):
        assert int(np.count_nonzero(piece_shape(kind, rot))) == 4


def test_rotate_is_clockwise() -> None:
    t_right = piece_shape(PieceKind.T, 1)
    expected = np.array([[1, 0], [1, 1], [1, 0]], dtype=bool)
    assert np.array_equal(t_right, expected)

    i_vertical = piece_shape(PieceKind.I, 1)
    assert i_vertical.shape == (4, 1)


def test_cached_shapes_are_read_only() -> None:
    m = piece_shape(PieceKind.L, 2)
    with pytest.raises(ValueError):
        m[0, 0] = not m[0, 0]


def test_distinct_rotations_by_symmetry() -> None:
    assert distinct_rotations(PieceKind.O) == (0,)
    assert distinct_rotations(PieceKind.I) == (0, 1)
    assert distinct_rotations(PieceKind.S) == (0, 1)
    assert distinct_rotations(PieceKind.Z) == (0, 1)
    assert distinct_rotations(PieceKind.T) == (0, 1, 2, 3)
    assert distinct_rotations(PieceKind.J) == (0, 1, 2, 3)


def test_piece_kind_accepts_ids_letters_and_enum() -> None:
    assert piece_kind(0) is PieceKind.I
    assert piece_kind(6) is PieceKind.L
    assert piece_kind(np.int64(2)) is PieceKind.T
    assert piece_kind("s") is PieceKind.S
    assert piece_kind(" Z ") is PieceKind.Z
    assert piece_kind(PieceKind.O) is PieceKind.O
    assert [k.letter for k in PieceKind] == ["I", "O", "T", "S", "Z", "J", "L"]


@pytest.mark.parametrize("bad", [7, -1, 100, True, "X", "", 1.5, None])
def test_piece_kind_rejects_invalid_ids(bad: object) -> None:
    with pytest.raises(InvalidPieceError):
        piece_kind(bad)  # type: ignore[arg-type]


def test_invalid_piece_error_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="out of range"):
        piece_kind(9)
    assert issubclass(InvalidPieceError, TetrisAIError)
