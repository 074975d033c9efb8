# tests/test_board.py
from __future__ import annotations

import numpy as np
import pytest

from tetris_ai.errors import BoardShapeError
from tetris_ai.game.core.board import Board, as_grid, cells_above_top, clear_full_lines, stamp
from tetris_ai.game.core.pieces import PieceKind, piece_shape


def _empty() -> np.ndarray:
    return np.zeros((20, 10), dtype=bool)


def test_clear_full_lines_removes_rows_and_shifts_down() -> None:
    g = _empty()
    g[18:, :] = True
    g[17, 0] = True

    out, cleared = clear_full_lines(g)

    assert cleared == 2
    assert out.shape == (20, 10)
    assert bool(out[19, 0]) is True
    assert int(out.sum()) == 1
    # input untouched
    assert int(g.sum()) == 21


def test_clear_full_lines_is_idempotent() -> None:
    g = _empty()
    g[19, :] = True
    g[15, :] = True
    g[16, 3] = True

    once, c1 = clear_full_lines(g)
    twice, c2 = clear_full_lines(once)

    assert c1 == 2
    assert c2 == 0
    assert np.array_equal(once, twice)


def test_stamp_copies_and_drops_off_grid_cells() -> None:
    g = _empty()
    o = piece_shape(PieceKind.O, 0)

    out = stamp(g, o, 9, 18)
    assert int(out.sum()) == 2
    assert bool(out[18, 9]) and bool(out[19, 9])
    assert int(g.sum()) == 0

    above = stamp(g, piece_shape(PieceKind.I, 0), 0, -1)
    assert int(above.sum()) == 0


def test_stamp_then_clear_without_full_rows_round_trips() -> None:
    g = _empty()
    g[19, :5] = True
    stamped = stamp(g, piece_shape(PieceKind.T, 0), 6, 18)

    out, cleared = clear_full_lines(stamped)

    assert cleared == 0
    assert np.array_equal(out, stamped)


def test_cells_above_top() -> None:
    i_vertical = piece_shape(PieceKind.I, 1)
    assert cells_above_top(i_vertical, 0) == 0
    assert cells_above_top(i_vertical, -1) == 1
    assert cells_above_top(i_vertical, -4) == 4
    assert cells_above_top(piece_shape(PieceKind.T, 0), -1) == 1


def test_as_grid_normalizes_lists_and_ids() -> None:
    rows = [[0] * 10 for _ in range(20)]
    rows[19][4] = 3
    g = as_grid(rows)
    assert g.dtype == np.bool_
    assert bool(g[19, 4]) is True
    assert int(g.sum()) == 1


def test_as_grid_never_aliases_input() -> None:
    src = _empty()
    g = as_grid(src)
    g[0, 0] = True
    assert bool(src[0, 0]) is False


@pytest.mark.parametrize("shape", [(19, 10), (20, 11), (10, 20)])
def test_as_grid_rejects_wrong_dimensions(shape: tuple[int, int]) -> None:
    with pytest.raises(BoardShapeError, match="board shape"):
        as_grid(np.zeros(shape, dtype=bool))


def test_as_grid_rejects_non_2d() -> None:
    with pytest.raises(BoardShapeError, match="2D"):
        as_grid(np.zeros(200, dtype=bool))


def test_board_clear_full_lines_updates_in_place() -> None:
    b = Board.empty()
    b.grid[19, :] = 2
    b.grid[18, 0] = 5

    assert b.clear_full_lines() == 1
    assert int(b.grid[19, 0]) == 5
    assert int(np.count_nonzero(b.occupancy())) == 1
