# tests/test_placements.py
from __future__ import annotations

import numpy as np
import pytest

from tetris_ai.game.core.collision import collides
from tetris_ai.game.core.pieces import PieceKind, piece_shape
from tetris_ai.game.core.placements import drop_y, enumerate_placements


def _random_board(seed: int) -> np.ndarray:
    rng = np.random.default_rng(seed)
    g = np.zeros((20, 10), dtype=bool)
    g[12:, :] = rng.random((8, 10)) < 0.55
    return g


def _stepped_drop(grid: np.ndarray, shape: np.ndarray, x: int) -> int | None:
    y = -4
    if collides(grid, shape, x, y):
        return None
    while not collides(grid, shape, x, y + 1):
        y += 1
    return y


@pytest.mark.parametrize("seed", [0, 1, 2])
@pytest.mark.parametrize("kind", list(PieceKind))
def test_every_placement_is_legal_and_resting(seed: int, kind: PieceKind) -> None:
    g = _random_board(seed)
    placements = enumerate_placements(g, kind)
    assert placements

    for p in placements:
        shape = p.shape
        assert not collides(g, shape, p.x, p.y)
        assert collides(g, shape, p.x, p.y + 1)
        for x, y in p.cells():
            assert 0 <= x < 10
            assert y < 20


@pytest.mark.parametrize("seed", [3, 4])
@pytest.mark.parametrize("kind", list(PieceKind))
def test_drop_y_matches_row_by_row_drop(seed: int, kind: PieceKind) -> None:
    g = _random_board(seed)
    g[10, 2] = True  # overhang
    for rot in range(4):
        shape = piece_shape(kind, rot)
        for x in range(-2, 10 - shape.shape[1] + 3):
            assert drop_y(g, shape, x) == _stepped_drop(g, shape, x)


def test_o_piece_on_empty_board() -> None:
    g = np.zeros((20, 10), dtype=bool)

    all_rots = enumerate_placements(g, PieceKind.O)
    assert len(all_rots) == 4 * 9
    assert {p.y for p in all_rots} == {18}

    unique = enumerate_placements(g, PieceKind.O, unique=True)
    assert [(p.rot, p.x) for p in unique] == [(0, x) for x in range(9)]


def test_i_piece_on_empty_board() -> None:
    g = np.zeros((20, 10), dtype=bool)

    unique = enumerate_placements(g, PieceKind.I, unique=True)
    flat = [p for p in unique if p.rot == 0]
    upright = [p for p in unique if p.rot == 1]

    assert len(flat) == 7 and {p.y for p in flat} == {19}
    assert len(upright) == 10 and {p.y for p in upright} == {16}
    assert len(enumerate_placements(g, PieceKind.I)) == 34


def test_enumeration_order_is_rotation_then_x() -> None:
    g = _random_board(7)
    keys = [(p.rot, p.x) for p in enumerate_placements(g, PieceKind.T)]
    assert keys == sorted(keys)


def test_placements_may_rest_above_the_top() -> None:
    g = np.ones((20, 10), dtype=bool)
    g[:, 9] = False
    g[0, 9] = True

    placements = enumerate_placements(g, PieceKind.O, unique=True)
    assert placements
    assert all(p.y < 0 for p in placements)
