# src/tetris_ai/game/core/collision.py
from __future__ import annotations

import numpy as np

from tetris_ai.game.core.board import Board
from tetris_ai.game.core.pieces import PieceKind, piece_shape


def collides(grid: np.ndarray, shape: np.ndarray, x: int, y: int) -> bool:
    """
    True if `shape` anchored at (x, y) is not a legal resting pose.

    A cell collides when it is outside the column bounds, at/below the floor,
    or on an occupied board cell. Rows above the board (y < 0) only get the
    column check; they model the hidden spawn area.
    """
    gh, gw = grid.shape
    mh, mw = shape.shape
    for yy in range(mh):
        by = y + yy
        for xx in range(mw):
            if not shape[yy, xx]:
                continue
            bx = x + xx
            if bx < 0 or bx >= gw or by >= gh:
                return True
            if by >= 0 and grid[by, bx]:
                return True
    return False


def piece_collides(*, board: Board, kind: PieceKind, rot: int, px: int, py: int) -> bool:
    return collides(board.grid, piece_shape(kind, rot), px, py)


def try_rotate(*, board: Board, kind: PieceKind, rot: int, px: int, py: int, dir: int) -> int:
    """
    Minimal rotation rule: no wall kicks. Returns the new rotation, or the
    old one when the rotated shape would collide.
    """
    nrot = (rot + dir) % 4
    if piece_collides(board=board, kind=kind, rot=nrot, px=px, py=py):
        return rot
    return nrot


__all__ = ["collides", "piece_collides", "try_rotate"]
