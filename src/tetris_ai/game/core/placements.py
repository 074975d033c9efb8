# src/tetris_ai/game/core/placements.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from tetris_ai.game.core.collision import collides
from tetris_ai.game.core.constants import DROP_START_Y, NUM_ROTATIONS, SPAWN_MARGIN
from tetris_ai.game.core.pieces import PieceKind, PieceLike, distinct_rotations, piece_kind, piece_shape


@dataclass(frozen=True)
class Placement:
    """
    Final resting pose of a piece.

    (x, y) is the board position of the rotated shape's top-left mask cell.
    y may be negative when part of the mask rests above the visible board.
    """

    kind: PieceKind
    rot: int
    x: int
    y: int

    @property
    def shape(self) -> np.ndarray:
        return piece_shape(self.kind, self.rot)

    def cells(self) -> List[Tuple[int, int]]:
        """Board (x, y) of every occupied cell, including rows above the top."""
        ys, xs = np.nonzero(self.shape)
        return [(int(self.x + xx), int(self.y + yy)) for yy, xx in zip(ys.tolist(), xs.tolist())]


def column_tops(grid: np.ndarray) -> np.ndarray:
    """Row index of the topmost occupied cell per column (grid height if empty)."""
    h = int(grid.shape[0])
    occ = np.asarray(grid, dtype=bool)
    any_filled = occ.any(axis=0)
    first = np.argmax(occ, axis=0)
    return np.where(any_filled, first, h).astype(np.int64, copy=False)


def _shape_bottoms(shape: np.ndarray) -> np.ndarray:
    # lowest occupied row per mask column; -1 for empty columns
    mh = int(shape.shape[0])
    any_filled = shape.any(axis=0)
    last = mh - 1 - np.argmax(shape[::-1, :], axis=0)
    return np.where(any_filled, last, -1)


def drop_y(
        grid: np.ndarray,
        shape: np.ndarray,
        x: int,
        *,
        start_y: int = DROP_START_Y,
        tops: Optional[np.ndarray] = None,
) -> Optional[int]:
    """
    Deepest y reached by dropping `shape` at column x from `start_y`.

    Equivalent to stepping y down one row at a time while the next row is
    collision-free: falling from above, each mask column stops on the topmost
    occupied cell (or the floor) of its board column. Returns None when the
    mask is out of column bounds or the start pose already collides.
    """
    gh, gw = grid.shape
    if tops is None:
        tops = column_tops(grid)

    bottoms = _shape_bottoms(shape)
    land = None
    for xx, bottom in enumerate(bottoms.tolist()):
        if bottom < 0:
            continue
        bx = x + xx
        if bx < 0 or bx >= gw:
            return None
        y_col = int(tops[bx]) - 1 - int(bottom)
        land = y_col if land is None else min(land, y_col)

    if land is None or land < start_y:
        return None
    return int(land)


def enumerate_placements(grid: np.ndarray, kind: PieceLike, *, unique: bool = False) -> List[Placement]:
    """
    Every legal (rot, x, y) resting placement of `kind` on `grid`.

    Order: rotation ascending, then x ascending. x spans
    [-SPAWN_MARGIN, W - width + SPAWN_MARGIN]; offsets that do not fit are
    filtered by the collision check rather than rejected up front.

    unique=True skips rotations whose shape already appeared at a lower
    rotation index (O keeps 1, I/S/Z keep 2). The first occurrence is kept,
    so a strict-max search over the result picks the same winner.
    """
    k = piece_kind(kind)
    _gh, gw = grid.shape
    tops = column_tops(grid)
    rots = distinct_rotations(k) if unique else tuple(range(NUM_ROTATIONS))

    out: List[Placement] = []
    for rot in rots:
        shape = piece_shape(k, rot)
        width = int(shape.shape[1])
        for x in range(-SPAWN_MARGIN, gw - width + SPAWN_MARGIN + 1):
            y = drop_y(grid, shape, x, tops=tops)
            if y is None:
                continue
            if collides(grid, shape, x, y):
                continue
            out.append(Placement(kind=k, rot=int(rot), x=int(x), y=int(y)))
    return out


__all__ = ["Placement", "column_tops", "drop_y", "enumerate_placements"]
