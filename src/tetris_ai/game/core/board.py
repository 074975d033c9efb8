# src/tetris_ai/game/core/board.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np

from tetris_ai.errors import BoardShapeError
from tetris_ai.game.core.constants import BOARD_H, BOARD_W, EMPTY_CELL


@dataclass
class Board:
    h: int
    w: int
    grid: np.ndarray  # locked blocks only (0=empty, >=1 piece ids)

    @classmethod
    def empty(cls, *, h: int = BOARD_H, w: int = BOARD_W) -> "Board":
        return cls(h=h, w=w, grid=np.zeros((h, w), dtype=np.uint8))

    def occupancy(self) -> np.ndarray:
        """Boolean copy of the grid, the form the search consumes."""
        return np.not_equal(self.grid, EMPTY_CELL)

    def clear_full_lines(self) -> int:
        self.grid, cleared = clear_full_lines(self.grid)
        return cleared


def as_grid(board: Any, *, h: int = BOARD_H, w: int = BOARD_W) -> np.ndarray:
    """
    Normalize a board snapshot into a bool (h, w) occupancy array.

    Accepts Board, numpy arrays (bool or ids) and nested lists. Any non-zero
    cell is occupied. The result never aliases the input.
    """
    if isinstance(board, Board):
        board = board.grid
    try:
        arr = np.asarray(board)
    except Exception as e:
        raise BoardShapeError(f"board snapshot is not array-like: {type(board).__name__}") from e
    if arr.ndim != 2:
        raise BoardShapeError(f"board must be 2D, got shape={arr.shape}")
    if arr.shape != (int(h), int(w)):
        raise BoardShapeError(f"board shape must be (h={h}, w={w}), got {arr.shape}")
    return np.not_equal(arr, EMPTY_CELL)


def stamp(grid: np.ndarray, shape: np.ndarray, x: int, y: int) -> np.ndarray:
    """
    Copy `grid` and mark every occupied cell of `shape` anchored at (x, y).

    Cells outside the grid (e.g. rows above the top) are dropped.
    """
    out = np.array(grid, copy=True)
    gh, gw = out.shape
    mh, mw = shape.shape
    fill = True if out.dtype == np.bool_ else 1
    for yy in range(mh):
        by = y + yy
        if by < 0 or by >= gh:
            continue
        for xx in range(mw):
            if not shape[yy, xx]:
                continue
            bx = x + xx
            if 0 <= bx < gw:
                out[by, bx] = fill
    return out


def cells_above_top(shape: np.ndarray, y: int) -> int:
    """Number of occupied shape cells that would sit above row 0."""
    if y >= 0:
        return 0
    rows = min(int(-y), int(shape.shape[0]))
    return int(np.count_nonzero(shape[:rows]))


def clear_full_lines(grid: np.ndarray) -> Tuple[np.ndarray, int]:
    """
    Pure line clear. Returns (new_grid, cleared).

    Full rows are removed, the rest keep their relative order and empty rows
    are prepended at the top. Does NOT mutate the input.
    """
    if grid.ndim != 2:
        raise ValueError(f"grid must be 2D, got shape={grid.shape}")

    full = np.all(grid != EMPTY_CELL, axis=1)
    cleared = int(full.sum())
    if cleared <= 0:
        return np.array(grid, copy=True), 0

    kept = grid[~full]
    new_rows = np.zeros((cleared, grid.shape[1]), dtype=grid.dtype)
    return np.vstack([new_rows, kept]), cleared


__all__ = ["Board", "as_grid", "stamp", "cells_above_top", "clear_full_lines"]
