# src/tetris_ai/game/core/metrics.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from tetris_ai.game.core.constants import EMPTY_CELL


@dataclass(frozen=True)
class BoardSnapshotMetrics:
    """
    Structural features of a LOCKED board (no active-piece overlay).

    holes:
      empty cells that have at least one occupied cell above in same column
    bumpiness:
      sum(abs(h[i+1] - h[i])) over column heights
    row_transitions / col_transitions:
      occupancy changes between adjacent cells; an occupied cell touching a
      side wall (rows) or the top/bottom edge (columns) counts once, i.e.
      outside the board is treated as empty
    well_depth / well_depth_sq:
      per-column max(0, min(left, right) - h), summed and summed squared;
      a wall takes the height of the other neighbour
    near_complete_rows:
      +2 per row with >= W-1 filled cells, +1 per row with >= W-2
    """
    heights: tuple[int, ...]
    agg_height: int
    max_height: int
    holes: int
    bumpiness: int
    row_transitions: int
    col_transitions: int
    well_depth: int
    well_depth_sq: int
    near_complete_rows: int


def board_snapshot_metrics_from_grid(grid: np.ndarray) -> BoardSnapshotMetrics:
    """
    Compute board metrics from a LOCKED board grid (bool occupancy or ids).

    Performance:
      - no grid copies beyond one bool occupancy view
      - temporary arrays are board-sized and vectorized
    """
    _ensure_2d_grid(grid)

    occ = _occ_from_grid(grid)
    heights = _column_heights_from_occ(occ)

    wells = _well_depths_from_heights(heights)
    return BoardSnapshotMetrics(
        heights=tuple(int(v) for v in heights.tolist()),
        agg_height=int(heights.sum()) if heights.size > 0 else 0,
        max_height=int(heights.max()) if heights.size > 0 else 0,
        holes=_count_holes_from_occ(occ),
        bumpiness=_bumpiness_from_heights(heights),
        row_transitions=_row_transitions_from_occ(occ),
        col_transitions=_col_transitions_from_occ(occ),
        well_depth=int(wells.sum()),
        well_depth_sq=int((wells * wells).sum()),
        near_complete_rows=_near_complete_rows_from_occ(occ),
    )


# -----------------------------------------------------------------------------
# Internals
# -----------------------------------------------------------------------------
def _ensure_2d_grid(grid: np.ndarray) -> None:
    if not isinstance(grid, np.ndarray):
        raise TypeError(f"grid must be np.ndarray, got {type(grid).__name__}")
    if grid.ndim != 2:
        raise ValueError(f"grid must be 2D, got shape={getattr(grid, 'shape', None)}")


def _occ_from_grid(grid: np.ndarray) -> np.ndarray:
    if grid.dtype == np.bool_:
        return grid
    return np.not_equal(grid, EMPTY_CELL)


def _column_heights_from_occ(occ: np.ndarray) -> np.ndarray:
    h, _w = occ.shape
    any_filled = occ.any(axis=0)

    # argmax returns 0 when all-false; mask those to 0 height
    first_filled = np.argmax(occ, axis=0)
    return np.where(any_filled, h - first_filled, 0).astype(np.int64, copy=False)


def _count_holes_from_occ(occ: np.ndarray) -> int:
    # filled_seen[y,x] True if any filled cell exists at or above y in that column
    filled_seen = np.maximum.accumulate(occ, axis=0)
    return int(np.sum((~occ) & filled_seen))


def _bumpiness_from_heights(heights: np.ndarray) -> int:
    if heights.size <= 1:
        return 0
    return int(np.abs(np.diff(heights)).sum())


def _row_transitions_from_occ(occ: np.ndarray) -> int:
    inner = int(np.count_nonzero(occ[:, 1:] != occ[:, :-1]))
    walls = int(np.count_nonzero(occ[:, 0])) + int(np.count_nonzero(occ[:, -1]))
    return inner + walls


def _col_transitions_from_occ(occ: np.ndarray) -> int:
    inner = int(np.count_nonzero(occ[1:, :] != occ[:-1, :]))
    edges = int(np.count_nonzero(occ[0, :])) + int(np.count_nonzero(occ[-1, :]))
    return inner + edges


def _well_depths_from_heights(heights: np.ndarray) -> np.ndarray:
    if heights.size <= 1:
        return np.zeros_like(heights)
    left = np.empty_like(heights)
    right = np.empty_like(heights)
    left[1:] = heights[:-1]
    right[:-1] = heights[1:]
    left[0] = right[0]
    right[-1] = left[-1]
    return np.maximum(0, np.minimum(left, right) - heights)


def _near_complete_rows_from_occ(occ: np.ndarray) -> int:
    w = int(occ.shape[1])
    filled = occ.sum(axis=1)
    return int(2 * np.count_nonzero(filled >= w - 1) + np.count_nonzero(filled >= w - 2))


__all__ = ["BoardSnapshotMetrics", "board_snapshot_metrics_from_grid"]
