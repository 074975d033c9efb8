# src/tetris_ai/game/core/simulate.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from tetris_ai.game.core.board import cells_above_top, clear_full_lines, stamp
from tetris_ai.game.core.metrics import BoardSnapshotMetrics, board_snapshot_metrics_from_grid
from tetris_ai.game.core.placements import Placement


@dataclass(frozen=True)
class SimPlacementResult:
    """
    Result of simulating a placement on a LOCKED occupancy grid.

    Notes:
      - grid_after is a NEW array containing the post-lock, post-clear board.
      - cleared_lines is the number of removed rows.
      - metrics_after are computed from grid_after.
      - cells_above_top counts mask cells that rested above row 0 and were
        dropped by the stamp (they never reach the board).
    """
    grid_after: np.ndarray
    cleared_lines: int
    metrics_after: BoardSnapshotMetrics
    cells_above_top: int


def simulate_placement(grid: np.ndarray, placement: Placement) -> SimPlacementResult:
    """
    Pure, side-effect-free: stamp, clear full lines, measure.
    The input grid is never mutated.
    """
    shape = placement.shape
    locked = stamp(grid, shape, placement.x, placement.y)
    after, cleared = clear_full_lines(locked)
    return SimPlacementResult(
        grid_after=after,
        cleared_lines=int(cleared),
        metrics_after=board_snapshot_metrics_from_grid(after),
        cells_above_top=cells_above_top(shape, placement.y),
    )


__all__ = ["SimPlacementResult", "simulate_placement"]
