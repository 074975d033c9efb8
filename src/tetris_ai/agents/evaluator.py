# src/tetris_ai/agents/evaluator.py
from __future__ import annotations

import numpy as np

from tetris_ai.agents.config import HeuristicWeights
from tetris_ai.game.core.metrics import BoardSnapshotMetrics, board_snapshot_metrics_from_grid

DEFAULT_WEIGHTS = HeuristicWeights()


def score_metrics(
        metrics: BoardSnapshotMetrics,
        *,
        cleared_lines: int,
        weights: HeuristicWeights = DEFAULT_WEIGHTS,
) -> float:
    """Φ(s): fixed linear combination of board features."""
    w = weights
    return (
            w.agg_height * float(metrics.agg_height)
            + w.lines * float(cleared_lines)
            + w.holes * float(metrics.holes)
            + w.bumpiness * float(metrics.bumpiness)
            + w.row_transitions * float(metrics.row_transitions)
            + w.col_transitions * float(metrics.col_transitions)
            + w.well_depth * float(metrics.well_depth)
            + w.well_depth_sq * float(metrics.well_depth_sq)
            + w.near_complete_rows * float(metrics.near_complete_rows)
            + w.max_height * float(metrics.max_height)
    )


def evaluate(grid: np.ndarray, cleared_lines: int = 0, *, weights: HeuristicWeights = DEFAULT_WEIGHTS) -> float:
    """Score a post-clear board; `cleared_lines` is the count removed to reach it."""
    return score_metrics(board_snapshot_metrics_from_grid(grid), cleared_lines=int(cleared_lines), weights=weights)


__all__ = ["DEFAULT_WEIGHTS", "score_metrics", "evaluate"]
