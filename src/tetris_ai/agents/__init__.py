# src/tetris_ai/agents/__init__.py
from __future__ import annotations

from tetris_ai.agents.config import AutoPlayConfig, HeuristicWeights, SearchConfig
from tetris_ai.agents.evaluator import DEFAULT_WEIGHTS, evaluate, score_metrics
from tetris_ai.agents.executor import AutoPlayer, AutoPlayStats, MovePlan, plan_actions
from tetris_ai.agents.search import BestMove, MoveSearch, find_best_move

__all__ = [
    "AutoPlayConfig",
    "AutoPlayer",
    "AutoPlayStats",
    "BestMove",
    "DEFAULT_WEIGHTS",
    "HeuristicWeights",
    "MovePlan",
    "MoveSearch",
    "SearchConfig",
    "evaluate",
    "find_best_move",
    "plan_actions",
    "score_metrics",
]
