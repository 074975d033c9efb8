# src/tetris_ai/__init__.py
from __future__ import annotations

from tetris_ai.agents import BestMove, HeuristicWeights, MoveSearch, SearchConfig, evaluate, find_best_move
from tetris_ai.errors import BoardShapeError, InvalidPieceError, SearchDepthError, TetrisAIError
from tetris_ai.game.core import PieceKind, Placement, TetrisGame, enumerate_placements, simulate_placement

__version__ = "0.1.0"

__all__ = [
    "BestMove",
    "BoardShapeError",
    "HeuristicWeights",
    "InvalidPieceError",
    "MoveSearch",
    "PieceKind",
    "Placement",
    "SearchConfig",
    "SearchDepthError",
    "TetrisAIError",
    "TetrisGame",
    "enumerate_placements",
    "evaluate",
    "find_best_move",
    "simulate_placement",
]
