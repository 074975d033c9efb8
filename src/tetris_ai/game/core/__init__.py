# src/tetris_ai/game/core/__init__.py
from __future__ import annotations

from tetris_ai.game.core.board import Board, clear_full_lines, stamp
from tetris_ai.game.core.game import TetrisGame
from tetris_ai.game.core.pieces import PieceKind, piece_kind, piece_shape, rotate
from tetris_ai.game.core.placements import Placement, enumerate_placements
from tetris_ai.game.core.simulate import SimPlacementResult, simulate_placement
from tetris_ai.game.core.types import Action, ActivePiece, GameSnapshot

__all__ = [
    "Action",
    "ActivePiece",
    "Board",
    "GameSnapshot",
    "PieceKind",
    "Placement",
    "SimPlacementResult",
    "TetrisGame",
    "clear_full_lines",
    "enumerate_placements",
    "piece_kind",
    "piece_shape",
    "rotate",
    "simulate_placement",
    "stamp",
]
