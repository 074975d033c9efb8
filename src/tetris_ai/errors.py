# src/tetris_ai/errors.py
from __future__ import annotations


class TetrisAIError(Exception):
    """Base class for errors raised by the move-search engine."""


class InvalidPieceError(TetrisAIError, ValueError):
    """Piece identifier outside the 7 canonical tetrominoes."""


class BoardShapeError(TetrisAIError, ValueError):
    """Board snapshot does not have the fixed (rows, cols) shape."""


class SearchDepthError(TetrisAIError, ValueError):
    """Lookahead depth outside the supported range."""


__all__ = ["TetrisAIError", "InvalidPieceError", "BoardShapeError", "SearchDepthError"]
