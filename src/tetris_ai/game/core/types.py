# src/tetris_ai/game/core/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

import numpy as np

from tetris_ai.game.core.pieces import PieceKind


class Action(Enum):
    LEFT = auto()
    RIGHT = auto()
    SOFT_DROP = auto()
    HARD_DROP = auto()
    ROT_CW = auto()
    ROT_CCW = auto()
    HOLD = auto()


@dataclass(frozen=True)
class ActivePiece:
    kind: PieceKind
    rot: int
    x: int
    y: int


@dataclass(frozen=True)
class GameSnapshot:
    """
    Read-only copy of the live game handed to the search.

    Contracts:
      - grid is a bool (H, W) occupancy COPY; the search may keep or discard it.
      - held is the reserved piece (or None); can_hold says whether it may be
        swapped in this turn. The search only considers held when can_hold.
      - queue is ordered, queue[0] spawns next.
    """

    grid: np.ndarray
    active: ActivePiece
    held: Optional[PieceKind]
    can_hold: bool
    queue: Tuple[PieceKind, ...]

    score: int
    lines: int
    level: int
    game_over: bool

    @property
    def current(self) -> PieceKind:
        return self.active.kind

    @property
    def usable_held(self) -> Optional[PieceKind]:
        return self.held if self.can_hold else None


__all__ = ["Action", "ActivePiece", "GameSnapshot"]
