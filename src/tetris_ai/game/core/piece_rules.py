# src/tetris_ai/game/core/piece_rules.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from tetris_ai.game.core.pieces import PieceKind


class PieceRule(ABC):
    """
    Source of upcoming pieces for the preview queue.

    reset() binds the game's generator and the kinds to deal; next_piece()
    draws one kind. Rules never seed their own generator, so one game seed
    reproduces the whole sequence.
    """

    @abstractmethod
    def reset(self, *, rng: np.random.Generator, kinds: Sequence[PieceKind]) -> None:
        raise NotImplementedError

    @abstractmethod
    def next_piece(self) -> PieceKind:
        raise NotImplementedError


def _bind(name: str, kinds: Sequence[PieceKind]) -> tuple[PieceKind, ...]:
    out = tuple(PieceKind(int(k)) for k in kinds)
    if not out:
        raise ValueError(f"{name}: kinds must not be empty")
    return out


@dataclass
class UniformPieceRule(PieceRule):
    """Each draw is independent and uniform (the classic browser dealer)."""

    _rng: np.random.Generator | None = None
    _kinds: tuple[PieceKind, ...] = ()

    def reset(self, *, rng: np.random.Generator, kinds: Sequence[PieceKind]) -> None:
        self._kinds = _bind("uniform", kinds)
        self._rng = rng

    def next_piece(self) -> PieceKind:
        if self._rng is None:
            raise RuntimeError("uniform: call reset() before drawing pieces")
        return self._kinds[int(self._rng.integers(0, len(self._kinds)))]


@dataclass
class Bag7PieceRule(PieceRule):
    """
    Deals shuffled bags: every kind appears exactly once per len(kinds) draws,
    which bounds droughts to 12 pieces for the classic set.
    """

    _rng: np.random.Generator | None = None
    _kinds: tuple[PieceKind, ...] = ()
    _bag: List[PieceKind] = field(default_factory=list)

    def reset(self, *, rng: np.random.Generator, kinds: Sequence[PieceKind]) -> None:
        self._kinds = _bind("bag7", kinds)
        self._rng = rng
        self._bag.clear()

    def next_piece(self) -> PieceKind:
        if self._rng is None:
            raise RuntimeError("bag7: call reset() before drawing pieces")
        if not self._bag:
            order = self._rng.permutation(len(self._kinds)).tolist()
            # dealt from the end
            self._bag = [self._kinds[i] for i in reversed(order)]
        return self._bag.pop()


def make_piece_rule(name: str) -> PieceRule:
    rule = str(name).strip().lower()
    if rule == "uniform":
        return UniformPieceRule()
    if rule == "bag7":
        return Bag7PieceRule()
    raise ValueError(f"unknown piece_rule={rule!r} (expected uniform|bag7)")


__all__ = ["PieceRule", "UniformPieceRule", "Bag7PieceRule", "make_piece_rule"]
