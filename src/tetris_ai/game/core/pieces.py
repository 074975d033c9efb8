# src/tetris_ai/game/core/pieces.py
from __future__ import annotations

from enum import IntEnum
from functools import lru_cache
from typing import Dict, Tuple, Union

import numpy as np

from tetris_ai.errors import InvalidPieceError
from tetris_ai.game.core.constants import NUM_PIECES, NUM_ROTATIONS


class PieceKind(IntEnum):
    """
    Canonical tetromino ids.

    The integer value is the external piece identifier (0..6) used by the
    game loop and the search boundary.
    """

    I = 0  # noqa: E741
    O = 1  # noqa: E741
    T = 2
    S = 3
    Z = 4
    J = 5
    L = 6

    @property
    def letter(self) -> str:
        return str(self.name)


PieceLike = Union[PieceKind, int, str]


def _parse_shape(rows: Tuple[str, ...]) -> np.ndarray:
    arr = np.asarray([[ch == "#" for ch in r] for r in rows], dtype=bool)
    arr.setflags(write=False)
    return arr


# Rotation 0 of every piece, one string per row.
_BASE_ROWS: Dict[PieceKind, Tuple[str, ...]] = {
    PieceKind.I: ("####",),
    PieceKind.O: ("##", "##"),
    PieceKind.T: (".#.", "###"),
    PieceKind.S: (".##", "##."),
    PieceKind.Z: ("##.", ".##"),
    PieceKind.J: ("#..", "###"),
    PieceKind.L: ("..#", "###"),
}

BASE_SHAPES: Dict[PieceKind, np.ndarray] = {k: _parse_shape(rows) for k, rows in _BASE_ROWS.items()}


def rotate(shape: np.ndarray) -> np.ndarray:
    """
    90° clockwise rotation of an (h, w) occupancy matrix into (w, h):

        out[c, h - 1 - r] = shape[r, c]

    Four applications return the input exactly.
    """
    m = np.asarray(shape)
    if m.ndim != 2:
        raise ValueError(f"shape must be 2D, got shape={m.shape}")
    h, w = m.shape
    out = np.zeros((w, h), dtype=m.dtype)
    for r in range(h):
        for c in range(w):
            out[c, h - 1 - r] = m[r, c]
    return out


def piece_kind(value: PieceLike) -> PieceKind:
    """
    Strict conversion of an external piece identifier to a PieceKind.

    Accepts PieceKind, ints 0..6 and piece letters ("I", "o", ...).
    Anything else raises InvalidPieceError; there is no default piece.
    """
    if isinstance(value, PieceKind):
        return value
    if isinstance(value, bool):
        raise InvalidPieceError(f"piece id must be an int in 0..{NUM_PIECES - 1}, got bool")
    if isinstance(value, (int, np.integer)):
        v = int(value)
        if v < 0 or v >= NUM_PIECES:
            raise InvalidPieceError(f"piece id out of range: {v} (valid 0..{NUM_PIECES - 1})")
        return PieceKind(v)
    if isinstance(value, str):
        s = value.strip().upper()
        try:
            return PieceKind[s]
        except KeyError as e:
            known = "".join(k.name for k in PieceKind)
            raise InvalidPieceError(f"unknown piece letter {value!r} (known: {known})") from e
    raise InvalidPieceError(f"piece id must be PieceKind|int|str, got {type(value).__name__}")


@lru_cache(maxsize=None)
def piece_rotations(kind: PieceKind) -> Tuple[np.ndarray, ...]:
    """All NUM_ROTATIONS shapes of `kind`, index = number of clockwise turns."""
    shape = BASE_SHAPES[piece_kind(kind)]
    out = []
    for _ in range(NUM_ROTATIONS):
        frozen = np.array(shape, dtype=bool, copy=True)
        frozen.setflags(write=False)
        out.append(frozen)
        shape = rotate(shape)
    return tuple(out)


def piece_shape(kind: PieceLike, rot: int) -> np.ndarray:
    return piece_rotations(piece_kind(kind))[int(rot) % NUM_ROTATIONS]


def distinct_rotations(kind: PieceLike) -> Tuple[int, ...]:
    """
    Rotation indices whose shape has not appeared at a lower index.

    O -> (0,), I/S/Z -> (0, 1), T/J/L -> (0, 1, 2, 3).
    """
    seen: list[np.ndarray] = []
    keep: list[int] = []
    for r, m in enumerate(piece_rotations(piece_kind(kind))):
        if any(s.shape == m.shape and bool(np.array_equal(s, m)) for s in seen):
            continue
        seen.append(m)
        keep.append(r)
    return tuple(keep)


__all__ = [
    "PieceKind",
    "PieceLike",
    "BASE_SHAPES",
    "rotate",
    "piece_kind",
    "piece_rotations",
    "piece_shape",
    "distinct_rotations",
]
