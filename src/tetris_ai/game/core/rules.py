# src/tetris_ai/game/core/rules.py
from __future__ import annotations

from dataclasses import dataclass

LINES_PER_LEVEL: int = 10


@dataclass(frozen=True)
class ScoreConfig:
    single: int = 100
    double: int = 300
    triple: int = 500
    tetris: int = 800


def score_for_clears(cleared: int, cfg: ScoreConfig, *, level: int = 1) -> int:
    """Points for one lock; the base value is multiplied by the current level."""
    if cleared == 1:
        base = cfg.single
    elif cleared == 2:
        base = cfg.double
    elif cleared == 3:
        base = cfg.triple
    elif cleared >= 4:
        base = cfg.tetris
    else:
        return 0
    return int(base) * max(1, int(level))


def level_for_lines(lines: int) -> int:
    # levels start at 1 and go up every LINES_PER_LEVEL cleared lines
    return int(lines) // LINES_PER_LEVEL + 1


__all__ = ["ScoreConfig", "score_for_clears", "level_for_lines", "LINES_PER_LEVEL"]
