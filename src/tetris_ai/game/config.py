# src/tetris_ai/game/config.py
from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator

from tetris_ai.config.base import ConfigBase

PieceRuleName = Literal["uniform", "bag7"]


def _as_int(value: object, *, where: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{where} must be an int, got bool")
    if not isinstance(value, (int, float, str, bytes, bytearray)):
        raise ValueError(f"{where} must be an int-like value, got {type(value)!r}")
    try:
        return int(value)
    except Exception as e:
        raise ValueError(f"{where} must be an int-like value, got {type(value)!r}") from e


class GameConfig(ConfigBase):
    """
    Live-game config (driver-facing).

    seed:
      default RNG seed; reset(seed=...) overrides it per game
    piece_rule:
      uniform -> independent uniform draws (classic browser behaviour)
      bag7    -> shuffled 7-bags
    preview_size:
      number of upcoming pieces exposed to the search (next + queue)
    """

    seed: int = Field(default=12345, ge=0)
    piece_rule: PieceRuleName = "uniform"
    preview_size: int = Field(default=3, ge=1, le=6)

    @field_validator("seed", mode="before")
    @classmethod
    def _seed_int(cls, v: object) -> int:
        return _as_int(v, where="game.seed")

    @field_validator("piece_rule", mode="before")
    @classmethod
    def _piece_rule_lower(cls, v: object) -> str:
        return str(v).strip().lower()


__all__ = ["GameConfig", "PieceRuleName"]
