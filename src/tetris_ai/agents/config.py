# src/tetris_ai/agents/config.py
from __future__ import annotations

from pydantic import Field, ValidationInfo, field_validator, model_validator

from tetris_ai.config.base import ConfigBase

MAX_LOOKAHEAD_DEPTH = 3


class HeuristicWeights(ConfigBase):
    """
    Linear evaluator weights.

    The first four defaults are the classic aggregate-height / lines / holes /
    bumpiness set; the structural terms on top of them are small corrections.

    Sign contract:
      - lines must be > 0
      - holes must be < 0
      - height, bumpiness, transitions, max_height must be <= 0
    """

    agg_height: float = -0.510066
    lines: float = 0.760666
    holes: float = -0.35663
    bumpiness: float = -0.184483
    row_transitions: float = -0.1
    col_transitions: float = -0.1
    well_depth: float = -0.02
    well_depth_sq: float = -0.002
    near_complete_rows: float = 0.05
    max_height: float = 0.0

    @field_validator("lines")
    @classmethod
    def _lines_rewarded(cls, v: float) -> float:
        if float(v) <= 0.0:
            raise ValueError("weights.lines must be > 0")
        return v

    @field_validator("holes")
    @classmethod
    def _holes_penalized(cls, v: float) -> float:
        if float(v) >= 0.0:
            raise ValueError("weights.holes must be < 0")
        return v

    @field_validator("agg_height", "bumpiness", "row_transitions", "col_transitions", "max_height")
    @classmethod
    def _non_positive(cls, v: float, info: ValidationInfo) -> float:
        if float(v) > 0.0:
            raise ValueError(f"weights.{info.field_name} must be <= 0")
        return v


class SearchConfig(ConfigBase):
    """
    Move search parameters.

    lookahead_depth:
      number of queued pieces searched recursively (0 = immediate only)
    discount:
      factor applied to the best recursive score, 0 < discount < 1
    """

    weights: HeuristicWeights = Field(default_factory=HeuristicWeights)
    lookahead_depth: int = Field(default=1, ge=0, le=MAX_LOOKAHEAD_DEPTH)
    discount: float = Field(default=0.8, gt=0.0, lt=1.0)


class AutoPlayConfig(ConfigBase):
    """
    Move executor cadence.

    step_ms:
      >0 : fixed ms between executed actions
       0 : uncapped (headless runs)
    max_pieces:
      pieces to lock before run() returns (0 = until the player stops)
    """

    step_ms: int = Field(default=50, ge=0)
    reset_on_top_out: bool = True
    max_pieces: int = Field(default=500, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _reject_forced_hold(cls, data: object) -> object:
        if isinstance(data, dict) and any(str(k).startswith("force_hold") for k in data):
            raise ValueError("forced periodic hold is not supported; hold is chosen by the search")
        return data


__all__ = ["HeuristicWeights", "SearchConfig", "AutoPlayConfig", "MAX_LOOKAHEAD_DEPTH"]
