# src/tetris_ai/config/root.py
from __future__ import annotations

from pydantic import Field, field_validator

from tetris_ai.agents.config import AutoPlayConfig, SearchConfig
from tetris_ai.config.base import ConfigBase
from tetris_ai.game.config import GameConfig
from tetris_ai.utils.logging import LOG_LEVELS


class AppConfig(ConfigBase):
    log_level: str = "info"
    use_rich: bool = True
    game: GameConfig = Field(default_factory=GameConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    autoplay: AutoPlayConfig = Field(default_factory=AutoPlayConfig)

    @field_validator("log_level", mode="before")
    @classmethod
    def _log_level_known(cls, v: object) -> str:
        s = str(v).strip().lower()
        if s not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(LOG_LEVELS)}, got {v!r}")
        return s


__all__ = ["AppConfig"]
