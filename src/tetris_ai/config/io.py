# src/tetris_ai/config/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel

from tetris_ai.agents.config import SearchConfig
from tetris_ai.config.root import AppConfig


def to_plain_dict(cfg: Any) -> dict[str, Any]:
    if isinstance(cfg, BaseModel):
        return cfg.model_dump(mode="json")
    if isinstance(cfg, DictConfig):
        data = OmegaConf.to_container(cfg, resolve=True)
        if not isinstance(data, dict):
            raise TypeError("config must resolve to a mapping")
        return data
    raise TypeError(f"unsupported config type: {type(cfg).__name__}")


def load_yaml(path: Path) -> dict[str, Any]:
    cfg_path = Path(path)
    if not cfg_path.is_file():
        raise FileNotFoundError(f"config file not found: {cfg_path}")
    cfg = OmegaConf.load(cfg_path)
    data = OmegaConf.to_container(cfg, resolve=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"config({path}) must be a mapping")
    return data


def load_app_config(path: Path | None = None) -> AppConfig:
    """Load the root config; a missing path yields the documented defaults."""
    if path is None:
        return AppConfig()
    return AppConfig.model_validate(load_yaml(path))


def load_search_config(path: Path) -> SearchConfig:
    """Accepts either a bare search mapping or a full app config with a `search:` section."""
    data = load_yaml(path)
    if "search" in data and isinstance(data["search"], dict):
        data = data["search"]
    return SearchConfig.model_validate(data)


def save_search_config(cfg: SearchConfig, path: Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(config=OmegaConf.create(to_plain_dict(cfg)), f=out)
    return out


__all__ = [
    "to_plain_dict",
    "load_yaml",
    "load_app_config",
    "load_search_config",
    "save_search_config",
]
