# src/tetris_well/config/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any

from omegaconf import OmegaConf

from tetris_well.config.run import RunConfig


def load_yaml(path: Path) -> dict[str, Any]:
    cfg_path = Path(path)
    cfg = OmegaConf.load(cfg_path)
    data = OmegaConf.to_container(cfg, resolve=True)
    if not isinstance(data, dict):
        raise TypeError(f"config({path}) must be a mapping")
    return {str(k): v for k, v in data.items()}


def load_run_config(path: Path) -> RunConfig:
    return RunConfig.model_validate(load_yaml(path))


__all__ = ["load_yaml", "load_run_config"]
