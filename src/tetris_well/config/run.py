# src/tetris_well/config/run.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import field_validator

from tetris_well.config.base import ConfigBase

LogLevel = Literal["debug", "info", "warning", "error"]


class RunConfig(ConfigBase):
    """
    Run-time settings for the line simulator CLI.

      - delimiter: separator between drop tokens on one input line
      - pieces: optional path to an alternative piece YAML (defaults to the packaged classic7 set)
      - show_grid: log the bottom of the final well for every line (info level)
    """

    delimiter: str = ","
    log_level: LogLevel = "info"
    use_rich: bool = True
    show_grid: bool = False
    pieces: Optional[str] = None

    @field_validator("delimiter")
    @classmethod
    def _delimiter_non_empty(cls, v: str) -> str:
        if v == "":
            raise ValueError("delimiter must be non-empty")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _log_level_lower(cls, v: object) -> str:
        return str(v).strip().lower()

    @field_validator("pieces", mode="before")
    @classmethod
    def _pieces_blank_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v


__all__ = ["RunConfig", "LogLevel"]
