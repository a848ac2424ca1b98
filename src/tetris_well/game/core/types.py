# src/tetris_well/game/core/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tetris_well.game.core.errors import UnknownShapeError


class ShapeKind(str, Enum):
    """The seven tetromino kinds, keyed by their one-character identifier."""

    Q = "Q"
    Z = "Z"
    S = "S"
    T = "T"
    I = "I"  # noqa: E741
    L = "L"
    J = "J"

    @classmethod
    def parse(cls, identifier: str) -> "ShapeKind":
        try:
            return cls(identifier)
        except ValueError as e:
            raise UnknownShapeError(str(identifier), known="".join(k.value for k in cls)) from e


@dataclass(frozen=True)
class Coord:
    """
    A cell in the well.

    Row 0 is the top of the well; larger rows are closer to the floor.
    """

    row: int
    col: int
