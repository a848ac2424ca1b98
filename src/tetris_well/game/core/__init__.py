# src/tetris_well/game/core/__init__.py
from __future__ import annotations

from tetris_well.game.core.constants import HEIGHT, WIDTH
from tetris_well.game.core.errors import MalformedInputError, OutOfBoundsError, UnknownShapeError, WellError
from tetris_well.game.core.pieceset import Footprint, ShapeCatalog, default_catalog, resolve
from tetris_well.game.core.types import Coord, ShapeKind
from tetris_well.game.core.well import Well

__all__ = [
    "HEIGHT",
    "WIDTH",
    "WellError",
    "UnknownShapeError",
    "OutOfBoundsError",
    "MalformedInputError",
    "Footprint",
    "ShapeCatalog",
    "default_catalog",
    "resolve",
    "Coord",
    "ShapeKind",
    "Well",
]
