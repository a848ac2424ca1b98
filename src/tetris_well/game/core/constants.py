# src/tetris_well/game/core/constants.py
from __future__ import annotations

# Well dimensions. HEIGHT is oversized so a piece never overflows the top in practice.
WIDTH: int = 10
HEIGHT: int = 100

# Footprint bounding box (rows x cols)
SHAPE_HEIGHT: int = 3
SHAPE_WIDTH: int = 4

# Every tetromino footprint has exactly this many filled cells
EXPECTED_CELLS: int = 4
