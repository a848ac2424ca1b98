# src/tetris_well/game/simulate.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from tetris_well.game.core.pieceset import ShapeCatalog, default_catalog
from tetris_well.game.core.types import ShapeKind
from tetris_well.game.core.well import Well


@dataclass(frozen=True)
class Placement:
    """One already-decided drop: a piece kind and the column of its bottom-left cell."""

    kind: ShapeKind
    column: int

    def __str__(self) -> str:
        return f"{self.kind.value}{self.column}"


@dataclass(frozen=True)
class SimulationResult:
    """
    Outcome of dropping one full sequence into a fresh well.

    height follows Well.height() (an empty sequence reports 1).
    """
    height: int
    lines_cleared: int
    pieces: int
    well: Well


def simulate(placements: Iterable[Placement], *, catalog: Optional[ShapeCatalog] = None) -> SimulationResult:
    """
    Drop `placements` in order into a new Well.

    Any error (unknown shape, out-of-bounds column) propagates and aborts the run.
    """
    cat = catalog if catalog is not None else default_catalog()
    well = Well()

    for p in placements:
        well.place(cat.get(p.kind), int(p.column))

    return SimulationResult(
        height=well.height(),
        lines_cleared=well.lines_cleared,
        pieces=well.pieces_placed,
        well=well,
    )


__all__ = ["Placement", "SimulationResult", "simulate"]
