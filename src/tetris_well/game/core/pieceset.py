# src/tetris_well/game/core/pieceset.py
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import yaml

from tetris_well.game.core.constants import EXPECTED_CELLS, SHAPE_HEIGHT, SHAPE_WIDTH
from tetris_well.game.core.errors import UnknownShapeError
from tetris_well.game.core.types import Coord, ShapeKind
from tetris_well.utils.paths import pieces_dir


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that refuses repeated mapping keys instead of keeping the last one."""


def _construct_unique_mapping(loader: _UniqueKeyLoader, node: yaml.MappingNode, deep: bool = False) -> dict:
    seen = set()
    for key_node, _ in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in seen:
            raise ValueError(f"duplicate key {key!r} in piece YAML (line {key_node.start_mark.line + 1})")
        seen.add(key)
    return loader.construct_mapping(node, deep=deep)


_UniqueKeyLoader.add_constructor(yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_unique_mapping)


def _parse_rows(kind: str, rows: Sequence[str]) -> np.ndarray:
    """
    Parse rows drawn top-to-bottom into a bottom-first bool mask of shape (SHAPE_HEIGHT, SHAPE_WIDTH).
    """
    if not isinstance(rows, (list, tuple)) or len(rows) != SHAPE_HEIGHT:
        raise ValueError(f"{kind!r}: 'rows' must be a list of {SHAPE_HEIGHT} strings, got {rows!r}")

    out: List[List[bool]] = []
    for r in rows:
        if not isinstance(r, str) or len(r) != SHAPE_WIDTH:
            raise ValueError(f"{kind!r}: rows must be strings of width {SHAPE_WIDTH}, got {r!r}")
        bad = set(r) - {"#", "."}
        if bad:
            raise ValueError(f"{kind!r}: rows may only contain '#' and '.', got {sorted(bad)!r}")
        out.append([ch == "#" for ch in r])

    # flipud: row 0 of the mask is the bottom of the piece
    return np.flipud(np.asarray(out, dtype=bool)).copy()


@dataclass(frozen=True, eq=False)
class Footprint:
    """
    Relative cell occupancy of one piece kind.

    mask is a read-only (3, 4) bool array. Row 0 is the BOTTOM row of the piece and
    (0, 0) is the bottom-left reference cell that sits at the drop column.
    """

    kind: ShapeKind
    mask: np.ndarray

    @classmethod
    def from_mask(cls, kind: ShapeKind, mask: np.ndarray) -> "Footprint":
        m = np.array(mask, dtype=bool)
        if m.shape != (SHAPE_HEIGHT, SHAPE_WIDTH):
            raise ValueError(f"footprint mask must be {(SHAPE_HEIGHT, SHAPE_WIDTH)}, got {m.shape}")
        m.setflags(write=False)
        return cls(kind=kind, mask=m)

    def offsets(self) -> Tuple[Tuple[int, int], ...]:
        """Filled (row, col) offsets, bottom row first, left to right."""
        rows, cols = np.nonzero(self.mask)
        return tuple((int(r), int(c)) for r, c in zip(rows, cols))

    def cell_count(self) -> int:
        return int(self.mask.sum())

    def col_span(self) -> Tuple[int, int]:
        cols = np.flatnonzero(self.mask.any(axis=0))
        return int(cols.min()), int(cols.max())

    def cells_at(self, coord: Coord) -> List[Coord]:
        """
        Absolute cells when the reference cell sits at `coord`.

        Footprint rows grow upwards while well rows grow downwards, hence the subtraction.
        """
        return [Coord(coord.row - r, coord.col + c) for r, c in self.offsets()]


@dataclass(frozen=True)
class ShapeCatalog:
    """
    Immutable mapping ShapeKind -> Footprint, loaded from YAML.

    Asset contract:
      - every kind of the alphabet is defined exactly once, nothing else
      - each footprint is 3 rows x 4 cols with exactly `expected_cells` filled cells
    """

    footprints: Dict[ShapeKind, Footprint]

    @staticmethod
    def default_classic7_path() -> Path:
        return pieces_dir() / "classic7.yaml"

    @classmethod
    def from_yaml(cls, path: Path, *, expected_cells: Optional[int] = None) -> "ShapeCatalog":
        p = Path(path)
        data = yaml.load(p.read_text(encoding="utf-8"), Loader=_UniqueKeyLoader)

        if not isinstance(data, dict):
            raise ValueError(f"piece YAML must be a mapping at top-level, got {type(data)!r}")

        if expected_cells is None:
            v = data.get("expected_cells", EXPECTED_CELLS)
            if isinstance(v, bool) or not isinstance(v, (int, str)):
                raise TypeError(f"expected_cells must be int or str, got {type(v)!r}")
            expected_cells = int(v)

        pieces_node = data.get("pieces")
        if not isinstance(pieces_node, dict) or not pieces_node:
            raise ValueError("piece YAML must contain non-empty mapping 'pieces:'")

        footprints: Dict[ShapeKind, Footprint] = {}
        for key, spec in pieces_node.items():
            kind = ShapeKind.parse(str(key))
            if not isinstance(spec, dict):
                raise ValueError(f"piece spec for {key!r} must be a mapping, got {type(spec)!r}")

            fp = Footprint.from_mask(kind, _parse_rows(str(key), spec.get("rows")))
            if fp.cell_count() != int(expected_cells):
                raise ValueError(f"{key!r}: expected {expected_cells} filled cells, got {fp.cell_count()}")
            footprints[kind] = fp

        missing = [k.value for k in ShapeKind if k not in footprints]
        if missing:
            raise ValueError(f"piece YAML is missing kinds {missing!r}")

        return cls(footprints=footprints)

    def kinds(self) -> Tuple[ShapeKind, ...]:
        return tuple(self.footprints.keys())

    def __contains__(self, identifier: object) -> bool:
        try:
            return ShapeKind(identifier) in self.footprints
        except ValueError:
            return False

    def get(self, kind: ShapeKind) -> Footprint:
        return self.footprints[kind]

    def resolve(self, identifier: str) -> Footprint:
        """
        Footprint for a one-character shape identifier.

        Raises UnknownShapeError for anything outside {Q,Z,S,T,I,L,J}.
        """
        return self.get(ShapeKind.parse(identifier))


@lru_cache(maxsize=1)
def default_catalog() -> ShapeCatalog:
    return ShapeCatalog.from_yaml(ShapeCatalog.default_classic7_path())


def resolve(identifier: str) -> Footprint:
    return default_catalog().resolve(identifier)


__all__ = ["Footprint", "ShapeCatalog", "default_catalog", "resolve", "UnknownShapeError"]
