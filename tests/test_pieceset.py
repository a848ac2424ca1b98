from __future__ import annotations

from pathlib import Path

import pytest

from tetris_well.game.core.errors import UnknownShapeError
from tetris_well.game.core.pieceset import ShapeCatalog, default_catalog, resolve
from tetris_well.game.core.types import Coord, ShapeKind

# bottom row first
FOOTPRINTS = {
    "Q": ("1100", "1100", "0000"),
    "S": ("1100", "0110", "0000"),
    "Z": ("0110", "1100", "0000"),
    "T": ("0100", "1110", "0000"),
    "I": ("1111", "0000", "0000"),
    "L": ("1100", "1000", "1000"),
    "J": ("1100", "0100", "0100"),
}


def _bits(mask) -> tuple[str, ...]:
    return tuple("".join("1" if v else "0" for v in row) for row in mask)


@pytest.mark.parametrize("identifier", sorted(FOOTPRINTS))
def test_default_catalog_matches_footprint_table(identifier: str) -> None:
    fp = resolve(identifier)
    assert fp.kind is ShapeKind(identifier)
    assert fp.mask.shape == (3, 4)
    assert _bits(fp.mask) == FOOTPRINTS[identifier]


def test_every_footprint_has_four_cells() -> None:
    cat = default_catalog()
    assert set(cat.kinds()) == set(ShapeKind)
    for kind in cat.kinds():
        assert cat.get(kind).cell_count() == 4


@pytest.mark.parametrize("identifier", ["X", "q", "", "QQ", "O"])
def test_resolve_rejects_unknown_identifiers(identifier: str) -> None:
    with pytest.raises(UnknownShapeError, match="unknown shape") as exc:
        resolve(identifier)
    assert exc.value.identifier == identifier


def test_unknown_shape_is_a_key_error() -> None:
    with pytest.raises(KeyError):
        ShapeKind.parse("X")
    assert "X" not in default_catalog()
    assert "T" in default_catalog()


def test_footprint_mask_is_read_only() -> None:
    fp = resolve("Q")
    with pytest.raises(ValueError):
        fp.mask[0, 0] = False


def test_col_span() -> None:
    assert resolve("I").col_span() == (0, 3)
    assert resolve("Z").col_span() == (0, 2)
    assert resolve("L").col_span() == (0, 1)
    assert resolve("Q").col_span() == (0, 1)


def test_cells_at_translates_rows_upwards() -> None:
    at = Coord(10, 2)
    assert resolve("Q").cells_at(at) == [Coord(10, 2), Coord(10, 3), Coord(9, 2), Coord(9, 3)]
    assert resolve("S").cells_at(at) == [Coord(10, 2), Coord(10, 3), Coord(9, 3), Coord(9, 4)]
    assert resolve("Z").cells_at(at) == [Coord(10, 3), Coord(10, 4), Coord(9, 2), Coord(9, 3)]
    assert resolve("T").cells_at(at) == [Coord(10, 3), Coord(9, 2), Coord(9, 3), Coord(9, 4)]
    assert resolve("I").cells_at(at) == [Coord(10, 2), Coord(10, 3), Coord(10, 4), Coord(10, 5)]
    assert resolve("L").cells_at(at) == [Coord(10, 2), Coord(10, 3), Coord(9, 2), Coord(8, 2)]
    assert resolve("J").cells_at(at) == [Coord(10, 2), Coord(10, 3), Coord(9, 3), Coord(8, 3)]


def _write_pieces(tmp_path: Path, body: str) -> Path:
    p = tmp_path / "pieces.yaml"
    p.write_text(body, encoding="utf-8")
    return p


def _classic_with(kind: str, rows: tuple[str, str, str]) -> str:
    lines = ["expected_cells: 4", "pieces:"]
    for k in "QZSTILJ":
        r = rows if k == kind else None
        if r is None:
            fp = resolve(k)
            r = tuple("".join("#" if v else "." for v in row) for row in fp.mask[::-1])
        lines.append(f"  {k}:")
        lines.append("    rows:")
        lines.extend(f'      - "{row}"' for row in r)
    return "\n".join(lines) + "\n"


def test_from_yaml_roundtrips_packaged_table(tmp_path: Path) -> None:
    p = _write_pieces(tmp_path, _classic_with("Q", ("....", "##..", "##..")))
    cat = ShapeCatalog.from_yaml(p)
    for k in FOOTPRINTS:
        assert _bits(cat.resolve(k).mask) == FOOTPRINTS[k]


def test_from_yaml_rejects_wrong_cell_count(tmp_path: Path) -> None:
    p = _write_pieces(tmp_path, _classic_with("T", ("....", "###.", "##..")))
    with pytest.raises(ValueError, match="expected 4 filled cells"):
        ShapeCatalog.from_yaml(p)


def test_from_yaml_rejects_wrong_width(tmp_path: Path) -> None:
    p = _write_pieces(tmp_path, _classic_with("T", ("...", "###", ".#.")))
    with pytest.raises(ValueError, match="width 4"):
        ShapeCatalog.from_yaml(p)


def test_from_yaml_rejects_missing_kinds(tmp_path: Path) -> None:
    p = _write_pieces(tmp_path, 'pieces:\n  Q:\n    rows: ["....", "##..", "##.."]\n')
    with pytest.raises(ValueError, match="missing kinds"):
        ShapeCatalog.from_yaml(p)


def test_from_yaml_rejects_unknown_kind(tmp_path: Path) -> None:
    p = _write_pieces(tmp_path, 'pieces:\n  X:\n    rows: ["....", "##..", "##.."]\n')
    with pytest.raises(UnknownShapeError):
        ShapeCatalog.from_yaml(p)


def test_from_yaml_rejects_duplicate_kind(tmp_path: Path) -> None:
    body = _classic_with("Q", ("....", "##..", "##.."))
    body += '  Q:\n    rows:\n      - "...."\n      - "...."\n      - "####"\n'
    p = _write_pieces(tmp_path, body)
    with pytest.raises(ValueError, match="duplicate key 'Q'"):
        ShapeCatalog.from_yaml(p)
