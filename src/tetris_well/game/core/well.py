# src/tetris_well/game/core/well.py
from __future__ import annotations

import logging

import numpy as np

from tetris_well.game.core.constants import HEIGHT, WIDTH
from tetris_well.game.core.errors import OutOfBoundsError
from tetris_well.game.core.pieceset import Footprint
from tetris_well.game.core.types import Coord

logger = logging.getLogger(__name__)


class Well:
    """
    Fixed-size occupancy grid that pieces are dropped into.

    Orientation:
      - grid[row, col], row 0 is the TOP of the well, row HEIGHT-1 the floor
      - first_used_row is the high-water mark of the stack (smallest row ever written,
        shifted down as rows are cleared)

    Height contract:
      height() == HEIGHT - first_used_row. A fresh well starts at first_used_row = HEIGHT-1
      and therefore reports height 1, not 0.
    """

    def __init__(self) -> None:
        self.grid: np.ndarray = np.zeros((HEIGHT, WIDTH), dtype=bool)
        self.first_used_row: int = HEIGHT - 1
        self.lines_cleared: int = 0
        self.pieces_placed: int = 0

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    def height(self) -> int:
        return HEIGHT - self.first_used_row

    def occupied_count(self) -> int:
        return int(self.grid.sum())

    def can_place(self, footprint: Footprint, coord: Coord) -> bool:
        """
        True iff every filled cell of `footprint` with its reference at `coord` is inside
        the floor and on an empty cell. Cells above row 0 are still falling and count as free.
        """
        if coord.row >= HEIGHT:
            return False
        for cell in footprint.cells_at(coord):
            if cell.row >= HEIGHT:
                return False
            if cell.row < 0:
                continue
            if self.grid[cell.row, cell.col]:
                return False
        return True

    def find_lowest_row(self, footprint: Footprint, column: int) -> int:
        """
        Resting reference row for `footprint` dropped at `column`.

        The fall starts one row above the global high-water mark, whatever the
        stack looks like under `column`, and steps down until the next row is illegal.
        """
        row = self.first_used_row - 1
        while self.can_place(footprint, Coord(row + 1, column)):
            row += 1
        return row

    # ------------------------------------------------------------------
    # mutation
    # ------------------------------------------------------------------
    def place(self, footprint: Footprint, column: int) -> None:
        self._check_columns(footprint, column)

        lowest_row = self.find_lowest_row(footprint, column)
        cells = footprint.cells_at(Coord(lowest_row, column))

        top = min(c.row for c in cells)
        if top < 0:
            raise OutOfBoundsError(
                f"{footprint.kind.value} at column {column} does not fit: stack reaches the top of the well",
                column=column,
            )

        for cell in cells:
            self.grid[cell.row, cell.col] = True
        self.first_used_row = min(self.first_used_row, top)
        self.pieces_placed += 1

        logger.debug(
            "placed %s col=%d rest_row=%d first_used_row=%d",
            footprint.kind.value,
            column,
            lowest_row,
            self.first_used_row,
        )
        self.clear_rows()

    def clear_rows(self) -> int:
        """
        Remove every full row and let everything above it fall by one row.

        Rows are scanned from the high-water mark (as it was when the scan started)
        down to the floor. Shifting a cleared row's upper neighbours into it only moves
        rows that were already scanned, so a single pass clears several full rows.
        Returns the number of rows removed.
        """
        cleared = 0
        for row in range(self.first_used_row, HEIGHT):
            if not bool(self.grid[row].all()):
                continue
            self.grid[1 : row + 1] = self.grid[0:row].copy()
            self.grid[0] = False
            if self.first_used_row < HEIGHT:
                self.first_used_row += 1
            cleared += 1

        if cleared:
            self.lines_cleared += cleared
            logger.debug("cleared %d row(s), first_used_row=%d", cleared, self.first_used_row)
        return cleared

    # ------------------------------------------------------------------
    # display
    # ------------------------------------------------------------------
    def render(self, rows: int = 10) -> str:
        """Bottom `rows` rows, labelled with their height above the floor."""
        n = max(0, min(int(rows), HEIGHT))
        lines = []
        for rownum in range(HEIGHT - n, HEIGHT):
            cells = "".join("X" if v else "." for v in self.grid[rownum])
            lines.append(f"{HEIGHT - rownum:2}: {cells}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------
    @staticmethod
    def _check_columns(footprint: Footprint, column: int) -> None:
        lo, hi = footprint.col_span()
        if column + lo < 0 or column + hi >= WIDTH:
            raise OutOfBoundsError(
                f"{footprint.kind.value} at column {column} spans columns "
                f"{column + lo}..{column + hi}, outside 0..{WIDTH - 1}",
                column=column,
            )


__all__ = ["Well"]
