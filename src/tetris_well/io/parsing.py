# src/tetris_well/io/parsing.py
from __future__ import annotations

import re
from typing import List

from tetris_well.game.core.errors import MalformedInputError
from tetris_well.game.core.types import ShapeKind
from tetris_well.game.simulate import Placement

_COLUMN_RE = re.compile(r"[0-9]+")


def parse_token(token: str) -> Placement:
    """
    Parse one drop token such as "Q0" or "I12".

    Contract:
      - surrounding whitespace is ignored
      - first character is the shape identifier (UnknownShapeError if not in Q,Z,S,T,I,L,J)
      - the remainder is a base-10 non-negative integer column (MalformedInputError otherwise)
    """
    t = str(token).strip()
    if not t:
        raise MalformedInputError("empty token", token=str(token))

    kind = ShapeKind.parse(t[0])

    rest = t[1:]
    if not _COLUMN_RE.fullmatch(rest):
        raise MalformedInputError(
            f"token {t!r} must be a shape letter followed by a non-negative column, got column {rest!r}",
            token=t,
        )
    return Placement(kind=kind, column=int(rest))


def parse_line(line: str, *, delimiter: str = ",") -> List[Placement]:
    """
    Split a line on `delimiter` and parse every token.

    A blank line is an empty sequence. Empty tokens inside a non-blank line are malformed.
    """
    if not delimiter:
        raise ValueError("delimiter must be non-empty")

    s = str(line).strip()
    if not s:
        return []
    return [parse_token(tok) for tok in s.split(delimiter)]


__all__ = ["parse_token", "parse_line"]
