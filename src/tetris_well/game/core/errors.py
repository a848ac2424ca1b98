# src/tetris_well/game/core/errors.py
from __future__ import annotations

from typing import Optional


class WellError(Exception):
    """Base class for everything the simulator raises on bad input."""


class UnknownShapeError(WellError, KeyError):
    def __init__(self, identifier: str, *, known: Optional[str] = None) -> None:
        self.identifier = identifier
        msg = f"unknown shape {identifier!r}"
        if known:
            msg += f". known shapes={known!r}"
        super().__init__(msg)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class OutOfBoundsError(WellError, ValueError):
    def __init__(self, message: str, *, column: int) -> None:
        self.column = int(column)
        super().__init__(message)


class MalformedInputError(WellError, ValueError):
    def __init__(self, message: str, *, token: str) -> None:
        self.token = token
        super().__init__(message)


__all__ = ["WellError", "UnknownShapeError", "OutOfBoundsError", "MalformedInputError"]
