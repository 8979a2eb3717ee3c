"""Core type aliases, protocols and errors shared across catdist modules."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeAlias, runtime_checkable

import numpy as np

ArrayLike: TypeAlias = np.ndarray | Sequence[float]


@runtime_checkable
class UniformSource(Protocol):
    """Anything producing uniform floats in ``[0, 1)`` via ``random()``.

    ``numpy.random.Generator`` and ``random.Random`` both qualify.
    """

    def random(self) -> float: ...


class CatdistError(Exception):
    """Base exception for catdist errors."""


class ParamError(CatdistError, ValueError):
    """Raised when distribution parameters are invalid."""


class ArgumentIntervalError(CatdistError, AssertionError):
    """An argument fell outside its inclusive interval.

    This signals a caller bug rather than a recoverable condition.
    """

    def __init__(self, name: str, low: float, high: float) -> None:
        self.name = name
        self.low = low
        self.high = high
        super().__init__(f"Argument {name} must be in [{low}, {high}] inclusive")


__all__ = [
    "ArrayLike",
    "UniformSource",
    "CatdistError",
    "ParamError",
    "ArgumentIntervalError",
]
