"""Top-level package exports for catdist."""

from __future__ import annotations

from importlib import metadata

__version__ = "0.1.0"

try:
    __version__ = metadata.version("catdist")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev fallback
    pass

from . import core as core  # noqa: F401
from . import distributions as distributions  # noqa: F401
from . import sampling as sampling  # noqa: F401
from .core import ArgumentIntervalError, CatdistError, ParamError  # noqa: F401
from .distributions import Categorical  # noqa: F401
from .sampling import sample_categorical  # noqa: F401

__all__ = [
    "__version__",
    "core",
    "distributions",
    "sampling",
    "Categorical",
    "CatdistError",
    "ParamError",
    "ArgumentIntervalError",
    "sample_categorical",
]
