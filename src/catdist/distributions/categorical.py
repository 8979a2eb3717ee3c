"""Categorical (generalised Bernoulli) distribution over outcomes ``0..k-1``."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
import pandas as pd

from ..core import ArgumentIntervalError, ArrayLike, ParamError, UniformSource

logger = logging.getLogger(__name__)


def is_valid_prob_mass(weights: ArrayLike) -> bool:
    """Return ``True`` when ``weights`` can parameterise a categorical distribution."""
    try:
        arr = np.asarray(weights, dtype=float)
    except (TypeError, ValueError):
        return False
    return bool(
        arr.ndim == 1
        and arr.size > 0
        and np.all(np.isfinite(arr))
        and np.all(arr >= 0.0)
        and np.any(arr > 0.0)
    )


def _validated(weights: ArrayLike) -> np.ndarray:
    try:
        arr = np.asarray(weights, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ParamError(f"Weights must be numeric: {exc}") from exc
    if arr.ndim != 1:
        raise ParamError(f"Weights must be one-dimensional, got shape {arr.shape}.")
    if arr.size == 0:
        raise ParamError("Weights must contain at least one category.")
    if np.any(np.isnan(arr)):
        raise ParamError("Weights must not contain NaN.")
    if np.any(arr < 0.0):
        raise ParamError("Weights must be non-negative.")
    if not np.all(np.isfinite(arr)):
        raise ParamError("Weights must be finite.")
    if not np.any(arr > 0.0):
        raise ParamError("Weights must not all be zero.")
    return arr


@dataclass(frozen=True, slots=True, eq=False)
class Categorical:
    """Categorical distribution backed by an unnormalised cumulative array.

    Build instances with :meth:`from_weights`; ``cumulative[i]`` holds the sum of
    the raw weights ``0..i`` and ``normalized_mass[i]`` the probability of
    outcome ``i``. Both arrays are read-only.
    """

    normalized_mass: np.ndarray
    cumulative: np.ndarray

    def __post_init__(self) -> None:
        mass = np.array(self.normalized_mass, dtype=float)
        cumulative = np.array(self.cumulative, dtype=float)
        if mass.ndim != 1 or mass.shape != cumulative.shape or mass.size == 0:
            raise ParamError(
                "normalized_mass and cumulative must be non-empty 1-D arrays of equal length."
            )
        if not np.all(np.isfinite(cumulative)) or not np.all(np.isfinite(mass)):
            raise ParamError("normalized_mass and cumulative must be finite.")
        weights = np.diff(cumulative, prepend=0.0)
        if np.any(weights < 0.0):
            raise ParamError("cumulative must be non-negative and non-decreasing.")
        total = float(cumulative[-1])
        if total <= 0.0:
            raise ParamError("cumulative must end in a positive total mass.")
        if not np.allclose(mass, weights / total, rtol=1e-9, atol=1e-9):
            raise ParamError("normalized_mass must equal the weights divided by cumulative[-1].")
        mass.flags.writeable = False
        cumulative.flags.writeable = False
        object.__setattr__(self, "normalized_mass", mass)
        object.__setattr__(self, "cumulative", cumulative)

    @classmethod
    def from_weights(cls, weights: ArrayLike) -> Categorical:
        """Build a distribution from non-negative, not-all-zero weights.

        Raises :class:`~catdist.core.ParamError` for empty input, negative,
        NaN or infinite weights, and all-zero weights.
        """
        arr = _validated(weights)
        # left-to-right accumulation keeps cumulative[i] aligned with weights[i]
        with np.errstate(over="ignore"):
            cumulative = np.cumsum(arr)
        total = float(cumulative[-1])
        if not math.isfinite(total):
            raise ParamError("Total weight overflows to infinity.")
        mass = arr / total
        logger.debug("Built categorical distribution over %d outcomes (total=%g)", arr.size, total)
        return cls(normalized_mass=mass, cumulative=cumulative)

    @property
    def n_categories(self) -> int:
        return int(self.cumulative.size)

    @property
    def cdf_max(self) -> float:
        """Total unnormalised mass."""
        return float(self.cumulative[-1])

    def __len__(self) -> int:
        return self.n_categories

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Categorical):
            return NotImplemented
        return bool(
            np.array_equal(self.normalized_mass, other.normalized_mass)
            and np.array_equal(self.cumulative, other.cumulative)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Categorical(normalized_mass={self.normalized_mass.tolist()})"

    def sample(self, rng: UniformSource) -> int:
        """Draw one outcome using a single uniform value from ``rng``.

        A linear inverse-CDF scan over the unnormalised cumulative array.
        A zero-probability category is never selected, including when the
        uniform draw is exactly ``0.0``.
        """
        draw = float(rng.random()) * self.cdf_max
        cumulative = self.cumulative
        idx = 0
        if draw == 0.0:
            # skip leading zero-probability categories; at least one weight is positive
            while cumulative[idx] == 0.0:
                idx += 1
        while draw > cumulative[idx]:
            idx += 1
        return idx

    def sample_n(self, size: int, rng: UniformSource) -> np.ndarray:
        """Draw ``size`` outcomes with a binary search, one uniform value per draw."""
        if size < 0:
            raise ValueError("size must be non-negative.")
        if isinstance(rng, np.random.Generator):
            uniforms = rng.random(size)
        else:
            uniforms = np.fromiter((rng.random() for _ in range(size)), dtype=float, count=size)
        draws = np.asarray(uniforms, dtype=float) * self.cdf_max
        # first index with draw <= cumulative[idx]
        indices = np.searchsorted(self.cumulative, draws, side="left")
        zero = draws == 0.0
        if np.any(zero):
            indices[zero] = np.searchsorted(self.cumulative, 0.0, side="right")
        return indices.astype(np.int64)

    def cdf(self, x: float) -> float:
        """Evaluate the CDF at ``x``.

        ``x`` must lie in ``[0, k]``; anything else (NaN included) raises
        :class:`~catdist.core.ArgumentIntervalError`. Non-integer ``x`` is
        floored, so the CDF is a right-continuous step function.
        """
        k = self.n_categories
        if not 0.0 <= x <= k:
            raise ArgumentIntervalError("x", 0.0, float(k))
        if x == k:
            return 1.0
        return float(self.cumulative[math.floor(x)] / self.cdf_max)

    def pmf(self, x: float) -> float:
        """Probability of outcome ``x``; ``0.0`` off the integer support."""
        if not float(x).is_integer() or not 0 <= x < self.n_categories:
            return 0.0
        return float(self.normalized_mass[int(x)])

    def mean(self) -> float:
        total = 0.0
        for idx, mass in enumerate(self.normalized_mass):
            total += idx * float(mass)
        return total

    def variance(self) -> float:
        mu = self.mean()
        total = 0.0
        for idx, mass in enumerate(self.normalized_mass):
            total += float(mass) * (idx - mu) ** 2
        return total

    def entropy(self) -> float:
        """Shannon entropy in nats; zero-mass outcomes contribute nothing."""
        mass = self.normalized_mass[self.normalized_mass > 0.0]
        return float(-np.sum(mass * np.log(mass)))

    def min(self) -> int:
        return 0

    def max(self) -> int:
        return self.n_categories - 1

    def summary_frame(self) -> pd.DataFrame:
        """Return a tidy per-outcome table (outcome, cumulative, probability, cdf)."""
        return pd.DataFrame(
            {
                "outcome": np.arange(self.n_categories),
                "cumulative": self.cumulative,
                "probability": self.normalized_mass,
                "cdf": self.cumulative / self.cdf_max,
            }
        )


__all__ = ["Categorical", "is_valid_prob_mass"]
