"""Batch sampling utilities built on top of :class:`~catdist.distributions.Categorical`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

import numpy as np
from scipy.stats import chisquare

from ..core import ArrayLike
from ..distributions import Categorical

__all__ = [
    "SamplingConfig",
    "FrequencyCheck",
    "sample_categorical",
    "tabulate_draws",
    "frequency_check",
]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SamplingConfig:
    """Configuration controlling how batches of draws are produced."""

    search: Literal["linear", "binary"] = "binary"
    chunk_size: int = 65536


@dataclass(slots=True)
class FrequencyCheck:
    """Chi-square comparison of observed draw counts against the distribution."""

    statistic: float
    p_value: float
    dof: int


def _resolve_rng(random_state: np.random.Generator | int | None) -> np.random.Generator:
    if isinstance(random_state, np.random.Generator):
        return random_state
    return np.random.default_rng(random_state)


def sample_categorical(
    dist: Categorical,
    size: int,
    *,
    random_state: np.random.Generator | int | None = None,
    config: SamplingConfig | None = None,
) -> np.ndarray:
    """Draw ``size`` outcomes from ``dist``.

    Both search strategies consume one uniform value per draw and select the
    same outcome for the same uniform value.
    """
    if size < 0:
        raise ValueError("size must be non-negative.")
    cfg = config or SamplingConfig()
    if cfg.chunk_size <= 0:
        raise ValueError("chunk_size must be positive.")
    rng = _resolve_rng(random_state)

    if cfg.search == "linear":
        return np.fromiter((dist.sample(rng) for _ in range(size)), dtype=np.int64, count=size)
    if cfg.search != "binary":
        raise ValueError(f"Unknown search strategy '{cfg.search}'.")

    chunks: list[np.ndarray] = []
    remaining = size
    while remaining > 0:
        count = min(remaining, cfg.chunk_size)
        chunks.append(dist.sample_n(count, rng))
        remaining -= count
    if not chunks:
        return np.empty(0, dtype=np.int64)
    logger.debug("Drew %d categorical samples in %d chunk(s)", size, len(chunks))
    return np.concatenate(chunks)


def tabulate_draws(draws: ArrayLike, n_categories: int) -> np.ndarray:
    """Count how often each outcome ``0..n_categories-1`` occurs in ``draws``."""
    arr = np.asarray(draws, dtype=np.int64)
    if arr.size and (arr.min() < 0 or arr.max() >= n_categories):
        raise ValueError(f"Draws must lie in [0, {n_categories - 1}].")
    return np.bincount(arr, minlength=n_categories)


def frequency_check(dist: Categorical, draws: ArrayLike) -> FrequencyCheck:
    """Run a chi-square goodness-of-fit test of ``draws`` against ``dist``."""
    counts = tabulate_draws(draws, dist.n_categories)
    total = int(counts.sum())
    if total == 0:
        raise ValueError("At least one draw is required.")
    support = dist.normalized_mass > 0.0
    if np.any(counts[~support]):
        raise ValueError("Draws include zero-probability outcomes.")
    observed = counts[support].astype(float)
    expected = dist.normalized_mass[support] * total
    # rescale so both sides sum to exactly the same total
    expected *= observed.sum() / expected.sum()
    dof = int(observed.size - 1)
    if dof == 0:
        return FrequencyCheck(statistic=0.0, p_value=1.0, dof=0)
    result = chisquare(observed, f_exp=expected)
    return FrequencyCheck(
        statistic=float(result.statistic),
        p_value=float(result.pvalue),
        dof=dof,
    )
