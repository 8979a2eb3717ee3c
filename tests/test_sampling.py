import numpy as np
import pytest

from catdist.distributions import Categorical
from catdist.sampling import (
    FrequencyCheck,
    SamplingConfig,
    frequency_check,
    sample_categorical,
    tabulate_draws,
)


@pytest.mark.parametrize("search", ["linear", "binary"])
def test_sample_categorical_returns_expected_shape(search: str) -> None:
    dist = Categorical.from_weights([1.0, 2.0, 3.0])
    draws = sample_categorical(
        dist,
        500,
        random_state=np.random.default_rng(123),
        config=SamplingConfig(search=search),  # type: ignore[arg-type]
    )
    assert draws.shape == (500,)
    assert draws.dtype == np.int64
    assert np.all((draws >= dist.min()) & (draws <= dist.max()))


def test_linear_and_binary_search_agree() -> None:
    dist = Categorical.from_weights([0.0, 4.0, 2.5, 0.0, 2.5, 1.0])
    linear = sample_categorical(dist, 2000, random_state=99, config=SamplingConfig(search="linear"))
    binary = sample_categorical(dist, 2000, random_state=99, config=SamplingConfig(search="binary"))
    assert np.array_equal(linear, binary)


def test_chunking_does_not_change_draws() -> None:
    dist = Categorical.from_weights([1.0, 1.0, 2.0])
    whole = sample_categorical(dist, 1000, random_state=5)
    chunked = sample_categorical(dist, 1000, random_state=5, config=SamplingConfig(chunk_size=7))
    assert np.array_equal(whole, chunked)


def test_seed_is_reproducible() -> None:
    dist = Categorical.from_weights([0.2, 0.3, 0.5])
    first = sample_categorical(dist, 100, random_state=42)
    second = sample_categorical(dist, 100, random_state=42)
    assert np.array_equal(first, second)


def test_sample_categorical_rejects_bad_arguments() -> None:
    dist = Categorical.from_weights([1.0])
    with pytest.raises(ValueError):
        sample_categorical(dist, -1)
    with pytest.raises(ValueError):
        sample_categorical(dist, 10, config=SamplingConfig(chunk_size=0))
    with pytest.raises(ValueError):
        sample_categorical(dist, 10, config=SamplingConfig(search="bisect"))  # type: ignore[arg-type]
    assert sample_categorical(dist, 0).shape == (0,)


def test_tabulate_draws() -> None:
    counts = tabulate_draws([0, 2, 2, 3], 5)
    assert counts.tolist() == [1, 0, 2, 1, 0]
    with pytest.raises(ValueError):
        tabulate_draws([0, 5], 5)
    with pytest.raises(ValueError):
        tabulate_draws([-1], 5)


def test_frequency_check_accepts_matching_draws() -> None:
    dist = Categorical.from_weights([0.0, 0.25, 0.5, 0.25])
    draws = sample_categorical(dist, 20000, random_state=2024)
    counts = tabulate_draws(draws, dist.n_categories)
    assert counts[0] == 0
    assert np.allclose(counts / counts.sum(), dist.normalized_mass, atol=0.02)
    check = frequency_check(dist, draws)
    assert isinstance(check, FrequencyCheck)
    assert check.dof == 2
    assert check.p_value > 1e-4


def test_frequency_check_flags_mismatched_draws() -> None:
    dist = Categorical.from_weights([1.0, 1.0, 1.0, 1.0])
    check = frequency_check(dist, np.zeros(400, dtype=int))
    assert check.p_value < 1e-6


def test_frequency_check_rejects_zero_mass_outcomes() -> None:
    dist = Categorical.from_weights([0.0, 1.0, 1.0])
    with pytest.raises(ValueError):
        frequency_check(dist, [0, 1, 2])
    with pytest.raises(ValueError):
        frequency_check(dist, [])


def test_frequency_check_single_support() -> None:
    dist = Categorical.from_weights([0.0, 3.0])
    check = frequency_check(dist, [1, 1, 1])
    assert check == FrequencyCheck(statistic=0.0, p_value=1.0, dof=0)
