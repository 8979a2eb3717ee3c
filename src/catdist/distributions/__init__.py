"""Categorical distribution and the built-in weight-table registry."""

from __future__ import annotations

from .base import (
    ENV_VAR,
    WeightTable,
    clear_registry,
    get_table,
    list_tables,
    load_env_config,
    load_yaml_config,
    register_table,
)
from .categorical import Categorical, is_valid_prob_mass

__all__ = [
    "Categorical",
    "is_valid_prob_mass",
    "WeightTable",
    "ENV_VAR",
    "get_table",
    "list_tables",
    "register_table",
    "clear_registry",
    "load_yaml_config",
    "load_env_config",
    "STANDARD_TABLES",
]


STANDARD_TABLES = [
    WeightTable(
        name="uniform4",
        weights=(1.0, 1.0, 1.0, 1.0),
        notes="Four equally likely outcomes.",
    ),
    WeightTable(
        name="fair_die",
        weights=(0.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0),
        notes="Six-sided die indexed by face value; outcome 0 never occurs.",
    ),
    WeightTable(
        name="biased_coin",
        weights=(0.75, 0.25),
        notes="Bernoulli trial with success probability 0.25.",
    ),
]


def _register_builtin() -> None:
    for table in STANDARD_TABLES:
        register_table(table, overwrite=True)


_register_builtin()
load_env_config()
