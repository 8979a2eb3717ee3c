"""Named weight-table registry and YAML configuration loading."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ..core import ParamError
from .categorical import Categorical

logger = logging.getLogger(__name__)

ENV_VAR = "CATDIST_TABLES"


@dataclass(slots=True)
class WeightTable:
    """Describe a named set of categorical weights with metadata."""

    name: str
    weights: tuple[float, ...]
    notes: str | None = None

    def build(self) -> Categorical:
        """Construct the categorical distribution described by this table."""
        return Categorical.from_weights(self.weights)


_REGISTRY: dict[str, WeightTable] = {}


def list_tables() -> Iterable[str]:
    """Return registered table names."""
    return sorted(_REGISTRY.keys())


def get_table(name: str) -> WeightTable:
    """Retrieve a weight table by name."""
    key = name.lower()
    if key not in _REGISTRY:
        raise KeyError(f"Unknown weight table '{name}'.")
    return _REGISTRY[key]


def register_table(table: WeightTable, *, overwrite: bool = False) -> None:
    """Register a weight table after checking its weights build a distribution."""
    key = table.name.lower()
    if key in _REGISTRY and not overwrite:
        raise ValueError(f"Weight table '{table.name}' already registered.")
    table.build()
    _REGISTRY[key] = table


def clear_registry() -> None:
    """Reset the registry (primarily for testing)."""
    _REGISTRY.clear()


def _table_from_mapping(candidate: Mapping[str, Any]) -> WeightTable:
    if "name" not in candidate or "weights" not in candidate:
        raise ValueError("Weight table entries require 'name' and 'weights' keys.")
    raw_weights = candidate["weights"]
    if isinstance(raw_weights, str | bytes) or not isinstance(raw_weights, Iterable):
        raise ParamError("Weight table 'weights' must be a list of numbers.")
    return WeightTable(
        name=str(candidate["name"]),
        weights=tuple(float(value) for value in raw_weights),
        notes=candidate.get("notes"),
    )


def load_yaml_config(path: str | os.PathLike[str]) -> list[str]:
    """Load additional weight tables from a YAML configuration file."""
    path = Path(path)
    if not path.exists():
        logger.debug("Skipping weight table config %s (file not found)", path)
        return []

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        logger.warning("Failed to parse weight table config %s: %s", path, exc)
        return []
    if not isinstance(data, Mapping):
        logger.warning("Weight table config %s must be a mapping with a 'tables' key", path)
        return []

    registered: list[str] = []
    for item in data.get("tables", []) or []:
        try:
            if not isinstance(item, Mapping):
                raise ValueError("entry is not a mapping")
            table = _table_from_mapping(item)
            register_table(table, overwrite=item.get("overwrite", True))
        except (ParamError, ValueError, TypeError) as exc:
            logger.warning(
                "Failed to register weight table from %s (spec=%s): %s",
                path,
                item,
                exc,
            )
            continue
        registered.append(table.name)
    return registered


def load_env_config(var: str = ENV_VAR) -> list[str]:
    """Load every YAML file listed in ``var`` (``os.pathsep``-separated)."""
    env_paths = os.environ.get(var)
    if not env_paths:
        return []
    registered: list[str] = []
    for item in env_paths.split(os.pathsep):
        if item:
            registered.extend(load_yaml_config(item))
    return registered


__all__ = [
    "ENV_VAR",
    "WeightTable",
    "list_tables",
    "get_table",
    "register_table",
    "clear_registry",
    "load_yaml_config",
    "load_env_config",
]
