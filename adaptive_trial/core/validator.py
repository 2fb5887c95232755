"""Input validation utilities."""

from __future__ import annotations

from numbers import Integral
from typing import Iterable, List

from pydantic import ValidationError as PydanticValidationError

from ..models.design import DesignConfig
from ..models.scenario import ScenarioConfig, ScenarioLike, as_scenario


class ValidationError(Exception):
    """Custom error for validation related issues."""


def validate_simulation_count(n_simulations: int) -> None:
    """Reject replication counts that cannot produce a result."""
    if (
        isinstance(n_simulations, bool)
        or not isinstance(n_simulations, Integral)
        or n_simulations < 1
    ):
        raise ValidationError(f"n_simulations must be a positive integer, got {n_simulations!r}")


def validate_chunk_size(chunk_size: int) -> int:
    """Replications per random stream must be a positive integer."""
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, Integral) or chunk_size < 1:
        raise ValidationError(f"chunk_size must be a positive integer, got {chunk_size!r}")
    return int(chunk_size)


def validate_design(design: object) -> DesignConfig:
    """Ensure a usable design was supplied."""
    if not isinstance(design, DesignConfig):
        raise ValidationError(
            f"Expected a DesignConfig, got {type(design).__name__}"
        )
    return design


def coerce_scenarios(values: Iterable[ScenarioLike]) -> List[ScenarioConfig]:
    """Build scenarios from pairs, surfacing model errors as ``ValidationError``."""
    scenarios: List[ScenarioConfig] = []
    seen = set()
    duplicates: List[str] = []
    for value in values:
        try:
            scenario = as_scenario(value)
        except (PydanticValidationError, TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid scenario {value!r}: {exc}") from exc
        if scenario.scenario_id in seen:
            duplicates.append(scenario.scenario_id)
        seen.add(scenario.scenario_id)
        scenarios.append(scenario)
    if duplicates:
        raise ValidationError(
            "Duplicate scenario_id values detected: " + ", ".join(sorted(set(duplicates)))
        )
    if not scenarios:
        raise ValidationError("At least one scenario is required.")
    return scenarios


__all__ = [
    "ValidationError",
    "validate_simulation_count",
    "validate_chunk_size",
    "validate_design",
    "coerce_scenarios",
]
