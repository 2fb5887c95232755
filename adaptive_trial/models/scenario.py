"""Scenario data models."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class ScenarioConfig(BaseModel):
    """True event rates for one simulated trial scenario."""

    model_config = ConfigDict(frozen=True)

    scenario_id: str = Field(..., description="Unique scenario identifier")
    p_control: float = Field(
        ..., gt=0.0, lt=1.0, description="Event probability in the control arm."
    )
    true_rrr: float = Field(
        ...,
        gt=0.0,
        lt=1.0,
        description="True relative risk reduction of the experimental arm.",
    )
    description: Optional[str] = Field(
        None, description="Human-readable scenario description"
    )

    @model_validator(mode="before")
    @classmethod
    def _default_identifier(cls, values: object) -> object:
        """Derive a readable identifier when none was supplied."""
        if isinstance(values, dict) and not values.get("scenario_id"):
            values = dict(values)
            p_control = values.get("p_control")
            true_rrr = values.get("true_rrr")
            if p_control is not None and true_rrr is not None:
                values["scenario_id"] = f"pc{float(p_control):g}_rrr{float(true_rrr):g}"
        return values

    @model_validator(mode="after")
    def _check_experimental_rate(self) -> "ScenarioConfig":
        if not 0.0 < self.p_experimental < 1.0:
            raise ValueError(
                f"Derived experimental probability {self.p_experimental!r} "
                "must lie strictly between 0 and 1"
            )
        return self

    @computed_field  # type: ignore[misc]
    @property
    def p_experimental(self) -> float:
        """Event probability in the experimental arm."""
        return self.p_control * (1.0 - self.true_rrr)

    def label(self) -> str:
        return f"Control Rate: {self.p_control:.3f}, True RRR: {self.true_rrr:.2f}"


ScenarioLike = Union[ScenarioConfig, Tuple[float, float]]


def as_scenario(value: ScenarioLike) -> ScenarioConfig:
    """Coerce a ``(p_control, true_rrr)`` pair into a scenario."""
    if isinstance(value, ScenarioConfig):
        return value
    p_control, true_rrr = value
    return ScenarioConfig(p_control=p_control, true_rrr=true_rrr)


class ScenarioSet(BaseModel):
    """Ordered container for the scenarios of one study."""

    scenarios: List[ScenarioConfig] = Field(
        default_factory=list, description="Scenarios to evaluate"
    )

    def add(self, scenario: ScenarioConfig) -> None:
        """Register a new scenario."""
        if any(s.scenario_id == scenario.scenario_id for s in self.scenarios):
            raise ValueError(f"Scenario {scenario.scenario_id!r} already exists")
        self.scenarios.append(scenario)

    def get(self, scenario_id: str) -> ScenarioConfig:
        """Fetch a scenario by identifier."""
        for scenario in self.scenarios:
            if scenario.scenario_id == scenario_id:
                return scenario
        raise KeyError(f"Scenario {scenario_id!r} not found")

    def __iter__(self) -> Iterator[ScenarioConfig]:  # type: ignore[override]
        return iter(self.scenarios)

    def __len__(self) -> int:
        return len(self.scenarios)

    @classmethod
    def from_pairs(cls, pairs: Iterable[ScenarioLike]) -> "ScenarioSet":
        """Build a set from ``(p_control, true_rrr)`` pairs or scenarios."""
        scenario_set = cls()
        for pair in pairs:
            scenario_set.add(as_scenario(pair))
        return scenario_set


def table2_scenarios() -> ScenarioSet:
    """Scenario grid of Bhatt & Mehta (2016), Table 2."""
    pairs = [
        (p_control, rrr)
        for p_control in (0.051, 0.0475)
        for rrr in (0.24, 0.21, 0.18)
    ]
    return ScenarioSet.from_pairs(pairs)


__all__ = ["ScenarioConfig", "ScenarioLike", "ScenarioSet", "as_scenario", "table2_scenarios"]
