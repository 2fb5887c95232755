"""Result data models for reporting."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from .design import DesignConfig
from .scenario import ScenarioConfig


class Zone(str, Enum):
    """Interim result classification driving the adaptation decision."""

    UNFAVORABLE = "Unfavorable"
    PROMISING = "Promising"
    FAVORABLE = "Favorable"


@dataclass(frozen=True)
class ReplicationOutcome:
    """A single simulated trial."""

    zone: Zone
    final_z_adaptive: float
    final_z_nonadaptive: float
    sample_size_adaptive: float


class ZoneSummary(BaseModel):
    """Operating characteristics conditional on entering one zone."""

    model_config = ConfigDict(frozen=True)

    zone: Zone
    replications: int = Field(..., ge=0, description="Replications landing in the zone")
    probability: float = Field(..., ge=0.0, le=1.0, description="Probability of entering")
    conditional_power_adaptive: float = Field(..., ge=0.0, le=1.0)
    conditional_power_nonadaptive: float = Field(..., ge=0.0, le=1.0)
    average_n_adaptive: Optional[float] = Field(
        None, description="Mean adaptive sample size; None when the zone was never entered"
    )
    average_n_nonadaptive: float = Field(..., description="Pre-planned sample size")


class ScenarioResult(BaseModel):
    """Aggregate operating characteristics of one scenario."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    scenario: ScenarioConfig
    n_simulations: int = Field(..., ge=1)
    power_adaptive: float = Field(..., ge=0.0, le=1.0)
    power_nonadaptive: float = Field(..., ge=0.0, le=1.0)
    average_n_adaptive: float
    zones: Dict[Zone, ZoneSummary] = Field(
        ..., description="Per-zone summaries keyed by zone (all zones present)"
    )
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def scenario_id(self) -> str:
        return self.scenario.scenario_id

    def zone_frame(self) -> pd.DataFrame:
        """Return the per-zone table as a dataframe (one row per zone)."""
        rows = []
        for zone in Zone:
            summary = self.zones[zone]
            rows.append(
                {
                    "scenario_id": self.scenario_id,
                    "zone": zone.value,
                    "replications": summary.replications,
                    "probability": summary.probability,
                    "cp_adaptive": summary.conditional_power_adaptive,
                    "cp_nonadaptive": summary.conditional_power_nonadaptive,
                    "avg_n_adaptive": summary.average_n_adaptive,
                    "avg_n_nonadaptive": summary.average_n_nonadaptive,
                }
            )
        return pd.DataFrame(rows)


class StudyResults(BaseModel):
    """Aggregates all scenario results of one design."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    design: DesignConfig
    scenario_results: Dict[str, ScenarioResult] = Field(
        default_factory=dict, description="Results keyed by scenario id"
    )
    simulation: Dict[str, Any] = Field(
        default_factory=dict, description="Simulation settings used for the run"
    )

    def add_result(self, result: ScenarioResult) -> None:
        """Store a scenario result."""
        self.scenario_results[result.scenario_id] = result

    def summary_frame(self) -> pd.DataFrame:
        """Return one row of overall operating characteristics per scenario."""
        if not self.scenario_results:
            return pd.DataFrame()
        rows = []
        for scenario_id, result in self.scenario_results.items():
            rows.append(
                {
                    "scenario_id": scenario_id,
                    "p_control": result.scenario.p_control,
                    "true_rrr": result.scenario.true_rrr,
                    "n_simulations": result.n_simulations,
                    "power_nonadaptive": result.power_nonadaptive,
                    "power_adaptive": result.power_adaptive,
                    "avg_n_adaptive": result.average_n_adaptive,
                }
            )
        return pd.DataFrame(rows)

    def zone_frame(self) -> pd.DataFrame:
        """Return the stacked per-zone tables of every scenario."""
        if not self.scenario_results:
            return pd.DataFrame()
        frames = [result.zone_frame() for result in self.scenario_results.values()]
        return pd.concat(frames, ignore_index=True)


__all__ = ["Zone", "ReplicationOutcome", "ZoneSummary", "ScenarioResult", "StudyResults"]
