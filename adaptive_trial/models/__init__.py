"""Data models for designs, scenarios and simulation results."""

from .design import DesignConfig
from .results import ReplicationOutcome, ScenarioResult, StudyResults, Zone, ZoneSummary
from .scenario import ScenarioConfig, ScenarioSet, as_scenario, table2_scenarios

__all__ = [
    "DesignConfig",
    "ReplicationOutcome",
    "ScenarioConfig",
    "ScenarioResult",
    "ScenarioSet",
    "StudyResults",
    "Zone",
    "ZoneSummary",
    "as_scenario",
    "table2_scenarios",
]
