"""Monte Carlo simulation of two-stage promising-zone adaptive trials."""

from .core.simulator import TrialSimulator, aggregate, run_scenario
from .core.validator import ValidationError
from .engine import AdaptiveTrialEngine, SimulationConfig, run_study
from .models import (
    DesignConfig,
    ReplicationOutcome,
    ScenarioConfig,
    ScenarioResult,
    ScenarioSet,
    StudyResults,
    Zone,
    ZoneSummary,
    table2_scenarios,
)

__version__ = "0.1.0"

__all__ = [
    "AdaptiveTrialEngine",
    "DesignConfig",
    "ReplicationOutcome",
    "ScenarioConfig",
    "ScenarioResult",
    "ScenarioSet",
    "SimulationConfig",
    "StudyResults",
    "TrialSimulator",
    "ValidationError",
    "Zone",
    "ZoneSummary",
    "aggregate",
    "run_scenario",
    "run_study",
    "table2_scenarios",
]
