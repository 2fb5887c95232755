"""High-level orchestration for adaptive design simulation studies."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

import numpy as np

from .config import DEFAULT_CHUNK_SIZE, DEFAULT_SEED, DEFAULT_SIMULATIONS, DEFAULT_WORKERS
from .core.simulator import TrialSimulator
from .core.validator import (
    ValidationError,
    coerce_scenarios,
    validate_chunk_size,
    validate_design,
    validate_simulation_count,
)
from .models.design import DesignConfig
from .models.results import StudyResults
from .models.scenario import ScenarioConfig, ScenarioLike, ScenarioSet

LOGGER = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Configuration bundle for Monte Carlo replications."""

    n_simulations: int = DEFAULT_SIMULATIONS
    random_seed: Optional[int] = DEFAULT_SEED
    chunk_size: int = DEFAULT_CHUNK_SIZE
    workers: int = DEFAULT_WORKERS

    def to_metadata(self) -> Dict[str, object]:
        """Serialise into report metadata."""
        return {
            "n_simulations": int(self.n_simulations),
            "random_seed": self.random_seed,
            "chunk_size": int(self.chunk_size),
            "workers": int(self.workers),
        }

    @classmethod
    def from_metadata(cls, metadata: Dict[str, object]) -> "SimulationConfig":
        """Rehydrate a configuration from report metadata."""
        seed = metadata.get("random_seed", DEFAULT_SEED)
        return SimulationConfig(
            n_simulations=int(metadata.get("n_simulations", DEFAULT_SIMULATIONS)),
            random_seed=None if seed is None else int(seed),
            chunk_size=int(metadata.get("chunk_size", DEFAULT_CHUNK_SIZE)),
            workers=int(metadata.get("workers", DEFAULT_WORKERS)),
        )


def scenario_seed(random_seed: Optional[int], scenario_index: int) -> np.random.SeedSequence:
    """Root stream of one scenario; independent of the other scenarios in a study."""
    if random_seed is None:
        return np.random.SeedSequence()
    return np.random.SeedSequence([int(random_seed), int(scenario_index)])


class AdaptiveTrialEngine:
    """Primary entry point for configuring and running simulation studies."""

    def __init__(self) -> None:
        self._design: Optional[DesignConfig] = None
        self._scenario_set = ScenarioSet()
        self._simulation_config = SimulationConfig()

    # ------------------------------------------------------------------ Design
    def set_design(self, design: DesignConfig) -> None:
        """Configure the adaptive design under study."""
        self._design = validate_design(design)

    def design(self) -> DesignConfig:
        if self._design is None:
            raise ValidationError("Design has not been configured.")
        return self._design

    # --------------------------------------------------------------- Scenarios
    def add_scenario(self, scenario: ScenarioLike) -> ScenarioConfig:
        """Register a scenario or a ``(p_control, true_rrr)`` pair."""
        (resolved,) = coerce_scenarios([scenario])
        try:
            self._scenario_set.add(resolved)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        return resolved

    def add_scenarios(self, scenarios: Iterable[ScenarioLike]) -> List[ScenarioConfig]:
        return [self.add_scenario(scenario) for scenario in scenarios]

    def scenario_set(self) -> ScenarioSet:
        return self._scenario_set

    # -------------------------------------------------------------- Simulation
    def set_simulation_config(self, config: SimulationConfig) -> None:
        """Validate and store Monte Carlo settings."""
        validate_simulation_count(config.n_simulations)
        validate_chunk_size(config.chunk_size)
        if config.workers < 1:
            raise ValidationError("workers must be positive")
        self._simulation_config = config

    def simulation_config(self) -> SimulationConfig:
        return self._simulation_config

    def _validate_ready_state(self) -> None:
        """Ensure the engine has everything required to execute."""
        self.design()
        if not len(self._scenario_set):
            raise ValidationError("No scenarios configured.")

    def run_analysis(
        self,
        *,
        progress_callback: Optional[Callable[[int, int, str], None]] = None,
    ) -> StudyResults:
        """Simulate every registered scenario and collect the results."""
        self._validate_ready_state()
        design = self.design()
        config = self.simulation_config()
        simulator = TrialSimulator(design, chunk_size=config.chunk_size, workers=config.workers)
        results = StudyResults(design=design, simulation=config.to_metadata())

        scenarios = list(self.scenario_set())
        total_scenarios = len(scenarios)
        for scenario_index, scenario in enumerate(scenarios):

            def chunk_progress(done: int, total: int, message: str) -> None:
                if progress_callback:
                    step = scenario_index * total + done
                    progress_callback(step, total_scenarios * total, message)

            result = simulator.run_scenario(
                scenario,
                config.n_simulations,
                seed=scenario_seed(config.random_seed, scenario_index),
                progress_callback=chunk_progress,
            )
            result.metadata["random_seed"] = config.random_seed
            result.metadata["scenario_index"] = scenario_index
            results.add_result(result)
        LOGGER.info("Completed %d scenarios", total_scenarios)
        return results


def run_study(
    design: DesignConfig,
    scenarios: Iterable[ScenarioLike],
    n_simulations: int,
    *,
    seed: Optional[int] = DEFAULT_SEED,
    workers: int = 1,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    progress_callback: Optional[Callable[[int, int, str], None]] = None,
) -> StudyResults:
    """
    Run a simulation study in one call.

    ``scenarios`` may mix :class:`ScenarioConfig` objects and
    ``(p_control, true_rrr)`` pairs. All configuration is validated before the
    first replication runs.
    """
    engine = AdaptiveTrialEngine()
    engine.set_design(design)
    engine.add_scenarios(scenarios)
    engine.set_simulation_config(
        SimulationConfig(
            n_simulations=n_simulations,
            random_seed=seed,
            chunk_size=chunk_size,
            workers=workers,
        )
    )
    return engine.run_analysis(progress_callback=progress_callback)


__all__ = ["AdaptiveTrialEngine", "SimulationConfig", "run_study", "scenario_seed"]
