"""Monte Carlo operating characteristics of a two-stage adaptive design."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..config import DEFAULT_CHUNK_SIZE
from ..models.design import DesignConfig
from ..models.results import ReplicationOutcome, ScenarioResult, Zone, ZoneSummary
from ..models.scenario import ScenarioConfig
from ..runtime.parallel import ProgressCallback, SeedLike, plan_chunks, root_seed_sequence, run_chunks
from .outcome_validation import validate_outcomes
from .validator import validate_chunk_size, validate_design, validate_simulation_count

LOGGER = logging.getLogger(__name__)

OUTCOME_COLUMNS = ["zone", "final_z_adaptive", "final_z_nonadaptive", "sample_size_adaptive"]


def outcomes_frame(outcomes: Sequence[ReplicationOutcome]) -> pd.DataFrame:
    """Tabulate replication outcomes (one row per replication)."""
    return pd.DataFrame(
        {
            "zone": [outcome.zone.value for outcome in outcomes],
            "final_z_adaptive": np.fromiter(
                (outcome.final_z_adaptive for outcome in outcomes), dtype=float, count=len(outcomes)
            ),
            "final_z_nonadaptive": np.fromiter(
                (outcome.final_z_nonadaptive for outcome in outcomes), dtype=float, count=len(outcomes)
            ),
            "sample_size_adaptive": np.fromiter(
                (outcome.sample_size_adaptive for outcome in outcomes), dtype=float, count=len(outcomes)
            ),
        },
        columns=OUTCOME_COLUMNS,
    )


def _share(mask: pd.Series) -> float:
    return float(mask.mean()) if len(mask) else 0.0


def aggregate(
    outcomes: Sequence[ReplicationOutcome],
    design: DesignConfig,
    scenario: ScenarioConfig,
    *,
    metadata: Optional[Dict[str, Any]] = None,
) -> ScenarioResult:
    """
    Reduce replication outcomes into scenario-level operating characteristics.

    Power counts final z-statistics at or above ``design.z_alpha_final``.
    A zone that was never entered has conditional power 0 and no average
    sample size.
    """
    if not outcomes:
        raise ValueError("aggregate requires at least one replication outcome")
    frame = outcomes_frame(outcomes)
    threshold = design.z_alpha_final
    success_adaptive = frame["final_z_adaptive"] >= threshold
    success_nonadaptive = frame["final_z_nonadaptive"] >= threshold

    zones: Dict[Zone, ZoneSummary] = {}
    for zone in Zone:
        in_zone = frame["zone"] == zone.value
        count = int(in_zone.sum())
        average_n = float(frame.loc[in_zone, "sample_size_adaptive"].mean()) if count else None
        zones[zone] = ZoneSummary(
            zone=zone,
            replications=count,
            probability=count / len(frame),
            conditional_power_adaptive=_share(success_adaptive[in_zone]),
            conditional_power_nonadaptive=_share(success_nonadaptive[in_zone]),
            average_n_adaptive=average_n,
            average_n_nonadaptive=float(design.n_initial),
        )

    validation = validate_outcomes(frame, design)
    if validation.status != "PASS":
        LOGGER.warning(
            "Outcome validation failed for %s: %s",
            scenario.scenario_id,
            ", ".join(validation.failed_checks),
        )
    for warning in validation.warnings:
        LOGGER.warning("Scenario %s: %s", scenario.scenario_id, warning)

    payload: Dict[str, Any] = dict(metadata or {})
    payload["validation"] = validation.to_dict()
    return ScenarioResult(
        scenario=scenario,
        n_simulations=len(frame),
        power_adaptive=_share(success_adaptive),
        power_nonadaptive=_share(success_nonadaptive),
        average_n_adaptive=float(frame["sample_size_adaptive"].mean()),
        zones=zones,
        metadata=payload,
    )


class TrialSimulator:
    """Run independent replications of one design and aggregate them."""

    def __init__(
        self,
        design: DesignConfig,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        workers: int = 1,
    ) -> None:
        self.design = validate_design(design)
        self.chunk_size = validate_chunk_size(chunk_size)
        self.workers = max(int(workers), 1)

    def simulate(
        self,
        scenario: ScenarioConfig,
        n_simulations: int,
        *,
        seed: SeedLike = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> List[ReplicationOutcome]:
        """Return the ordered replication outcomes for one scenario."""
        validate_simulation_count(n_simulations)
        root = root_seed_sequence(seed)
        tasks = plan_chunks(root, int(n_simulations), self.chunk_size)
        return run_chunks(
            self.design,
            scenario,
            tasks,
            workers=self.workers,
            progress_callback=progress_callback,
        )

    def run_scenario(
        self,
        scenario: ScenarioConfig,
        n_simulations: int,
        *,
        seed: SeedLike = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ScenarioResult:
        """Simulate ``n_simulations`` trials of ``scenario`` and aggregate them."""
        validate_simulation_count(n_simulations)
        root = root_seed_sequence(seed)
        LOGGER.info(
            "Simulating %s (%d replications, chunk size %d, %d workers)",
            scenario.scenario_id,
            n_simulations,
            self.chunk_size,
            self.workers,
        )
        outcomes = self.simulate(
            scenario, n_simulations, seed=root, progress_callback=progress_callback
        )
        metadata = {
            "seed_entropy": root.entropy,
            "seed_spawn_key": list(root.spawn_key),
            "chunk_size": self.chunk_size,
            "design": self.design.to_metadata(),
        }
        result = aggregate(outcomes, self.design, scenario, metadata=metadata)
        LOGGER.info(
            "Scenario %s complete: power adaptive %.3f, non-adaptive %.3f",
            scenario.scenario_id,
            result.power_adaptive,
            result.power_nonadaptive,
        )
        return result


def run_scenario(
    design: DesignConfig,
    scenario: ScenarioConfig,
    n_simulations: int,
    *,
    seed: SeedLike = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    workers: int = 1,
) -> ScenarioResult:
    """Functional wrapper around :meth:`TrialSimulator.run_scenario`."""
    simulator = TrialSimulator(design, chunk_size=chunk_size, workers=workers)
    return simulator.run_scenario(scenario, n_simulations, seed=seed)


__all__ = ["TrialSimulator", "aggregate", "outcomes_frame", "run_scenario"]
