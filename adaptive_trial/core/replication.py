"""Simulation of individual two-stage adaptive trials."""

from __future__ import annotations

from typing import Iterator, List, Tuple

import numpy as np

from ..models.design import DesignConfig
from ..models.results import ReplicationOutcome
from ..models.scenario import ScenarioConfig
from .statistics import arm_size, relative_risk_reduction, safe_divide, two_proportion_z
from .zones import adapt_sample_size, classify_zone


def _draw_stage(
    stage_size: float,
    p_control: float,
    p_experimental: float,
    rng: np.random.Generator,
) -> Tuple[int, int]:
    """Draw event counts for both arms of one stage (control first)."""
    per_arm = arm_size(stage_size)
    events_control = int(rng.binomial(per_arm, p_control))
    events_experimental = int(rng.binomial(per_arm, p_experimental))
    return events_control, events_experimental


def simulate_replication(
    design: DesignConfig,
    scenario: ScenarioConfig,
    rng: np.random.Generator,
) -> ReplicationOutcome:
    """
    Run one trial: interim look, zone decision, then both final analyses.

    The non-adaptive and adaptive paths share the stage-1 draws. Draws are
    consumed in a fixed order: interim control/experimental, non-adaptive
    stage 2 control/experimental, and adaptive stage 2 control/experimental
    (only when the adaptive design enrols further subjects).
    """
    p_control = scenario.p_control
    p_experimental = scenario.p_experimental
    n_interim = design.n_interim
    half_interim = n_interim / 2.0

    control_s1, experimental_s1 = _draw_stage(n_interim, p_control, p_experimental, rng)
    z_interim = two_proportion_z(control_s1, experimental_s1, n_interim)
    observed_rrr = relative_risk_reduction(
        safe_divide(control_s1, half_interim),
        safe_divide(experimental_s1, half_interim),
    )

    zone = classify_zone(observed_rrr, design)
    final_size = adapt_sample_size(zone, observed_rrr, z_interim, design, p_control)

    control_na, experimental_na = _draw_stage(
        design.n_initial - n_interim, p_control, p_experimental, rng
    )
    final_z_nonadaptive = two_proportion_z(
        control_s1 + control_na, experimental_s1 + experimental_na, design.n_initial
    )

    total_control, total_experimental = control_s1, experimental_s1
    if final_size - n_interim > 0:
        control_a, experimental_a = _draw_stage(
            final_size - n_interim, p_control, p_experimental, rng
        )
        total_control += control_a
        total_experimental += experimental_a
    # Arms enrol floor(size / 2) subjects; the statistic uses the real adapted size.
    final_z_adaptive = two_proportion_z(total_control, total_experimental, final_size)

    return ReplicationOutcome(
        zone=zone,
        final_z_adaptive=final_z_adaptive,
        final_z_nonadaptive=final_z_nonadaptive,
        sample_size_adaptive=final_size,
    )


def iter_replications(
    design: DesignConfig,
    scenario: ScenarioConfig,
    rng: np.random.Generator,
    count: int,
) -> Iterator[ReplicationOutcome]:
    """Yield ``count`` consecutive replications drawn from ``rng``."""
    for _ in range(count):
        yield simulate_replication(design, scenario, rng)


def simulate_block(
    design: DesignConfig,
    scenario: ScenarioConfig,
    seed_sequence: np.random.SeedSequence,
    count: int,
) -> List[ReplicationOutcome]:
    """Simulate a block of replications on a dedicated PCG64 stream."""
    rng = np.random.default_rng(seed_sequence)
    return list(iter_replications(design, scenario, rng, count))


__all__ = ["simulate_replication", "iter_replications", "simulate_block"]
