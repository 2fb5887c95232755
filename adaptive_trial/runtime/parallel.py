"""Chunked, optionally multi-process execution of replication batches.

Replications are split into fixed-size chunks. Chunk ``k`` always covers the
replications ``[k * chunk_size, (k + 1) * chunk_size)`` and always draws from
the ``k``-th child of the scenario's root ``SeedSequence``. The worker count
therefore never changes which draws feed which replication.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from multiprocessing import get_context
from typing import Callable, Dict, List, Optional, Union

import numpy as np

from ..core.replication import simulate_block
from ..core.validator import validate_chunk_size, validate_simulation_count
from ..models.design import DesignConfig
from ..models.results import ReplicationOutcome
from ..models.scenario import ScenarioConfig

LOGGER = logging.getLogger(__name__)

SeedLike = Union[int, np.random.SeedSequence, None]
ProgressCallback = Callable[[int, int, str], None]


@dataclass(frozen=True)
class ChunkTask:
    """A contiguous block of replications bound to its own random stream."""

    index: int
    start: int
    count: int
    seed_sequence: np.random.SeedSequence


def root_seed_sequence(seed: SeedLike) -> np.random.SeedSequence:
    """Return a fresh root sequence; spawned-children state is never shared."""
    if isinstance(seed, np.random.SeedSequence):
        return np.random.SeedSequence(
            seed.entropy, spawn_key=seed.spawn_key, pool_size=seed.pool_size
        )
    return np.random.SeedSequence(seed)


def plan_chunks(seed: SeedLike, n_simulations: int, chunk_size: int) -> List[ChunkTask]:
    """Split ``n_simulations`` into chunks, each with a spawned child stream."""
    validate_simulation_count(n_simulations)
    chunk_size = validate_chunk_size(chunk_size)
    n_chunks = -(-n_simulations // chunk_size)
    children = root_seed_sequence(seed).spawn(n_chunks)
    tasks: List[ChunkTask] = []
    for index, child in enumerate(children):
        start = index * chunk_size
        tasks.append(
            ChunkTask(
                index=index,
                start=start,
                count=min(chunk_size, n_simulations - start),
                seed_sequence=child,
            )
        )
    return tasks


def _run_task(
    design: DesignConfig, scenario: ScenarioConfig, task: ChunkTask
) -> List[ReplicationOutcome]:
    return simulate_block(design, scenario, task.seed_sequence, task.count)


def run_chunks(
    design: DesignConfig,
    scenario: ScenarioConfig,
    tasks: List[ChunkTask],
    *,
    workers: int = 1,
    progress_callback: Optional[ProgressCallback] = None,
) -> List[ReplicationOutcome]:
    """Execute chunk tasks and return outcomes in replication order."""
    total = len(tasks)
    completed: Dict[int, List[ReplicationOutcome]] = {}

    def report(done: int) -> None:
        if progress_callback:
            try:
                progress_callback(
                    done,
                    total,
                    f"Scenario {scenario.scenario_id}: chunk {done}/{total}",
                )
            except Exception:  # pragma: no cover
                LOGGER.debug("Progress callback raised", exc_info=True)

    if workers <= 1 or total <= 1:
        for task in tasks:
            completed[task.index] = _run_task(design, scenario, task)
            report(len(completed))
    else:
        max_workers = min(workers, total)
        LOGGER.info(
            "Running %d chunks for %s on %d worker processes",
            total,
            scenario.scenario_id,
            max_workers,
        )
        with ProcessPoolExecutor(
            max_workers=max_workers, mp_context=get_context("spawn")
        ) as executor:
            futures = {
                executor.submit(_run_task, design, scenario, task): task.index
                for task in tasks
            }
            for future in as_completed(futures):
                completed[futures[future]] = future.result()
                report(len(completed))

    outcomes: List[ReplicationOutcome] = []
    for index in sorted(completed):
        outcomes.extend(completed[index])
    return outcomes


__all__ = ["ChunkTask", "SeedLike", "plan_chunks", "root_seed_sequence", "run_chunks"]
