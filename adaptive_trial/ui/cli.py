"""Typer-based command line interface for simulation studies."""

from __future__ import annotations

import logging
from itertools import product
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table

from adaptive_trial.config import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_SEED,
    DEFAULT_SIMULATIONS,
    DEFAULT_WORKERS,
    LOG_LEVEL,
    OUTPUT_ROOT,
)
from adaptive_trial.core.validator import ValidationError
from adaptive_trial.engine import run_study
from adaptive_trial.models.design import DesignConfig
from adaptive_trial.models.results import ScenarioResult, StudyResults, Zone
from adaptive_trial.models.scenario import ScenarioLike, table2_scenarios
from adaptive_trial.reporting import NOT_AVAILABLE, ReportGenerator

app = typer.Typer(help="Promising-zone adaptive design simulator")
console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _format_n(value: Optional[float]) -> str:
    return f"{value:,.0f}" if value is not None else NOT_AVAILABLE


def _display_scenario(result: ScenarioResult, design: DesignConfig) -> None:
    console.print(f"\n[bold]Results for {result.scenario.label()}[/bold]")
    console.print(f"Overall Power (Non-Adaptive): {result.power_nonadaptive:.2f}")
    console.print(f"Overall Power (Adaptive):     {result.power_adaptive:.2f}")
    console.print(f"Avg. Sample Size (Adaptive):  {result.average_n_adaptive:,.0f}")

    table = Table(show_lines=False)
    table.add_column("Zone")
    table.add_column("Prob. Enter", justify="right")
    table.add_column("Cond. Power (A)", justify="right")
    table.add_column("Cond. Power (NA)", justify="right")
    table.add_column("Avg. N (A)", justify="right")
    table.add_column("Avg. N (NA)", justify="right")
    for zone in Zone:
        summary = result.zones[zone]
        table.add_row(
            zone.value,
            f"{summary.probability:.2f}",
            f"{summary.conditional_power_adaptive:.2f}",
            f"{summary.conditional_power_nonadaptive:.2f}",
            _format_n(summary.average_n_adaptive),
            _format_n(design.n_initial),
        )
    console.print(table)


def _execute(
    design: DesignConfig,
    scenarios: List[ScenarioLike],
    simulations: int,
    seed: Optional[int],
    workers: int,
    chunk_size: int,
    output_dir: Optional[Path],
    timestamped: bool = False,
) -> StudyResults:
    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
        transient=True,
    ) as progress:
        task_id = progress.add_task("Simulating", total=None)

        def on_progress(step: int, total: int, message: str) -> None:
            progress.update(task_id, completed=step, total=total, description=message)

        try:
            results = run_study(
                design,
                scenarios,
                simulations,
                seed=seed,
                workers=workers,
                chunk_size=chunk_size,
                progress_callback=on_progress,
            )
        except ValidationError as exc:
            raise typer.BadParameter(str(exc)) from exc

    for result in results.scenario_results.values():
        _display_scenario(result, results.design)

    if output_dir is not None:
        paths = ReportGenerator(output_dir, timestamped=timestamped).export_all(results)
        console.print("\n[bold green]Reports exported:[/bold green]")
        for name, path in paths.items():
            console.print(f"  - {name}: {path}")
    return results


@app.command()
def run(
    p_control: List[float] = typer.Option(..., "--p-control", help="Control event probability (repeatable)."),
    rrr: List[float] = typer.Option(..., "--rrr", help="True relative risk reduction (repeatable)."),
    n_initial: float = typer.Option(10900, help="Planned total sample size."),
    interim_fraction: float = typer.Option(0.7, help="Fraction of n_initial enrolled at the interim."),
    z_interim: float = typer.Option(2.797, help="Interim efficacy boundary."),
    z_final: float = typer.Option(1.98, help="Final critical value."),
    rrr_lower: float = typer.Option(0.136, help="Lower promising-zone bound."),
    rrr_upper: float = typer.Option(0.212, help="Upper promising-zone bound."),
    target_cp: float = typer.Option(0.90, help="Target conditional power."),
    alpha: float = typer.Option(0.025, help="One-sided significance level."),
    n_max: float = typer.Option(20000, help="Cap on the adapted sample size."),
    simulations: int = typer.Option(DEFAULT_SIMULATIONS, help="Replications per scenario."),
    seed: Optional[int] = typer.Option(DEFAULT_SEED, help="Root random seed."),
    workers: int = typer.Option(DEFAULT_WORKERS, help="Worker processes."),
    chunk_size: int = typer.Option(DEFAULT_CHUNK_SIZE, help="Replications per random stream."),
    output_dir: Optional[Path] = typer.Option(None, help="Directory for CSV/JSON/TXT reports."),
    timestamped: bool = typer.Option(False, help="Write reports into a run_YYYYMMDD_HHMMSS subdirectory."),
    log_level: str = typer.Option(LOG_LEVEL, help="Logging level."),
) -> None:
    """Simulate every combination of --p-control and --rrr under a custom design."""
    _configure_logging(log_level)
    try:
        design = DesignConfig(
            n_initial=n_initial,
            interim_fraction=interim_fraction,
            z_alpha_interim=z_interim,
            z_alpha_final=z_final,
            rrr_lower=rrr_lower,
            rrr_upper=rrr_upper,
            target_cp=target_cp,
            alpha=alpha,
            n_max_cap=n_max,
        )
    except PydanticValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    scenarios = list(product(p_control, rrr))
    _execute(design, scenarios, simulations, seed, workers, chunk_size, output_dir, timestamped)


@app.command()
def table2(
    simulations: int = typer.Option(DEFAULT_SIMULATIONS, help="Replications per scenario."),
    seed: Optional[int] = typer.Option(DEFAULT_SEED, help="Root random seed."),
    workers: int = typer.Option(DEFAULT_WORKERS, help="Worker processes."),
    chunk_size: int = typer.Option(DEFAULT_CHUNK_SIZE, help="Replications per random stream."),
    output_dir: Optional[Path] = typer.Option(OUTPUT_ROOT, help="Directory for CSV/JSON/TXT reports."),
    timestamped: bool = typer.Option(False, help="Write reports into a run_YYYYMMDD_HHMMSS subdirectory."),
    log_level: str = typer.Option(LOG_LEVEL, help="Logging level."),
) -> None:
    """Reproduce Table 2 of Bhatt & Mehta (2016) with the CHAMPION PHOENIX design."""
    _configure_logging(log_level)
    design = DesignConfig.bhatt_mehta_2016()
    _execute(
        design,
        list(table2_scenarios()),
        simulations,
        seed,
        workers,
        chunk_size,
        output_dir,
        timestamped,
    )


def main() -> None:
    """Entry point for CLI execution."""
    app()


if __name__ == "__main__":
    main()
