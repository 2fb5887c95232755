"""Plain-text rendering of scenario operating characteristics."""

from __future__ import annotations

from typing import List, Optional

from ..models.design import DesignConfig
from ..models.results import ScenarioResult, StudyResults, Zone

NOT_AVAILABLE = "N/A"

_HEADER = (
    "Zone          | Prob. Enter | Cond. Power (A) | Cond. Power (NA) | Avg. N (A) | Avg. N (NA)"
)
_RULE = "-" * len(_HEADER)


def format_sample_size(value: Optional[float]) -> str:
    """Format a sample size, marking zones that were never entered."""
    return f"{value:.0f}" if value is not None else NOT_AVAILABLE


def format_scenario_report(result: ScenarioResult, design: DesignConfig) -> str:
    """Render one scenario as the Table 2 style text block."""
    lines: List[str] = [
        f"--- Results for {result.scenario.label()} ---",
        f"Overall Power (Non-Adaptive): {result.power_nonadaptive:.2f}",
        f"Overall Power (Adaptive):     {result.power_adaptive:.2f}",
        f"Avg. Sample Size (Adaptive):  {result.average_n_adaptive:.0f}",
        "",
        _HEADER,
        _RULE,
    ]
    for zone in Zone:
        summary = result.zones[zone]
        lines.append(
            f"{zone.value:<13} | {summary.probability:<11.2f} "
            f"| {summary.conditional_power_adaptive:<15.2f} "
            f"| {summary.conditional_power_nonadaptive:<16.2f} "
            f"| {format_sample_size(summary.average_n_adaptive):<10} "
            f"| {format_sample_size(design.n_initial):<10}"
        )
    return "\n".join(lines)


def format_study_report(results: StudyResults) -> str:
    """Render every scenario of a study, separated by blank lines."""
    blocks = [
        format_scenario_report(result, results.design)
        for result in results.scenario_results.values()
    ]
    return "\n\n".join(blocks) + "\n"


__all__ = ["NOT_AVAILABLE", "format_sample_size", "format_scenario_report", "format_study_report"]
