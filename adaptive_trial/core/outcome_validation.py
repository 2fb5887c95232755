"""Validation helpers for simulated trial outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence

import numpy as np
import pandas as pd

from ..models.design import DesignConfig
from ..models.results import Zone


@dataclass
class ValidationResult:
    """Basic container for validation outcomes."""

    status: str
    failed_checks: Sequence[str]
    warnings: Sequence[str]

    def to_dict(self) -> Dict[str, object]:
        return {
            "status": self.status,
            "failed_checks": list(self.failed_checks),
            "warnings": list(self.warnings),
        }


def validate_outcomes(frame: pd.DataFrame, design: DesignConfig) -> ValidationResult:
    """Run sanity checks on an outcome frame produced by ``outcomes_frame``."""
    failed: list[str] = []
    warnings: list[str] = []
    if frame.empty:
        failed.append("no_outcomes")
        return ValidationResult(status="FAIL", failed_checks=failed, warnings=warnings)

    z_values = frame[["final_z_adaptive", "final_z_nonadaptive"]].to_numpy(dtype=float)
    if not np.all(np.isfinite(z_values)):
        failed.append("non_finite_z_statistics")

    sizes = frame["sample_size_adaptive"].to_numpy(dtype=float)
    if np.any(sizes < design.n_interim) or np.any(sizes > design.n_max_cap):
        failed.append("sample_size_out_of_bounds")

    known = {zone.value for zone in Zone}
    zones = frame["zone"]
    if not set(zones.unique()) <= known:
        failed.append("unknown_zone")
    if int(zones.isin(known).sum()) != len(frame):
        failed.append("zone_probability_closure")
    counts = zones.value_counts()
    for zone in Zone:
        if int(counts.get(zone.value, 0)) == 0:
            warnings.append(f"zone_not_entered_{zone.value.lower()}")

    status = "PASS" if not failed else "FAIL"
    return ValidationResult(status=status, failed_checks=failed, warnings=warnings)


__all__ = ["ValidationResult", "validate_outcomes"]
