"""Interim zone classification and sample-size re-estimation."""

from __future__ import annotations

from functools import lru_cache

from ..models.design import DesignConfig
from ..models.results import Zone
from .statistics import normal_quantile, safe_divide, safe_log


def classify_zone(observed_rrr: float, design: DesignConfig) -> Zone:
    """Map the interim relative risk reduction onto exactly one zone."""
    if observed_rrr < design.rrr_lower:
        return Zone.UNFAVORABLE
    if observed_rrr <= design.rrr_upper:
        return Zone.PROMISING
    return Zone.FAVORABLE


@lru_cache(maxsize=32)
def _quantile_gap_squared(alpha: float, target_cp: float) -> float:
    gap = normal_quantile(1.0 - alpha) - normal_quantile(1.0 - target_cp)
    return gap * gap


def required_second_stage_size(
    observed_rrr: float, design: DesignConfig, p_control: float
) -> float:
    """
    Additional subjects needed to reach ``design.target_cp`` conditional power.

    Uses the log relative risk ``delta_hat = ln(1 - observed_rrr)`` as the
    effect size. No increase is requested when ``delta_hat`` is zero or not
    finite, or when the interim enrolment already suffices.
    """
    delta_hat = safe_log(1.0 - observed_rrr, fallback=0.0)
    if delta_hat == 0.0:
        return 0.0
    information = (delta_hat * delta_hat) / (4.0 / p_control)
    total = safe_divide(_quantile_gap_squared(design.alpha, design.target_cp), information)
    return max(0.0, total - design.n_interim)


def adapt_sample_size(
    zone: Zone,
    observed_rrr: float,
    z_interim: float,
    design: DesignConfig,
    p_control: float,
) -> float:
    """Final adaptive sample size implied by the interim zone."""
    if zone is Zone.PROMISING:
        n2_required = required_second_stage_size(observed_rrr, design, p_control)
        return min(design.n_interim + n2_required, design.n_max_cap)
    if zone is Zone.FAVORABLE and z_interim >= design.z_alpha_interim:
        return design.n_interim
    return design.n_initial


__all__ = ["classify_zone", "required_second_stage_size", "adapt_sample_size"]
