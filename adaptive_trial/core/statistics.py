"""Closed-form statistics with explicit fallbacks for degenerate inputs."""

from __future__ import annotations

from math import floor, isfinite, log, sqrt

from scipy.stats import norm


def safe_divide(numerator: float, denominator: float, fallback: float = 0.0) -> float:
    """Divide, returning ``fallback`` when the quotient is undefined or infinite."""
    if denominator == 0:
        return fallback
    value = numerator / denominator
    if not isfinite(value):
        return fallback
    return value


def safe_log(value: float, fallback: float = 0.0) -> float:
    """Natural log, returning ``fallback`` outside the positive finite reals."""
    if not isfinite(value) or value <= 0:
        return fallback
    return log(value)


def arm_size(stage_size: float) -> int:
    """Subjects per arm for a stage of ``stage_size`` total subjects (1:1)."""
    if stage_size <= 0:
        return 0
    return int(floor(stage_size / 2.0 + 1e-9))


def two_proportion_z(events_control: int, events_experimental: int, n_total: float) -> float:
    """
    Pooled two-proportion z-statistic for equal arms of ``n_total / 2``.

    Positive values favour the experimental arm (fewer events). Returns 0 when
    ``n_total`` is not positive or the pooled event rate is 0 or 1.
    """
    if n_total <= 0:
        return 0.0
    half = n_total / 2.0
    pooled = safe_divide(events_control + events_experimental, n_total)
    if not 0.0 < pooled < 1.0:
        return 0.0
    rate_control = events_control / half
    rate_experimental = events_experimental / half
    return (rate_control - rate_experimental) / sqrt(pooled * (1.0 - pooled) * (4.0 / n_total))


def relative_risk_reduction(rate_control: float, rate_experimental: float) -> float:
    """``1 - experimental / control``; 0 when the control rate is zero."""
    ratio = safe_divide(rate_experimental, rate_control, fallback=float("nan"))
    if not isfinite(ratio):
        return 0.0
    return 1.0 - ratio


def normal_quantile(probability: float) -> float:
    """Standard-normal inverse CDF."""
    return float(norm.ppf(probability))


__all__ = [
    "safe_divide",
    "safe_log",
    "arm_size",
    "two_proportion_z",
    "relative_risk_reduction",
    "normal_quantile",
]
