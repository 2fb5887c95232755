"""Two-stage adaptive design constants."""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class DesignConfig(BaseModel):
    """Immutable constants of a two-stage promising-zone design.

    The interim look happens after ``n_interim = n_initial * interim_fraction``
    subjects (split equally between arms). Results with an observed relative
    risk reduction inside ``[rrr_lower, rrr_upper]`` trigger a sample-size
    increase aimed at ``target_cp`` conditional power, capped at ``n_max_cap``.
    """

    model_config = ConfigDict(frozen=True)

    n_initial: float = Field(..., gt=0, description="Planned total sample size.")
    interim_fraction: float = Field(
        ..., gt=0.0, le=1.0, description="Share of n_initial enrolled at the interim."
    )
    z_alpha_interim: float = Field(
        ..., description="Efficacy stopping boundary at the interim analysis."
    )
    z_alpha_final: float = Field(..., description="Critical value at the final analysis.")
    rrr_lower: float = Field(
        ..., ge=0.0, le=1.0, description="Lower promising-zone bound (observed RRR)."
    )
    rrr_upper: float = Field(
        ..., ge=0.0, le=1.0, description="Upper promising-zone bound (observed RRR)."
    )
    target_cp: float = Field(
        ..., gt=0.0, lt=1.0, description="Target conditional power in the promising zone."
    )
    alpha: float = Field(..., gt=0.0, lt=1.0, description="One-sided significance level.")
    n_max_cap: float = Field(..., gt=0, description="Upper bound on the adapted sample size.")

    @model_validator(mode="after")
    def _check_bounds(self) -> "DesignConfig":
        if self.rrr_lower >= self.rrr_upper:
            raise ValueError(
                f"rrr_lower ({self.rrr_lower}) must be smaller than rrr_upper ({self.rrr_upper})"
            )
        if self.n_max_cap < self.n_initial:
            raise ValueError(
                f"n_max_cap ({self.n_max_cap}) cannot be below n_initial ({self.n_initial})"
            )
        return self

    @computed_field  # type: ignore[misc]
    @property
    def n_interim(self) -> float:
        """Total subjects enrolled at the interim look."""
        # 10900 * 0.7 evaluates to 7629.999999999999 without rounding.
        return round(self.n_initial * self.interim_fraction, 6)

    def to_metadata(self) -> Dict[str, float]:
        """Serialise into a plain dictionary for reports."""
        return {key: float(value) for key, value in self.model_dump().items()}

    @classmethod
    def bhatt_mehta_2016(cls) -> "DesignConfig":
        """CHAMPION PHOENIX example design (Bhatt & Mehta, NEJM 2016)."""
        return cls(
            n_initial=10900,
            interim_fraction=0.7,
            z_alpha_interim=2.797,
            z_alpha_final=1.98,
            rrr_lower=0.136,
            rrr_upper=0.212,
            target_cp=0.90,
            alpha=0.025,
            n_max_cap=20000,
        )


__all__ = ["DesignConfig"]
