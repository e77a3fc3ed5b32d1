"""
Configuration schema for odds-ratio-by-quantile runs.

Defines Pydantic models for input columns, estimator options, output
settings and validation strictness. Defaults match compute_or_by_quantile().
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pgs_or.metrics.quantiles import DEFAULT_BREAKPOINTS, validate_breakpoints


class InputConfig(BaseModel):
    """Where to read scores and outcomes from."""

    model_config = ConfigDict(extra="forbid")

    infile: Path | None = None
    score_col: str = "pgs"
    outcome_col: str = "outcome"
    sep: str | None = Field(
        default=None, description="Column separator; None = infer from file extension"
    )
    drop_missing: bool = True


class EstimatorConfig(BaseModel):
    """Odds ratio estimator options."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["conditional", "midp", "sample"] = "conditional"
    confidence_level: float = Field(default=0.95, gt=0.0, lt=1.0)
    pvalue_method: Literal["chi_square", "fisher", "midp"] = "chi_square"


class OutputConfig(BaseModel):
    """Output directory and figure settings."""

    model_config = ConfigDict(extra="forbid")

    outdir: Path = Field(default=Path("results"))
    save_plot: bool = True
    plot_format: Literal["png", "pdf", "svg"] = "png"
    plot_dpi: int = Field(default=150, ge=50, le=1200)
    plot_title: str | None = None


class StrictnessConfig(BaseModel):
    """Configuration for validation strictness."""

    level: Literal["off", "warn", "error"] = "warn"
    check_breakpoint_span: bool = True
    min_expected_bin_size: int = Field(default=10, ge=0)


class ORConfig(BaseModel):
    """Complete configuration for one odds-ratio-by-quantile run."""

    breakpoints: list[float] = Field(default_factory=lambda: list(DEFAULT_BREAKPOINTS))
    create_plot: bool = True

    input: InputConfig = Field(default_factory=InputConfig)
    estimator: EstimatorConfig = Field(default_factory=EstimatorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    strictness: StrictnessConfig = Field(default_factory=StrictnessConfig)

    @field_validator("breakpoints", mode="before")
    @classmethod
    def coerce_breakpoints(cls, value):
        """Accept a comma-separated string as well as a list."""
        if isinstance(value, str):
            return [float(v) for v in value.split(",") if v.strip()]
        if isinstance(value, (int, float)):
            return [value]
        return value

    @field_validator("breakpoints")
    @classmethod
    def check_breakpoints(cls, value: list[float]) -> list[float]:
        """Breakpoints must be >= 2 strictly increasing values in [0, 1]."""
        validate_breakpoints(value)
        return value
