"""Data models for statistical analysis of timing samples."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class StabilityLevel(str, Enum):
    """Stability level based on coefficient of variation."""

    STABLE = "stable"
    MODERATE = "moderate"
    UNSTABLE = "unstable"
    CRITICAL = "critical"


class StabilityAssessment(BaseModel):
    """Assessment of timing stability based on coefficient of variation.

    Thresholds:
    - stable: CV < 0.05 - Consistent timings
    - moderate: CV 0.05-0.15 - Acceptable variance
    - unstable: CV 0.15-0.30 - Timings may be unreliable
    - critical: CV > 0.30 - Timings dominated by noise
    """

    level: StabilityLevel = Field(..., description="Stability level")
    cv: float = Field(..., description="Coefficient of variation", ge=0.0)
    message: str = Field(..., description="Human-readable assessment message")


class OutlierCounts(BaseModel):
    """Samples falling outside the Tukey fences of a sample set."""

    low_severe: int = Field(default=0, ge=0)
    low_mild: int = Field(default=0, ge=0)
    high_mild: int = Field(default=0, ge=0)
    high_severe: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.low_severe + self.low_mild + self.high_mild + self.high_severe

    def to_dict(self) -> dict[str, int]:
        return {
            "low_severe": self.low_severe,
            "low_mild": self.low_mild,
            "high_mild": self.high_mild,
            "high_severe": self.high_severe,
        }


class StatisticalResult(BaseModel):
    """Statistical summary of a sample set.

    The quantile bounds always bracket the mean.
    """

    mean: float = Field(..., description="Arithmetic mean")
    std: float = Field(..., description="Standard deviation", ge=0.0)
    min: float = Field(..., description="Minimum value")
    max: float = Field(..., description="Maximum value")
    median: float = Field(..., description="Median value")
    lower_quantile: float = Field(..., description="Lower quantile bound")
    upper_quantile: float = Field(..., description="Upper quantile bound")
    quantile_levels: tuple[float, float] = Field(
        default=(0.025, 0.975), description="Levels of the quantile bounds"
    )
    n_samples: int = Field(..., description="Number of samples", ge=1)
    coefficient_of_variation: float = Field(
        ..., description="Coefficient of variation (std/mean)", ge=0.0
    )

    @property
    def quantile_bounds(self) -> tuple[float, float]:
        return (self.lower_quantile, self.upper_quantile)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            "mean": self.mean,
            "std": self.std,
            "min": self.min,
            "max": self.max,
            "median": self.median,
            "lower_quantile": self.lower_quantile,
            "upper_quantile": self.upper_quantile,
            "quantile_levels": list(self.quantile_levels),
            "n_samples": self.n_samples,
            "coefficient_of_variation": round(self.coefficient_of_variation, 4),
        }
