"""Statistics module for timing sample analysis."""

from .calculator import StatisticsCalculator
from .models import (
    OutlierCounts,
    StabilityAssessment,
    StabilityLevel,
    StatisticalResult,
)

__all__ = [
    "OutlierCounts",
    "StabilityAssessment",
    "StabilityLevel",
    "StatisticalResult",
    "StatisticsCalculator",
]
