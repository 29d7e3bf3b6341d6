"""Statistical calculations for timing samples."""

import math
from collections.abc import Sequence

from .models import (
    OutlierCounts,
    StabilityAssessment,
    StabilityLevel,
    StatisticalResult,
)

CV_STABLE_THRESHOLD = 0.05
CV_MODERATE_THRESHOLD = 0.15
CV_UNSTABLE_THRESHOLD = 0.30

LOWER_QUANTILE = 0.025
UPPER_QUANTILE = 0.975

# Tukey fence multipliers
MILD_OUTLIER_FACTOR = 1.5
SEVERE_OUTLIER_FACTOR = 3.0


class StatisticsCalculator:
    """Calculator for descriptive statistics of timing samples.

    - Mean, std, min, max, median
    - Interpolated quantile bounds (2.5% / 97.5% by default)
    - Coefficient of Variation and stability assessment
    - Outlier classification with Tukey fences
    """

    def __init__(
        self,
        lower_quantile: float = LOWER_QUANTILE,
        upper_quantile: float = UPPER_QUANTILE,
    ) -> None:
        if not 0.0 <= lower_quantile <= upper_quantile <= 1.0:
            raise ValueError(
                "Quantile levels must satisfy 0 <= lower <= upper <= 1, "
                f"got ({lower_quantile}, {upper_quantile})"
            )
        self.lower_quantile = lower_quantile
        self.upper_quantile = upper_quantile

    @staticmethod
    def calculate_mean(values: Sequence[float]) -> float:
        """Calculate arithmetic mean.

        Raises:
            ValueError: If values is empty.
        """
        if not values:
            raise ValueError("Cannot calculate mean of empty sequence")
        return math.fsum(values) / len(values)

    @staticmethod
    def calculate_std(values: Sequence[float], ddof: int = 1) -> float:
        """Calculate sample standard deviation.

        Args:
            values: Sequence of numeric values.
            ddof: Delta degrees of freedom (default 1 for sample std).

        Returns:
            Sample standard deviation, 0.0 when there is not enough data.
        """
        n = len(values)
        if n < ddof + 1:
            return 0.0

        mean = math.fsum(values) / n
        variance = math.fsum((x - mean) ** 2 for x in values) / (n - ddof)
        return math.sqrt(variance)

    @staticmethod
    def calculate_quantile(values: Sequence[float], q: float) -> float:
        """Calculate the q-quantile by linear interpolation on sorted values.

        The quantile sits at position ``q * (n - 1)`` of the sorted sample;
        fractional positions interpolate between the two neighbours.

        Raises:
            ValueError: If values is empty or q is outside [0, 1].
        """
        if not values:
            raise ValueError("Cannot calculate quantile of empty sequence")
        if not 0.0 <= q <= 1.0:
            raise ValueError(f"Quantile level must be within [0, 1], got {q}")

        sorted_values = sorted(values)
        position = q * (len(sorted_values) - 1)
        lower_index = math.floor(position)
        upper_index = math.ceil(position)
        fraction = position - lower_index
        lower = sorted_values[lower_index]
        upper = sorted_values[upper_index]
        return lower + (upper - lower) * fraction

    @classmethod
    def calculate_median(cls, values: Sequence[float]) -> float:
        """Calculate median value.

        Raises:
            ValueError: If values is empty.
        """
        if not values:
            raise ValueError("Cannot calculate median of empty sequence")
        return cls.calculate_quantile(values, 0.5)

    @staticmethod
    def calculate_coefficient_of_variation(mean: float, std: float) -> float:
        """Calculate coefficient of variation (CV = std / |mean|).

        A zero mean yields 0.0 for zero spread and infinity otherwise.
        """
        if abs(mean) < 1e-15:
            return 0.0 if std < 1e-15 else float("inf")
        return abs(std / mean)

    @staticmethod
    def assess_stability(cv: float) -> StabilityAssessment:
        """Assess timing stability based on coefficient of variation."""
        if cv < CV_STABLE_THRESHOLD:
            return StabilityAssessment(
                level=StabilityLevel.STABLE,
                cv=cv,
                message="Consistent timings across samples",
            )
        elif cv < CV_MODERATE_THRESHOLD:
            return StabilityAssessment(
                level=StabilityLevel.MODERATE,
                cv=cv,
                message="Acceptable variance in timings",
            )
        elif cv < CV_UNSTABLE_THRESHOLD:
            return StabilityAssessment(
                level=StabilityLevel.UNSTABLE,
                cv=cv,
                message="Timings may be unreliable - high variance detected",
            )
        else:
            return StabilityAssessment(
                level=StabilityLevel.CRITICAL,
                cv=cv,
                message="Timings dominated by noise - very high variance",
            )

    @classmethod
    def classify_outliers(cls, values: Sequence[float]) -> OutlierCounts:
        """Count samples outside the mild and severe Tukey fences.

        Fewer than four samples never contain outliers.
        """
        if len(values) < 4:
            return OutlierCounts()

        q1 = cls.calculate_quantile(values, 0.25)
        q3 = cls.calculate_quantile(values, 0.75)
        iqr = q3 - q1
        low_severe = q1 - SEVERE_OUTLIER_FACTOR * iqr
        low_mild = q1 - MILD_OUTLIER_FACTOR * iqr
        high_mild = q3 + MILD_OUTLIER_FACTOR * iqr
        high_severe = q3 + SEVERE_OUTLIER_FACTOR * iqr

        counts = OutlierCounts()
        for value in values:
            if value < low_severe:
                counts.low_severe += 1
            elif value < low_mild:
                counts.low_mild += 1
            elif value > high_severe:
                counts.high_severe += 1
            elif value > high_mild:
                counts.high_mild += 1
        return counts

    def compute(self, values: Sequence[float]) -> StatisticalResult:
        """Compute all statistics for a sequence of values.

        Raises:
            ValueError: If values is empty.
        """
        if not values:
            raise ValueError("Cannot compute statistics for empty sequence")

        mean = self.calculate_mean(values)
        std = self.calculate_std(values)
        lower = self.calculate_quantile(values, self.lower_quantile)
        upper = self.calculate_quantile(values, self.upper_quantile)

        return StatisticalResult(
            mean=mean,
            std=std,
            min=min(values),
            max=max(values),
            median=self.calculate_median(values),
            # A single outlier can drag the mean past an interpolated bound
            lower_quantile=min(lower, mean),
            upper_quantile=max(upper, mean),
            quantile_levels=(self.lower_quantile, self.upper_quantile),
            n_samples=len(values),
            coefficient_of_variation=self.calculate_coefficient_of_variation(
                mean, std
            ),
        )

    def compute_with_stability(
        self,
        values: Sequence[float],
    ) -> tuple[StatisticalResult, StabilityAssessment]:
        """Compute statistics and stability assessment.

        Raises:
            ValueError: If values is empty.
        """
        stats = self.compute(values)
        stability = self.assess_stability(stats.coefficient_of_variation)
        return stats, stability
