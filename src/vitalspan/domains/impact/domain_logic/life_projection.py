"""Total life expectancy adjusted by the summed daily impact.

The baseline comes from WHO period life tables (remaining years by age and
sex). The summed daily impact is projected over the remaining years with a
behaviour-decay discount, then weighted by the evidence quality of the
contributing calculations.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from vitalspan.domains.impact.domain_logic.aggregator import ImpactAggregator
from vitalspan.domains.impact.domain_logic.dose_response import (
    DAYS_PER_YEAR,
    MINUTES_PER_DAY,
    BreakpointTable,
)
from vitalspan.domains.impact.domain_logic.models import (
    CalculationMethod,
    Gender,
    HealthMetric,
    MetricImpactDetail,
    UserProfile,
)

logger = logging.getLogger(__name__)

# Remaining life expectancy (years) at each age.
MALE_REMAINING_YEARS = BreakpointTable((
    (0, 71.4), (10, 62.1), (20, 52.3), (30, 42.8), (40, 33.5),
    (50, 24.7), (60, 16.8), (70, 10.1), (80, 5.5), (90, 3.0),
))
FEMALE_REMAINING_YEARS = BreakpointTable((
    (0, 76.8), (10, 67.4), (20, 57.5), (30, 47.7), (40, 38.1),
    (50, 28.8), (60, 20.1), (70, 12.5), (80, 6.8), (90, 3.5),
))

DEFAULT_AGE = 30
BEHAVIOUR_DECAY_RATE = 0.02
MAX_LIFESPAN_YEARS = 120.0
CONFIDENCE_INTERVAL_YEARS = 2.0

EVIDENCE_RELIABILITY = {
    CalculationMethod.DOSE_RESPONSE_INTERPOLATION: 0.9,
    CalculationMethod.EXPERT_CONSENSUS: 0.7,
    CalculationMethod.ALGORITHMIC_ESTIMATE: 0.4,
}


@dataclass(frozen=True)
class LifeProjection:
    baseline_years: float
    adjusted_years: float
    current_age: float
    confidence: float
    confidence_interval_years: float = CONFIDENCE_INTERVAL_YEARS

    @property
    def net_impact_years(self) -> float:
        return self.adjusted_years - self.baseline_years

    @property
    def remaining_years(self) -> float:
        return max(0.0, self.adjusted_years - self.current_age)

    @property
    def lower_bound_years(self) -> float:
        return self.adjusted_years - self.confidence_interval_years

    @property
    def upper_bound_years(self) -> float:
        return self.adjusted_years + self.confidence_interval_years

    @property
    def confidence_description(self) -> str:
        percent = int(self.confidence * 100)
        if self.confidence >= 0.8:
            label = "High"
        elif self.confidence >= 0.6:
            label = "Moderate"
        elif self.confidence >= 0.4:
            label = "Limited"
        else:
            label = "Low"
        return f"{label} confidence ({percent}% evidence quality)"

    def to_dict(self) -> dict[str, Any]:
        return {
            "baseline_years": round(self.baseline_years, 1),
            "adjusted_years": round(self.adjusted_years, 1),
            "net_impact_years": round(self.net_impact_years, 2),
            "remaining_years": round(self.remaining_years, 1),
            "current_age": self.current_age,
            "confidence": round(self.confidence, 2),
            "confidence_description": self.confidence_description,
            "range_years": [
                round(self.lower_bound_years, 1),
                round(self.upper_bound_years, 1),
            ],
        }


def baseline_life_expectancy(age: float, gender: Gender | None) -> float:
    """Expected age at death from the life tables for ``age`` and ``gender``."""
    if gender is Gender.MALE:
        remaining = MALE_REMAINING_YEARS.interpolate(age)
    elif gender is Gender.FEMALE:
        remaining = FEMALE_REMAINING_YEARS.interpolate(age)
    else:
        remaining = (
            MALE_REMAINING_YEARS.interpolate(age) + FEMALE_REMAINING_YEARS.interpolate(age)
        ) / 2.0
    # Past 90 the tables extrapolate below zero; keep at least one year.
    return age + max(1.0, remaining)


def evidence_quality(impacts: list[MetricImpactDetail]) -> float:
    if not impacts:
        return 0.0
    total = sum(EVIDENCE_RELIABILITY[impact.calculation_method] for impact in impacts)
    return total / len(impacts)


class LifeProjectionService:
    """Projects life expectancy from a set of metrics.

    Usage::

        service = LifeProjectionService(ImpactAggregator())
        projection = service.project(metrics, profile)
        projection.adjusted_years
    """

    def __init__(self, aggregator: ImpactAggregator | None = None) -> None:
        self._aggregator = aggregator or ImpactAggregator()

    def project(self, metrics: list[HealthMetric], profile: UserProfile) -> LifeProjection:
        impacts = self._aggregator.calculate_impacts(metrics, profile)
        daily_minutes = sum(impact.lifespan_impact_minutes for impact in impacts)
        return self.project_daily_impact(daily_minutes, profile, evidence_quality(impacts))

    def project_daily_impact(
        self, daily_minutes: float, profile: UserProfile, quality: float
    ) -> LifeProjection:
        age = float(profile.age if profile.age is not None else DEFAULT_AGE)
        baseline = baseline_life_expectancy(age, profile.gender)
        horizon = max(1.0, baseline - age)

        # Discount with the mid-horizon decay as a conservative estimate.
        decay = math.exp(-BEHAVIOUR_DECAY_RATE * horizon / 2.0)
        total_minutes = daily_minutes * horizon * DAYS_PER_YEAR * decay
        impact_years = total_minutes / (DAYS_PER_YEAR * MINUTES_PER_DAY) * quality

        adjusted = max(age + 1.0, min(MAX_LIFESPAN_YEARS, baseline + impact_years))
        logger.info(
            "Projected %.1f years (baseline %.1f, %+.2f min/day, evidence %.2f)",
            adjusted, baseline, daily_minutes, quality,
        )
        return LifeProjection(
            baseline_years=baseline,
            adjusted_years=adjusted,
            current_age=age,
            confidence=quality,
        )
