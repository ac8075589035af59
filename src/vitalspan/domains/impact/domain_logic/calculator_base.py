"""Shared machinery for the per-metric dose-response calculators."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from vitalspan.domains.impact.domain_logic.dose_response import (
    BreakpointTable,
    relative_risk_to_daily_minutes,
)
from vitalspan.domains.impact.domain_logic.models import (
    CalculationMethod,
    MetricImpactDetail,
    MetricType,
    ResponseShape,
    UserProfile,
)
from vitalspan.domains.impact.domain_logic.study_references import references_for

logger = logging.getLogger(__name__)


@runtime_checkable
class ImpactCalculator(Protocol):
    """Evaluates one metric's lifespan impact and describes its response curve.

    The aggregator only calls :meth:`evaluate`; the target solver also
    needs the curve shape and search range to choose a bisection bracket.
    """

    metric_type: MetricType
    shape: ResponseShape
    optimum: float | None

    @property
    def has_interior_optimum(self) -> bool:
        """True when the best value lies strictly inside the curve's domain."""
        ...

    def search_range(self, profile: UserProfile) -> tuple[float, float]:
        """(floor, ceiling) the target solver may search within."""
        ...

    def evaluate(self, value: float, profile: UserProfile) -> MetricImpactDetail:
        """Per-day lifespan impact of ``value``. Never raises."""
        ...


@dataclass(frozen=True)
class DoseResponseCalculator:
    """Breakpoint-table calculator.

    When ``risk_scaling`` is set the table holds relative risks that are
    converted to minutes using the user's age; otherwise the table holds
    lifespan minutes per day directly.

    Usage::

        calc = DoseResponseCalculator(
            metric_type=MetricType.SOCIAL_CONNECTIONS_QUALITY,
            table=BreakpointTable(((1, -52.0), (10, 52.0))),
            shape=ResponseShape.INCREASING,
            baseline_value=5.5,
            search_floor=1,
            search_ceiling=10,
        )
        calc.evaluate(7.0, profile).lifespan_impact_minutes  # ~17.3
    """

    metric_type: MetricType
    table: BreakpointTable
    shape: ResponseShape
    baseline_value: float
    search_floor: float
    search_ceiling: float
    optimum: float | None = None
    risk_scaling: float | None = None
    method: CalculationMethod = CalculationMethod.DOSE_RESPONSE_INTERPOLATION
    improve_advice: str = ""
    maintain_advice: str = ""

    @property
    def has_interior_optimum(self) -> bool:
        return self.optimum is not None and self.table.lower < self.optimum < self.table.upper

    def table_for(self, profile: UserProfile) -> BreakpointTable:
        return self.table

    def search_range(self, profile: UserProfile) -> tuple[float, float]:
        return self.search_floor, self.search_ceiling

    def evaluate(self, value: float, profile: UserProfile) -> MetricImpactDetail:
        table = self.table_for(profile)

        if self.risk_scaling is not None:
            age = profile.age
            if age is None:
                logger.debug("No birth year on profile; %s impact unavailable", self.metric_type.value)
                return self._result(
                    value,
                    0.0,
                    CalculationMethod.ALGORITHMIC_ESTIMATE,
                    "Add your birth year to personalise this estimate.",
                )
            minutes = relative_risk_to_daily_minutes(table.interpolate(value), age, self.risk_scaling)
        else:
            minutes = table.interpolate(value)

        if table.contains(value):
            method = self.method
        else:
            logger.debug(
                "%s value %.2f outside curve [%.2f, %.2f]; extrapolating",
                self.metric_type.value, value, table.lower, table.upper,
            )
            method = CalculationMethod.ALGORITHMIC_ESTIMATE

        return self._result(value, minutes, method, self.recommend(value, minutes))

    def recommend(self, value: float, minutes: float) -> str:
        if minutes < 0 and self.improve_advice:
            return self.improve_advice
        return self.maintain_advice

    def _result(
        self,
        value: float,
        minutes: float,
        method: CalculationMethod,
        recommendation: str,
    ) -> MetricImpactDetail:
        return MetricImpactDetail(
            metric_type=self.metric_type,
            current_value=value,
            baseline_value=self.baseline_value,
            lifespan_impact_minutes=minutes,
            calculation_method=method,
            study_references=references_for(self.metric_type),
            recommendation=recommendation,
        )
