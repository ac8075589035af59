"""Maps each metric type to its dose-response calculator."""

from __future__ import annotations

import logging

from vitalspan.domains.impact.domain_logic.activity_calculator import activity_calculators
from vitalspan.domains.impact.domain_logic.calculator_base import ImpactCalculator
from vitalspan.domains.impact.domain_logic.cardiovascular_calculator import (
    cardiovascular_calculators,
)
from vitalspan.domains.impact.domain_logic.lifestyle_calculator import lifestyle_calculators
from vitalspan.domains.impact.domain_logic.models import (
    CalculationMethod,
    MetricImpactDetail,
    MetricType,
    UserProfile,
)

logger = logging.getLogger(__name__)


class CalculatorRegistry:
    """In-memory registry of impact calculators keyed by metric type.

    Usage::

        registry = CalculatorRegistry.default()
        detail = registry.evaluate(MetricType.STEPS, 6500, profile)
    """

    def __init__(self) -> None:
        self._calculators: dict[MetricType, ImpactCalculator] = {}

    @classmethod
    def default(cls) -> CalculatorRegistry:
        """Registry populated with the activity, cardiovascular, and lifestyle calculators."""
        registry = cls()
        for calculator in (
            *activity_calculators(),
            *cardiovascular_calculators(),
            *lifestyle_calculators(),
        ):
            registry.register(calculator)
        return registry

    def register(self, calculator: ImpactCalculator, *, replace: bool = False) -> None:
        """Add a calculator. Re-registering a metric requires ``replace=True``."""
        metric_type = calculator.metric_type
        if metric_type in self._calculators and not replace:
            raise ValueError(f"Calculator already registered for {metric_type.value!r}")
        self._calculators[metric_type] = calculator

    def get(self, metric_type: MetricType) -> ImpactCalculator | None:
        return self._calculators.get(metric_type)

    def supported_metrics(self) -> list[MetricType]:
        return list(self._calculators)

    def evaluate(
        self, metric_type: MetricType, value: float, profile: UserProfile
    ) -> MetricImpactDetail:
        """Evaluate ``value`` with the registered calculator.

        Unregistered metric types degrade to a zero-impact estimate.
        """
        calculator = self._calculators.get(metric_type)
        if calculator is None:
            logger.debug("No calculator registered for %s", metric_type.value)
            return MetricImpactDetail(
                metric_type=metric_type,
                current_value=value,
                baseline_value=value,
                lifespan_impact_minutes=0.0,
                calculation_method=CalculationMethod.ALGORITHMIC_ESTIMATE,
            )
        return calculator.evaluate(value, profile)
