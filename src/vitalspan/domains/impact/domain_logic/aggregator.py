"""Combines per-metric impacts and scales them to a reporting period."""

from __future__ import annotations

import logging

from vitalspan.domains.impact.domain_logic.interaction_engine import InteractionEngine
from vitalspan.domains.impact.domain_logic.models import (
    HealthMetric,
    MetricImpactDetail,
    Period,
    TotalImpact,
    UserProfile,
    latest_by_type,
)
from vitalspan.domains.impact.domain_logic.registry import CalculatorRegistry

logger = logging.getLogger(__name__)


class ImpactAggregator:
    """Evaluates, interaction-adjusts, sums, and period-scales metric impacts.

    All intermediate figures are minutes per day; the period multiplier is
    applied exactly once, here.

    Usage::

        aggregator = ImpactAggregator(CalculatorRegistry.default(), InteractionEngine())
        yearly = aggregator.total_impact(metrics, profile, Period.YEAR)
    """

    def __init__(
        self,
        registry: CalculatorRegistry | None = None,
        engine: InteractionEngine | None = None,
    ) -> None:
        self._registry = registry or CalculatorRegistry.default()
        self._engine = engine or InteractionEngine()

    @property
    def registry(self) -> CalculatorRegistry:
        return self._registry

    @property
    def engine(self) -> InteractionEngine:
        return self._engine

    def calculate_impacts(
        self, metrics: list[HealthMetric], profile: UserProfile
    ) -> list[MetricImpactDetail]:
        """Interaction-adjusted per-day impact for the freshest reading of each metric."""
        latest = latest_by_type(metrics)
        raw = [
            self._registry.evaluate(metric.type, metric.value, profile)
            for metric in latest.values()
        ]
        return self._engine.adjust(raw, list(latest.values()))

    def total_impact(
        self,
        metrics: list[HealthMetric],
        profile: UserProfile,
        period: Period = Period.DAY,
    ) -> TotalImpact:
        impacts = self.calculate_impacts(metrics, profile)
        daily_total = sum(impact.lifespan_impact_minutes for impact in impacts)
        days = period.days

        logger.info(
            "Aggregated %d metrics: %.2f min/day (%s x%d)",
            len(impacts), daily_total, period.value, days,
        )
        return TotalImpact(
            total_impact_minutes=daily_total * days,
            per_metric_impacts={
                impact.metric_type: impact.lifespan_impact_minutes * days for impact in impacts
            },
            period=period,
            daily_total_minutes=daily_total,
            impacts=impacts,
        )
