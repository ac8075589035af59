"""Pairwise synergy and antagonism between metrics.

Each rule names its trigger metrics, a condition over their current
values, and the metrics whose impact it rescales. Firing rules compose
multiplicatively in registration order. Adjustment always starts from the
calculator's unadjusted impact, so adjusting twice equals adjusting once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from vitalspan.domains.impact.domain_logic.models import (
    HealthMetric,
    Interaction,
    MetricImpactDetail,
    MetricType,
    latest_by_type,
)

logger = logging.getLogger(__name__)

MetricValues = dict[MetricType, float]


@dataclass(frozen=True)
class InteractionRule:
    """A registered pairwise interaction."""

    name: str
    title: str
    description: str
    triggers: tuple[MetricType, ...]
    affects: tuple[MetricType, ...]
    multiplier: float
    condition: Callable[[MetricValues], bool]
    dynamic_multiplier: Callable[[MetricValues], float] | None = None

    @property
    def is_synergy(self) -> bool:
        return self.multiplier >= 1.0

    def applies(self, values: MetricValues) -> bool:
        if not all(trigger in values for trigger in self.triggers):
            return False
        return bool(self.condition(values))

    def multiplier_for(self, values: MetricValues) -> float:
        if self.dynamic_multiplier is not None:
            return self.dynamic_multiplier(values)
        return self.multiplier


# ---------------------------------------------------------------------------
# Default rules
# ---------------------------------------------------------------------------

HEAVY_BODY_MASS_KG = 90.7
BODY_MASS_STEP_KG = 9.07


def _body_mass_dampening(values: MetricValues) -> float:
    excess = values[MetricType.BODY_MASS] - HEAVY_BODY_MASS_KG
    return 0.9 ** (excess / BODY_MASS_STEP_KG)


def _has_activity(values: MetricValues) -> bool:
    return MetricType.EXERCISE_MINUTES in values or MetricType.STEPS in values


def default_rules() -> list[InteractionRule]:
    """Built-in rules, in the order their multipliers are applied."""
    sleep = MetricType.SLEEP_HOURS
    exercise = MetricType.EXERCISE_MINUTES
    hrv = MetricType.HEART_RATE_VARIABILITY
    nutrition = MetricType.NUTRITION_QUALITY
    alcohol = MetricType.ALCOHOL_CONSUMPTION
    stress = MetricType.STRESS_LEVEL
    mass = MetricType.BODY_MASS

    return [
        InteractionRule(
            name="sleep_exercise_synergy",
            title="Sleep-Exercise Synergy",
            description="Good sleep amplifies the benefits of regular exercise, and vice versa.",
            triggers=(sleep, exercise),
            affects=(sleep, exercise),
            multiplier=1.15,
            condition=lambda v: 7.0 <= v[sleep] <= 8.5 and v[exercise] >= 20.0,
        ),
        InteractionRule(
            name="exercise_hrv_synergy",
            title="Exercise-HRV Synergy",
            description="Regular exercise strengthens the protective effect of good HRV.",
            triggers=(exercise, hrv),
            affects=(hrv,),
            multiplier=1.10,
            condition=lambda v: v[exercise] >= 20.0,
        ),
        InteractionRule(
            name="nutrition_exercise_synergy",
            title="Nutrition-Exercise Synergy",
            description="A healthy diet fuels exercise and enhances its benefits.",
            triggers=(nutrition, exercise),
            affects=(nutrition, exercise),
            multiplier=1.12,
            condition=lambda v: v[nutrition] >= 7.0 and v[exercise] >= 20.0,
        ),
        InteractionRule(
            name="alcohol_hrv_antagonism",
            title="Alcohol-HRV Impact",
            description="Alcohol suppresses heart rate variability and recovery.",
            triggers=(alcohol, hrv),
            affects=(hrv,),
            multiplier=0.75,
            condition=lambda v: v[alcohol] < 9.0,
        ),
        InteractionRule(
            name="alcohol_sleep_antagonism",
            title="Alcohol-Sleep Impact",
            description="Alcohol disrupts sleep quality even when duration looks healthy.",
            triggers=(alcohol, sleep),
            affects=(sleep,),
            multiplier=0.80,
            condition=lambda v: v[alcohol] < 9.0,
        ),
        InteractionRule(
            name="stress_sleep_antagonism",
            title="Stress-Sleep Impact",
            description="High stress reduces the restorative value of sleep.",
            triggers=(stress, sleep),
            affects=(sleep,),
            multiplier=0.85,
            condition=lambda v: v[stress] > 6.0,
        ),
        InteractionRule(
            name="body_mass_activity_dampening",
            title="Weight-Activity Impact",
            description="Higher body mass reduces the benefit captured from daily activity.",
            triggers=(mass,),
            affects=(MetricType.STEPS, exercise),
            multiplier=0.9,
            condition=lambda v: v[mass] > HEAVY_BODY_MASS_KG and _has_activity(v),
            dynamic_multiplier=_body_mass_dampening,
        ),
    ]


class InteractionEngine:
    """Applies registered interaction rules to per-metric impacts.

    Usage::

        engine = InteractionEngine()
        adjusted = engine.adjust(impacts, metrics)
        shown = engine.active_interactions(metrics)
    """

    def __init__(self, rules: list[InteractionRule] | None = None) -> None:
        self._rules: list[InteractionRule] = list(rules) if rules is not None else default_rules()

    @property
    def rules(self) -> list[InteractionRule]:
        return list(self._rules)

    def register(self, rule: InteractionRule) -> None:
        """Append a rule; it is applied after every existing rule."""
        if any(existing.name == rule.name for existing in self._rules):
            raise ValueError(f"Duplicate interaction rule: {rule.name!r}")
        self._rules.append(rule)

    def multipliers(self, metrics: list[HealthMetric]) -> dict[MetricType, float]:
        """Combined multiplier per affected metric for the current readings."""
        values = _current_values(metrics)
        combined: dict[MetricType, float] = {}
        for rule in self._rules:
            if not rule.applies(values):
                continue
            factor = rule.multiplier_for(values)
            for metric_type in rule.affects:
                combined[metric_type] = combined.get(metric_type, 1.0) * factor
            logger.debug("Interaction %s fired (x%.3f)", rule.name, factor)
        return combined

    def adjust(
        self,
        impacts: list[MetricImpactDetail],
        metrics: list[HealthMetric],
    ) -> list[MetricImpactDetail]:
        """Return new impact details with interaction multipliers applied."""
        combined = self.multipliers(metrics)
        return [
            impact.with_adjustment(combined.get(impact.metric_type, 1.0))
            for impact in impacts
        ]

    def active_interactions(self, metrics: list[HealthMetric]) -> list[Interaction]:
        """Describe the rules currently firing, for display only."""
        values = _current_values(metrics)
        active: list[Interaction] = []
        for rule in self._rules:
            if not rule.applies(values):
                continue
            factor = rule.multiplier_for(values)
            percent = round((factor - 1.0) * 100)
            active.append(Interaction(
                title=rule.title,
                description=rule.description,
                impact_modifier=f"{percent:+d}%",
                is_positive=factor >= 1.0,
                affected_metrics=rule.affects,
            ))
        return active


def _current_values(metrics: list[HealthMetric]) -> MetricValues:
    return {metric_type: metric.value for metric_type, metric in latest_by_type(metrics).items()}
