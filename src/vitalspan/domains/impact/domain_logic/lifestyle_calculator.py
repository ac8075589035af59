"""Lifestyle-family calculators for questionnaire metrics.

All inputs use a 1-10 scale. Higher is healthier (10 = never smokes,
never drinks) except stress, where 1 is the calmest answer.
"""

from __future__ import annotations

from vitalspan.domains.impact.domain_logic.calculator_base import DoseResponseCalculator
from vitalspan.domains.impact.domain_logic.dose_response import BreakpointTable
from vitalspan.domains.impact.domain_logic.models import (
    CalculationMethod,
    MetricType,
    ResponseShape,
)

NUTRITION_MINUTES = BreakpointTable((
    (1, -139.0),
    (7, 0.0),
    (8, 0.0),
    (10, 66.7),
))

# Scale bands: 9-10 never, 7-9 former, 3-7 occasional, 1-3 heavy.
SMOKING_MINUTES = BreakpointTable((
    (1, -348.3),
    (3, -232.2),
    (7, -116.1),
    (9, 0.0),
    (10, 0.0),
))

# Relative risk of 1.05 per drink up to one a day, 1.15 per drink above.
ALCOHOL_RELATIVE_RISK = BreakpointTable((
    (1, 1.20),
    (3, 1.05),
    (7, 1.025),
    (9, 1.0),
    (10, 1.0),
))

SOCIAL_MINUTES = BreakpointTable((
    (1, -52.0),
    (10, 52.0),
))

STRESS_RELATIVE_RISK = BreakpointTable((
    (1, 1.0),
    (3, 1.0),
    (6, 1.09),
    (8, 1.19),
    (10, 1.35),
))


def nutrition_calculator() -> DoseResponseCalculator:
    return DoseResponseCalculator(
        metric_type=MetricType.NUTRITION_QUALITY,
        table=NUTRITION_MINUTES,
        shape=ResponseShape.INCREASING,
        baseline_value=7,
        search_floor=1,
        search_ceiling=10,
        improve_advice="Add more vegetables, whole grains, and fewer processed foods.",
        maintain_advice="Your diet quality supports a longer life.",
    )


def smoking_calculator() -> DoseResponseCalculator:
    return DoseResponseCalculator(
        metric_type=MetricType.SMOKING_STATUS,
        table=SMOKING_MINUTES,
        shape=ResponseShape.INCREASING,
        baseline_value=10,
        search_floor=1,
        search_ceiling=10,
        improve_advice="Quitting smoking is the single biggest step toward a longer life.",
        maintain_advice="Staying smoke-free protects years of healthy life.",
    )


def alcohol_calculator() -> DoseResponseCalculator:
    return DoseResponseCalculator(
        metric_type=MetricType.ALCOHOL_CONSUMPTION,
        table=ALCOHOL_RELATIVE_RISK,
        shape=ResponseShape.INCREASING,
        baseline_value=10,
        search_floor=1,
        search_ceiling=10,
        risk_scaling=0.08,
        improve_advice="Cutting back to a few drinks a week lowers your mortality risk.",
        maintain_advice="Your alcohol intake is not costing you lifespan.",
    )


def social_connections_calculator() -> DoseResponseCalculator:
    return DoseResponseCalculator(
        metric_type=MetricType.SOCIAL_CONNECTIONS_QUALITY,
        table=SOCIAL_MINUTES,
        shape=ResponseShape.INCREASING,
        baseline_value=5.5,
        search_floor=1,
        search_ceiling=10,
        method=CalculationMethod.EXPERT_CONSENSUS,
        improve_advice="Reach out to a friend or join a group activity this week.",
        maintain_advice="Your social connections are a real health asset.",
    )


def stress_calculator() -> DoseResponseCalculator:
    return DoseResponseCalculator(
        metric_type=MetricType.STRESS_LEVEL,
        table=STRESS_RELATIVE_RISK,
        shape=ResponseShape.DECREASING,
        baseline_value=3,
        search_floor=1,
        search_ceiling=10,
        risk_scaling=0.04,
        method=CalculationMethod.EXPERT_CONSENSUS,
        improve_advice="Short daily breathing or mindfulness sessions can lower stress.",
        maintain_advice="Your stress levels are well managed.",
    )


def lifestyle_calculators() -> list[DoseResponseCalculator]:
    return [
        nutrition_calculator(),
        smoking_calculator(),
        alcohol_calculator(),
        social_connections_calculator(),
        stress_calculator(),
    ]
