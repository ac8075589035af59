"""Activity-family calculators: steps, exercise, sleep, active energy.

Steps, exercise, and sleep curves are relative-risk tables; active energy
is expressed directly in lifespan minutes per day.
"""

from __future__ import annotations

from vitalspan.domains.impact.domain_logic.calculator_base import DoseResponseCalculator
from vitalspan.domains.impact.domain_logic.dose_response import BreakpointTable
from vitalspan.domains.impact.domain_logic.models import (
    CalculationMethod,
    MetricType,
    ResponseShape,
)

# Mortality falls steeply to the 12k optimum, then turns up again at very
# high volumes and levels off at 1.15 from 35k. The 4000-10000 range samples
# a logarithmic curve.
STEPS_OPTIMUM = 12000

STEPS_RELATIVE_RISK = BreakpointTable((
    (0, 1.60),
    (2700, 1.40),
    (4000, 1.30),
    (5000, 1.2118),
    (6000, 1.1415),
    (7000, 1.0830),
    (8000, 1.0328),
    (9000, 0.9889),
    (10000, 0.95),
    (STEPS_OPTIMUM, 0.90),
    (20000, 0.93),
    (25000, 1.00),
    (35000, 1.15),
    (50000, 1.15),
))

# Daily minutes; 21.43 and 42.86 are the 150 and 300 min/week guideline marks.
EXERCISE_RELATIVE_RISK = BreakpointTable((
    (0, 1.0),
    (5, 0.9225),
    (10, 0.8646),
    (15, 0.8183),
    (21.43, 0.77),
    (42.86, 0.65),
    (85.71, 0.60),
))

SLEEP_OPTIMUM_HOURS = 7.5

SLEEP_RELATIVE_RISK = BreakpointTable((
    (3, 1.32),
    (6, 1.08),
    (7, 1.02),
    (SLEEP_OPTIMUM_HOURS, 1.0),
    (8, 1.02),
    (9, 1.08),
    (12, 1.38),
))

# 17.4 min/day per 100 kcal around a 400 kcal reference.
ACTIVE_ENERGY_MINUTES = BreakpointTable((
    (0, -69.6),
    (400, 0.0),
    (1300, 156.6),
))


def steps_calculator() -> DoseResponseCalculator:
    return DoseResponseCalculator(
        metric_type=MetricType.STEPS,
        table=STEPS_RELATIVE_RISK,
        shape=ResponseShape.U_SHAPED,
        baseline_value=8000,
        search_floor=0,
        search_ceiling=50000,
        optimum=STEPS_OPTIMUM,
        risk_scaling=0.082,
        improve_advice="Add a brisk 10-minute walk to lift your daily step count.",
        maintain_advice="Your step count is helping your lifespan. Keep it up.",
    )


def exercise_calculator() -> DoseResponseCalculator:
    return DoseResponseCalculator(
        metric_type=MetricType.EXERCISE_MINUTES,
        table=EXERCISE_RELATIVE_RISK,
        shape=ResponseShape.INCREASING,
        baseline_value=21.43,
        search_floor=0,
        search_ceiling=90,
        risk_scaling=0.126,
        improve_advice="Aim for at least 150 minutes of moderate exercise per week.",
        maintain_advice="You are meeting activity guidelines. Keep moving.",
    )


def sleep_calculator() -> DoseResponseCalculator:
    return DoseResponseCalculator(
        metric_type=MetricType.SLEEP_HOURS,
        table=SLEEP_RELATIVE_RISK,
        shape=ResponseShape.U_SHAPED,
        baseline_value=SLEEP_OPTIMUM_HOURS,
        search_floor=3,
        search_ceiling=12,
        optimum=SLEEP_OPTIMUM_HOURS,
        risk_scaling=0.05,
        improve_advice="Aim for 7 to 8 hours of sleep with a consistent bedtime.",
        maintain_advice="Your sleep duration is in the healthiest range.",
    )


def active_energy_calculator() -> DoseResponseCalculator:
    return DoseResponseCalculator(
        metric_type=MetricType.ACTIVE_ENERGY_BURNED,
        table=ACTIVE_ENERGY_MINUTES,
        shape=ResponseShape.INCREASING,
        baseline_value=400,
        search_floor=0,
        search_ceiling=1300,
        method=CalculationMethod.EXPERT_CONSENSUS,
        improve_advice="Burn more active calories with daily movement.",
        maintain_advice="Your active energy burn supports a longer life.",
    )


def activity_calculators() -> list[DoseResponseCalculator]:
    return [
        steps_calculator(),
        exercise_calculator(),
        sleep_calculator(),
        active_energy_calculator(),
    ]
