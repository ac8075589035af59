"""Cardiovascular-family calculators: heart rate, HRV, VO2 max, SpO2, body mass."""

from __future__ import annotations

from dataclasses import dataclass, replace

from vitalspan.domains.impact.domain_logic.calculator_base import DoseResponseCalculator
from vitalspan.domains.impact.domain_logic.dose_response import BreakpointTable
from vitalspan.domains.impact.domain_logic.models import (
    CalculationMethod,
    MetricImpactDetail,
    MetricType,
    ResponseShape,
    UserProfile,
)

# +16% relative risk per 10 bpm above 60.
RESTING_HEART_RATE_RELATIVE_RISK = BreakpointTable((
    (40, 0.68),
    (60, 1.0),
    (120, 1.96),
))

# 17.4 min/day per 10 ms around 40 ms, flat beyond +70 ms.
HRV_MINUTES = BreakpointTable((
    (5, -60.9),
    (40, 0.0),
    (110, 121.8),
    (150, 121.8),
))

# 21.8 min/day per 5 mL/kg/min around 40, capped at +/-20.
VO2_MAX_MINUTES = BreakpointTable((
    (15, -87.2),
    (20, -87.2),
    (40, 0.0),
    (60, 87.2),
    (80, 87.2),
))

OXYGEN_SATURATION_MINUTES = BreakpointTable((
    (80, -78.3),
    (98, 0.0),
    (100, 8.7),
))

HEALTHY_BMI = 24.5
DEFAULT_REFERENCE_MASS_KG = 72.6
# 17.4 min/day lost per 9.07 kg (20 lb) above the reference mass.
BODY_MASS_MINUTES_PER_KG = 17.4 / 9.07
BODY_MASS_MAX_EXCESS_KG = 108.8


def reference_mass_kg(profile: UserProfile) -> float:
    """Mass at a healthy BMI for the user's height, or a population default."""
    if profile.height_cm:
        height_m = profile.height_cm / 100.0
        return HEALTHY_BMI * height_m * height_m
    return DEFAULT_REFERENCE_MASS_KG


def body_mass_table(reference: float) -> BreakpointTable:
    return BreakpointTable((
        (reference - 30.0, 0.0),
        (reference, 0.0),
        (reference + BODY_MASS_MAX_EXCESS_KG, -BODY_MASS_MAX_EXCESS_KG * BODY_MASS_MINUTES_PER_KG),
    ))


@dataclass(frozen=True)
class BodyMassCalculator(DoseResponseCalculator):
    """Penalises mass above a height-personalised reference; flat below it."""

    def table_for(self, profile: UserProfile) -> BreakpointTable:
        return body_mass_table(reference_mass_kg(profile))

    def search_range(self, profile: UserProfile) -> tuple[float, float]:
        reference = reference_mass_kg(profile)
        return reference, reference + BODY_MASS_MAX_EXCESS_KG

    def evaluate(self, value: float, profile: UserProfile) -> MetricImpactDetail:
        detail = super().evaluate(value, profile)
        return replace(detail, baseline_value=round(reference_mass_kg(profile), 1))


def resting_heart_rate_calculator() -> DoseResponseCalculator:
    return DoseResponseCalculator(
        metric_type=MetricType.RESTING_HEART_RATE,
        table=RESTING_HEART_RATE_RELATIVE_RISK,
        shape=ResponseShape.DECREASING,
        baseline_value=60,
        search_floor=40,
        search_ceiling=120,
        risk_scaling=0.04,
        improve_advice="Regular aerobic exercise can lower your resting heart rate.",
        maintain_advice="Your resting heart rate reflects good cardiovascular fitness.",
    )


def heart_rate_variability_calculator() -> DoseResponseCalculator:
    return DoseResponseCalculator(
        metric_type=MetricType.HEART_RATE_VARIABILITY,
        table=HRV_MINUTES,
        shape=ResponseShape.INCREASING,
        baseline_value=40,
        search_floor=5,
        search_ceiling=150,
        method=CalculationMethod.EXPERT_CONSENSUS,
        improve_advice="Recovery, sleep, and stress management can raise your HRV.",
        maintain_advice="Your HRV indicates healthy recovery capacity.",
    )


def vo2_max_calculator() -> DoseResponseCalculator:
    return DoseResponseCalculator(
        metric_type=MetricType.VO2_MAX,
        table=VO2_MAX_MINUTES,
        shape=ResponseShape.INCREASING,
        baseline_value=40,
        search_floor=15,
        search_ceiling=80,
        improve_advice="Interval training is the fastest way to build VO2 max.",
        maintain_advice="Your cardiorespiratory fitness is a strong longevity asset.",
    )


def oxygen_saturation_calculator() -> DoseResponseCalculator:
    return DoseResponseCalculator(
        metric_type=MetricType.OXYGEN_SATURATION,
        table=OXYGEN_SATURATION_MINUTES,
        shape=ResponseShape.INCREASING,
        baseline_value=98,
        search_floor=80,
        search_ceiling=100,
        method=CalculationMethod.EXPERT_CONSENSUS,
        improve_advice="Persistently low oxygen saturation is worth discussing with a clinician.",
        maintain_advice="Your blood oxygen level is in the normal range.",
    )


def body_mass_calculator() -> BodyMassCalculator:
    return BodyMassCalculator(
        metric_type=MetricType.BODY_MASS,
        table=body_mass_table(DEFAULT_REFERENCE_MASS_KG),
        shape=ResponseShape.DECREASING,
        baseline_value=DEFAULT_REFERENCE_MASS_KG,
        search_floor=DEFAULT_REFERENCE_MASS_KG,
        search_ceiling=DEFAULT_REFERENCE_MASS_KG + BODY_MASS_MAX_EXCESS_KG,
        method=CalculationMethod.EXPERT_CONSENSUS,
        improve_advice="Gradual weight loss through diet and activity adds healthy years.",
        maintain_advice="Your weight is within a healthy range for your height.",
    )


def cardiovascular_calculators() -> list[DoseResponseCalculator]:
    return [
        resting_heart_rate_calculator(),
        heart_rate_variability_calculator(),
        vo2_max_calculator(),
        oxygen_saturation_calculator(),
        body_mass_calculator(),
    ]
