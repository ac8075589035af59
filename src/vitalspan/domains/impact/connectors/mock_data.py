"""Mock health data generators for development and testing.

All mock data represents a median adult: not in crisis, not perfectly
optimised. Impacts derived from this data should be a mix of small gains
and small losses.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from vitalspan.domains.impact.domain_logic.models import (
    Gender,
    HealthMetric,
    MetricSource,
    MetricType,
    UserProfile,
)

_DEVICE_READINGS = {
    MetricType.STEPS: 6400,
    MetricType.EXERCISE_MINUTES: 18,
    MetricType.SLEEP_HOURS: 6.8,
    MetricType.RESTING_HEART_RATE: 68,
    MetricType.HEART_RATE_VARIABILITY: 42,
    MetricType.BODY_MASS: 78.5,
    MetricType.ACTIVE_ENERGY_BURNED: 420,
    MetricType.VO2_MAX: 38.5,
    MetricType.OXYGEN_SATURATION: 97.2,
}

# Questionnaire answers on the 1-10 scale.
_QUESTIONNAIRE_ANSWERS = {
    MetricType.NUTRITION_QUALITY: 6,
    MetricType.SMOKING_STATUS: 10,
    MetricType.ALCOHOL_CONSUMPTION: 8,
    MetricType.SOCIAL_CONNECTIONS_QUALITY: 7,
    MetricType.STRESS_LEVEL: 5,
}


def get_mock_metrics(now: datetime | None = None) -> list[HealthMetric]:
    """Return one reading per metric type, device readings from this morning."""
    now = now or datetime.now()
    morning = now.replace(hour=7, minute=0, second=0, microsecond=0)
    metrics = [
        HealthMetric(type=metric_type, value=value, date=morning, source=MetricSource.DEVICE)
        for metric_type, value in _DEVICE_READINGS.items()
    ]
    answered = now - timedelta(days=3)
    metrics.extend(
        HealthMetric(type=metric_type, value=value, date=answered, source=MetricSource.USER_ENTERED)
        for metric_type, value in _QUESTIONNAIRE_ANSWERS.items()
    )
    return metrics


def get_mock_profile(now: datetime | None = None) -> UserProfile:
    """Return a 40-year-old profile with height and weight on file."""
    now = now or datetime.now()
    return UserProfile(
        id="mock-user",
        birth_year=now.year - 40,
        gender=Gender.FEMALE,
        height_cm=168.0,
        weight_kg=78.5,
        has_completed_onboarding=True,
        has_completed_questionnaire=True,
    )
