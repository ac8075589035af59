"""Lifespan impact models: metrics, profiles, impact results, and daily targets."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class MetricType(str, Enum):
    """The fourteen health metrics the engine understands."""

    STEPS = "steps"
    EXERCISE_MINUTES = "exercise_minutes"
    SLEEP_HOURS = "sleep_hours"
    RESTING_HEART_RATE = "resting_heart_rate"
    HEART_RATE_VARIABILITY = "heart_rate_variability"
    BODY_MASS = "body_mass"
    ACTIVE_ENERGY_BURNED = "active_energy_burned"
    VO2_MAX = "vo2_max"
    OXYGEN_SATURATION = "oxygen_saturation"
    NUTRITION_QUALITY = "nutrition_quality"
    SMOKING_STATUS = "smoking_status"
    ALCOHOL_CONSUMPTION = "alcohol_consumption"
    SOCIAL_CONNECTIONS_QUALITY = "social_connections_quality"
    STRESS_LEVEL = "stress_level"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def unit(self) -> str:
        return _UNITS[self]

    @property
    def is_questionnaire(self) -> bool:
        """Questionnaire metrics are self-reported on a 1-10 scale."""
        return self in _QUESTIONNAIRE_METRICS


_DISPLAY_NAMES = {
    MetricType.STEPS: "Steps",
    MetricType.EXERCISE_MINUTES: "Exercise",
    MetricType.SLEEP_HOURS: "Sleep",
    MetricType.RESTING_HEART_RATE: "Resting Heart Rate",
    MetricType.HEART_RATE_VARIABILITY: "Heart Rate Variability",
    MetricType.BODY_MASS: "Weight",
    MetricType.ACTIVE_ENERGY_BURNED: "Active Energy",
    MetricType.VO2_MAX: "VO2 Max",
    MetricType.OXYGEN_SATURATION: "Oxygen Saturation",
    MetricType.NUTRITION_QUALITY: "Nutrition Quality",
    MetricType.SMOKING_STATUS: "Smoking Status",
    MetricType.ALCOHOL_CONSUMPTION: "Alcohol Consumption",
    MetricType.SOCIAL_CONNECTIONS_QUALITY: "Social Connections",
    MetricType.STRESS_LEVEL: "Stress Level",
}

_UNITS = {
    MetricType.STEPS: "steps",
    MetricType.EXERCISE_MINUTES: "min",
    MetricType.SLEEP_HOURS: "hr",
    MetricType.RESTING_HEART_RATE: "bpm",
    MetricType.HEART_RATE_VARIABILITY: "ms",
    MetricType.BODY_MASS: "kg",
    MetricType.ACTIVE_ENERGY_BURNED: "kcal",
    MetricType.VO2_MAX: "mL/kg/min",
    MetricType.OXYGEN_SATURATION: "%",
    MetricType.NUTRITION_QUALITY: "score",
    MetricType.SMOKING_STATUS: "score",
    MetricType.ALCOHOL_CONSUMPTION: "score",
    MetricType.SOCIAL_CONNECTIONS_QUALITY: "score",
    MetricType.STRESS_LEVEL: "score",
}

_QUESTIONNAIRE_METRICS = frozenset({
    MetricType.NUTRITION_QUALITY,
    MetricType.SMOKING_STATUS,
    MetricType.ALCOHOL_CONSUMPTION,
    MetricType.SOCIAL_CONNECTIONS_QUALITY,
    MetricType.STRESS_LEVEL,
})


class MetricSource(str, Enum):
    DEVICE = "device"
    USER_ENTERED = "user_entered"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


class Period(str, Enum):
    """Reporting period. Impacts are computed per day and scaled by ``days``."""

    DAY = "day"
    MONTH = "month"
    YEAR = "year"

    @property
    def days(self) -> int:
        return _PERIOD_DAYS[self]


_PERIOD_DAYS = {Period.DAY: 1, Period.MONTH: 30, Period.YEAR: 365}


class CalculationMethod(str, Enum):
    """How an impact figure was produced, in decreasing order of confidence."""

    DOSE_RESPONSE_INTERPOLATION = "dose_response_interpolation"
    EXPERT_CONSENSUS = "expert_consensus"
    ALGORITHMIC_ESTIMATE = "algorithmic_estimate"


class ResponseShape(str, Enum):
    """Direction in which a metric's value improves lifespan impact."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    U_SHAPED = "u_shaped"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HealthMetric:
    """A single time-stamped reading for one metric type."""

    type: MetricType
    value: float
    date: datetime = field(default_factory=datetime.now)
    source: MetricSource = MetricSource.DEVICE
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


def latest_by_type(metrics: list[HealthMetric]) -> dict[MetricType, HealthMetric]:
    """Keep the freshest reading per metric type (first one wins on equal dates)."""
    latest: dict[MetricType, HealthMetric] = {}
    for metric in metrics:
        current = latest.get(metric.type)
        if current is None or metric.date > current.date:
            latest[metric.type] = metric
    return latest


@dataclass(frozen=True)
class UserProfile:
    """Personalisation data used by the relative-risk calculators."""

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    birth_year: int | None = None
    gender: Gender | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    is_subscribed: bool = False
    has_completed_onboarding: bool = False
    has_completed_questionnaire: bool = False

    @property
    def age(self) -> int | None:
        return self.age_in(datetime.now().year)

    def age_in(self, year: int) -> int | None:
        if self.birth_year is None:
            return None
        return max(0, year - self.birth_year)

    @property
    def has_required_data(self) -> bool:
        return self.birth_year is not None


@dataclass(frozen=True)
class StudyReference:
    """A published study backing a dose-response curve."""

    title: str
    authors: str
    journal: str
    year: int
    doi: str | None = None
    url: str | None = None
    summary: str = ""

    @property
    def citation(self) -> str:
        return f"{self.authors} ({self.year}). {self.title}. {self.journal}."

    @property
    def short_citation(self) -> str:
        tokens = self.authors.split(",")[0].split()
        if not tokens:
            return f"Unknown ({self.year})"
        # "Moore SC" style lists put the surname first; "I-Min Lee" style last.
        surname = tokens[0] if len(tokens) > 1 and tokens[-1].isupper() else tokens[-1]
        return f"{surname} et al. ({self.year})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "authors": self.authors,
            "journal": self.journal,
            "year": self.year,
            "doi": self.doi,
            "citation": self.short_citation,
        }


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MetricImpactDetail:
    """Per-day lifespan impact of one metric value.

    ``base_impact_minutes`` is set once an interaction adjustment has been
    applied and always holds the calculator's unadjusted figure.
    """

    metric_type: MetricType
    current_value: float
    baseline_value: float
    lifespan_impact_minutes: float
    calculation_method: CalculationMethod
    study_references: tuple[StudyReference, ...] = ()
    recommendation: str = ""
    base_impact_minutes: float | None = None

    @property
    def unadjusted_impact_minutes(self) -> float:
        if self.base_impact_minutes is not None:
            return self.base_impact_minutes
        return self.lifespan_impact_minutes

    @property
    def is_positive(self) -> bool:
        return self.lifespan_impact_minutes >= 0

    def with_adjustment(self, multiplier: float) -> MetricImpactDetail:
        """Return a copy whose impact is the unadjusted impact times ``multiplier``."""
        base = self.unadjusted_impact_minutes
        return replace(
            self,
            lifespan_impact_minutes=base * multiplier,
            base_impact_minutes=base,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "metric_type": self.metric_type.value,
            "current_value": self.current_value,
            "baseline_value": self.baseline_value,
            "lifespan_impact_minutes": round(self.lifespan_impact_minutes, 2),
            "calculation_method": self.calculation_method.value,
            "recommendation": self.recommendation,
            "study_references": [ref.to_dict() for ref in self.study_references],
        }


@dataclass
class TotalImpact:
    """Aggregated, period-scaled impact across a set of metrics."""

    total_impact_minutes: float
    per_metric_impacts: dict[MetricType, float]
    period: Period
    daily_total_minutes: float
    impacts: list[MetricImpactDetail] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period.value,
            "total_impact_minutes": round(self.total_impact_minutes, 2),
            "daily_total_minutes": round(self.daily_total_minutes, 2),
            "per_metric_impacts": {
                metric.value: round(minutes, 2)
                for metric, minutes in self.per_metric_impacts.items()
            },
            "metrics": [impact.to_dict() for impact in self.impacts],
        }


@dataclass(frozen=True)
class Interaction:
    """Display record for an interaction rule that is currently firing."""

    title: str
    description: str
    impact_modifier: str
    is_positive: bool
    affected_metrics: tuple[MetricType, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "impact_modifier": self.impact_modifier,
            "is_positive": self.is_positive,
            "affected_metrics": [m.value for m in self.affected_metrics],
        }


@dataclass(frozen=True)
class DailyTarget:
    """A solved target for one (metric, period), as persisted by the cache.

    ``benefit_minutes`` is already scaled to ``period``.
    """

    metric_type: MetricType
    period: Period
    target_value: float
    original_current_value: float
    benefit_minutes: float
    created_at: datetime
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def drift(self, current_value: float) -> float:
        """Relative distance between ``current_value`` and the value solved for."""
        denominator = max(abs(self.original_current_value), 1.0)
        return abs(current_value - self.original_current_value) / denominator

    def is_valid_for(self, now: datetime) -> bool:
        """Targets are valid only on the calendar day they were created."""
        return self.created_at.date() == now.date()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "metric_type": self.metric_type.value,
            "period": self.period.value,
            "target_value": self.target_value,
            "original_current_value": self.original_current_value,
            "benefit_minutes": self.benefit_minutes,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DailyTarget:
        return cls(
            id=data["id"],
            metric_type=MetricType(data["metric_type"]),
            period=Period(data["period"]),
            target_value=float(data["target_value"]),
            original_current_value=float(data["original_current_value"]),
            benefit_minutes=float(data["benefit_minutes"]),
            created_at=datetime.fromisoformat(data["created_at"]),
        )
