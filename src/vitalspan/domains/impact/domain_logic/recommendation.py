"""Recommendation payloads built from cached daily targets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from vitalspan.domains.impact.domain_logic.models import DailyTarget, MetricType, Period

_SPAN_TEXT = {
    Period.MONTH: "this month",
    Period.YEAR: "over the next year",
}


@dataclass(frozen=True)
class Recommendation:
    metric_type: MetricType
    period: Period
    target_value: float
    remaining: float
    benefit_minutes: float
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "metric_type": self.metric_type.value,
            "period": self.period.value,
            "target_value": round(self.target_value, 2),
            "remaining": round(self.remaining, 2),
            "benefit_minutes": round(self.benefit_minutes, 2),
            "text": self.text,
        }


def format_duration(minutes: float) -> str:
    """Human-readable duration: "12 minutes", "1.5 hours", "3 days"."""
    magnitude = abs(minutes)
    if magnitude >= 1440:
        return _plural(magnitude / 1440, "day")
    if magnitude >= 60:
        return _plural(magnitude / 60, "hour")
    return _plural(round(magnitude), "minute")


def _plural(amount: float, unit: str) -> str:
    rounded = round(amount, 1)
    if rounded == int(rounded):
        count = int(rounded)
        return f"{count} {unit}{'' if count == 1 else 's'}"
    return f"{rounded:.1f} {unit}s"


def remaining_amount(target: DailyTarget, current_value: float) -> float:
    """Distance still to cover, in the direction the target was solved."""
    if target.target_value >= target.original_current_value:
        return max(0.0, target.target_value - current_value)
    return max(0.0, current_value - target.target_value)


def build_recommendation(target: DailyTarget, current_value: float) -> Recommendation:
    remaining = remaining_amount(target, current_value)
    increase = target.target_value >= target.original_current_value

    if remaining <= 0 or target.benefit_minutes <= 0:
        text = "Great job! You've reached your daily target."
    elif target.period is Period.DAY:
        text = _daily_text(target.metric_type, remaining, increase, target.benefit_minutes)
    else:
        text = _sustained_text(target, _SPAN_TEXT[target.period])

    return Recommendation(
        metric_type=target.metric_type,
        period=target.period,
        target_value=target.target_value,
        remaining=remaining,
        benefit_minutes=target.benefit_minutes,
        text=text,
    )


def _daily_text(metric_type: MetricType, remaining: float, increase: bool, benefit: float) -> str:
    gain = f"to add {format_duration(benefit)} to your life"
    if metric_type is MetricType.STEPS:
        direction = "more" if increase else "fewer"
        return f"Walk {remaining:,.0f} {direction} steps today {gain}"
    if metric_type is MetricType.EXERCISE_MINUTES:
        return f"Exercise {format_duration(remaining)} more today {gain}"
    if metric_type is MetricType.SLEEP_HOURS:
        direction = "more" if increase else "less"
        return f"Sleep {format_duration(remaining * 60)} {direction} tonight {gain}"
    if metric_type is MetricType.ACTIVE_ENERGY_BURNED:
        return f"Burn {remaining:,.0f} more calories today {gain}"
    verb = "Raise" if increase else "Lower"
    return (
        f"{verb} your {metric_type.display_name.lower()} by "
        f"{remaining:,.1f} {metric_type.unit} {gain}"
    )


def _sustained_text(target: DailyTarget, span: str) -> str:
    gain = f"to add {format_duration(target.benefit_minutes)} to your life"
    metric_type = target.metric_type
    value = target.target_value
    if metric_type is MetricType.STEPS:
        return f"Walk {value:,.0f} steps daily {span} {gain}"
    if metric_type is MetricType.EXERCISE_MINUTES:
        return f"Exercise {format_duration(value)} daily {span} {gain}"
    if metric_type is MetricType.SLEEP_HOURS:
        return f"Sleep {format_duration(value * 60)} nightly {span} {gain}"
    if metric_type is MetricType.ACTIVE_ENERGY_BURNED:
        return f"Burn {value:,.0f} calories daily {span} {gain}"
    return (
        f"Keep your {metric_type.display_name.lower()} at "
        f"{value:,.1f} {metric_type.unit} {span} {gain}"
    )
