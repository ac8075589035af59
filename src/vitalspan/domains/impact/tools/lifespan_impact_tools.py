"""MCP tools for lifespan impact, daily targets, and life projection.

Metric values can be passed directly as a ``{metric_type: value}`` mapping;
when omitted, readings and profile come from the configured health data
source. All tools return JSON strings.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from fastmcp import FastMCP

from vitalspan.core.storage.kv_store import StorageError
from vitalspan.domains.impact.connectors import HealthDataSource
from vitalspan.domains.impact.domain_logic.aggregator import ImpactAggregator
from vitalspan.domains.impact.domain_logic.daily_target_cache import DailyTargetCache
from vitalspan.domains.impact.domain_logic.life_projection import LifeProjectionService
from vitalspan.domains.impact.domain_logic.models import (
    Gender,
    HealthMetric,
    MetricSource,
    MetricType,
    Period,
    UserProfile,
    latest_by_type,
)
from vitalspan.domains.impact.domain_logic.recommendation import build_recommendation

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def parse_metric_type(name: str) -> MetricType:
    try:
        return MetricType(name.strip().lower())
    except ValueError:
        valid = ", ".join(m.value for m in MetricType)
        raise ValueError(f"Unknown metric type {name!r}. Expected one of: {valid}") from None


def parse_period(name: str) -> Period:
    try:
        return Period(name.strip().lower())
    except ValueError:
        raise ValueError(f"Unknown period {name!r}. Expected day, month, or year") from None


def parse_gender(name: str | None) -> Gender | None:
    if not name:
        return None
    try:
        return Gender(name.strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown gender {name!r}. Expected male, female, or prefer_not_to_say"
        ) from None


def parse_metrics(values: dict[str, float], now: datetime | None = None) -> list[HealthMetric]:
    """Turn a ``{metric_type: value}`` mapping into user-entered readings."""
    now = now or datetime.now()
    return [
        HealthMetric(
            type=parse_metric_type(name),
            value=float(value),
            date=now,
            source=MetricSource.USER_ENTERED,
        )
        for name, value in values.items()
    ]


def register_lifespan_impact_tools(
    mcp: FastMCP,
    aggregator: ImpactAggregator,
    target_cache: DailyTargetCache,
    projection_service: LifeProjectionService,
    data_source: HealthDataSource,
) -> None:
    """Register lifespan impact tools on the MCP server."""

    async def _resolve_metrics(metrics: dict[str, float] | None) -> list[HealthMetric]:
        if metrics:
            return parse_metrics(metrics)
        return await data_source.get_metrics()

    async def _resolve_profile(
        birth_year: int | None, gender: str | None, height_cm: float | None
    ) -> UserProfile:
        stored = await data_source.get_profile()
        if birth_year is None and gender is None and height_cm is None:
            return stored
        return UserProfile(
            id=stored.id,
            birth_year=birth_year if birth_year is not None else stored.birth_year,
            gender=parse_gender(gender) or stored.gender,
            height_cm=height_cm if height_cm is not None else stored.height_cm,
            weight_kg=stored.weight_kg,
        )

    def _provenance(metrics: dict[str, float] | None) -> dict[str, str]:
        if metrics:
            return {"data_source": "arguments"}
        return data_source.get_provenance()

    @mcp.tool
    async def lifespan_impact(
        metrics: dict[str, float] | None = None,
        period: str = "day",
        birth_year: int | None = None,
        gender: str | None = None,
        height_cm: float | None = None,
    ) -> str:
        """Estimate how your current health metrics add to or subtract from your lifespan.

        Each metric is converted to lifespan minutes per day using published
        dose-response research, adjusted for interactions between metrics
        (e.g., good sleep amplifies exercise), then scaled to the period.

        Args:
            metrics: Optional mapping of metric type to value
                (e.g., {"steps": 6500, "sleep_hours": 7.2}). Defaults to the
                connected health data source.
            period: 'day', 'month', or 'year'.
            birth_year: Optional birth year override for personalisation.
            gender: Optional 'male', 'female', or 'prefer_not_to_say'.
            height_cm: Optional height used to personalise body mass impact.
        """
        effective_period = parse_period(period)
        readings = await _resolve_metrics(metrics)
        profile = await _resolve_profile(birth_year, gender, height_cm)

        total = aggregator.total_impact(readings, profile, effective_period)
        interactions = aggregator.engine.active_interactions(readings)

        result: dict[str, Any] = total.to_dict()
        result["active_interactions"] = [i.to_dict() for i in interactions]
        result["provenance"] = _provenance(metrics)
        return json.dumps(result)

    @mcp.tool
    async def metric_impact(
        metric_type: str,
        value: float,
        birth_year: int | None = None,
        gender: str | None = None,
        height_cm: float | None = None,
    ) -> str:
        """Estimate the daily lifespan impact of a single metric value.

        Args:
            metric_type: One of the supported metric types (e.g., 'steps').
            value: The metric value in its native unit.
            birth_year: Optional birth year override for personalisation.
            gender: Optional 'male', 'female', or 'prefer_not_to_say'.
            height_cm: Optional height used to personalise body mass impact.
        """
        effective_type = parse_metric_type(metric_type)
        profile = await _resolve_profile(birth_year, gender, height_cm)
        detail = aggregator.registry.evaluate(effective_type, value, profile)
        return json.dumps(detail.to_dict())

    @mcp.tool
    async def daily_target(
        metric_type: str,
        value: float | None = None,
        period: str = "day",
        birth_year: int | None = None,
        gender: str | None = None,
        height_cm: float | None = None,
    ) -> str:
        """Find the value of a metric you would need to reach to improve your lifespan impact.

        Harmful values are solved toward the neutral point; helpful values
        toward a further improvement. Targets are cached for the day and
        re-solved when your value moves by 1% or more.

        Args:
            metric_type: One of the supported metric types (e.g., 'steps').
            value: Current value. Defaults to the latest reading from the data source.
            period: 'day', 'month', or 'year' (scales the reported benefit).
            birth_year: Optional birth year override for personalisation.
            gender: Optional 'male', 'female', or 'prefer_not_to_say'.
            height_cm: Optional height used to personalise body mass impact.
        """
        effective_type = parse_metric_type(metric_type)
        effective_period = parse_period(period)

        if value is None:
            latest = latest_by_type(await data_source.get_metrics())
            reading = latest.get(effective_type)
            if reading is None:
                return json.dumps({
                    "status": "error",
                    "message": f"No {effective_type.value} reading available",
                })
        else:
            reading = HealthMetric(
                type=effective_type, value=float(value), source=MetricSource.USER_ENTERED
            )

        profile = await _resolve_profile(birth_year, gender, height_cm)
        target = target_cache.get_or_solve(reading, effective_period, profile)
        recommendation = build_recommendation(target, reading.value)
        logger.info(
            "Daily target for %s/%s: %.2f", effective_type.value, effective_period.value,
            target.target_value,
        )
        return json.dumps({
            "status": "ok",
            "current_value": reading.value,
            "target": target.to_dict(),
            "recommendation": recommendation.to_dict(),
        })

    @mcp.tool
    async def active_interactions(metrics: dict[str, float] | None = None) -> str:
        """List the synergies and antagonisms currently affecting your metrics.

        Args:
            metrics: Optional mapping of metric type to value. Defaults to the
                connected health data source.
        """
        readings = await _resolve_metrics(metrics)
        interactions = aggregator.engine.active_interactions(readings)
        return json.dumps({
            "interactions": [i.to_dict() for i in interactions],
            "provenance": _provenance(metrics),
        })

    @mcp.tool
    async def life_projection(
        metrics: dict[str, float] | None = None,
        birth_year: int | None = None,
        gender: str | None = None,
        height_cm: float | None = None,
    ) -> str:
        """Project your total life expectancy from your current health metrics.

        Args:
            metrics: Optional mapping of metric type to value. Defaults to the
                connected health data source.
            birth_year: Optional birth year override.
            gender: Optional 'male', 'female', or 'prefer_not_to_say'.
            height_cm: Optional height used to personalise body mass impact.
        """
        readings = await _resolve_metrics(metrics)
        profile = await _resolve_profile(birth_year, gender, height_cm)
        projection = projection_service.project(readings, profile)
        result = projection.to_dict()
        result["provenance"] = _provenance(metrics)
        return json.dumps(result)

    @mcp.tool
    async def clear_daily_targets() -> str:
        """Delete all cached daily targets so they are re-solved on next request."""
        try:
            removed = target_cache.clear()
        except StorageError as exc:
            logger.error("Failed to clear daily targets: %s", exc)
            return json.dumps({"status": "error", "message": str(exc)})
        return json.dumps({"status": "cleared", "removed": removed})
