"""Unit tests for the lifespan impact MCP tools."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime

import pytest
from fastmcp import Client

from vitalspan.core.server.app import create_app
from vitalspan.core.storage.kv_store import InMemoryKeyValueStore
from vitalspan.domains.impact.connectors.providers import StaticHealthDataSource
from vitalspan.domains.impact.domain_logic.models import (
    Gender,
    HealthMetric,
    MetricSource,
    MetricType,
    Period,
    UserProfile,
)
from vitalspan.domains.impact.tools.lifespan_impact_tools import (
    parse_gender,
    parse_metric_type,
    parse_metrics,
    parse_period,
)


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio required)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _payload(result) -> dict:
    return json.loads(getattr(result, "content", result)[0].text)


@pytest.fixture
def static_client():
    """Server backed by a few hand-entered readings."""
    when = datetime(2026, 3, 14, 7, 0)
    source = StaticHealthDataSource(
        [
            HealthMetric(MetricType.SLEEP_HOURS, 7.5, date=when),
            HealthMetric(MetricType.EXERCISE_MINUTES, 30, date=when),
            HealthMetric(MetricType.RESTING_HEART_RATE, 72, date=when),
        ],
        UserProfile(id="static", birth_year=datetime.now().year - 50, gender=Gender.MALE),
    )
    mcp = create_app(data_source_override=source, store_override=InMemoryKeyValueStore())
    return Client(mcp)


class TestParsing:
    def test_metric_type_is_case_insensitive(self):
        assert parse_metric_type(" Steps ") == MetricType.STEPS

    def test_unknown_metric_type(self):
        with pytest.raises(ValueError, match="Unknown metric type"):
            parse_metric_type("glucose")

    def test_period(self):
        assert parse_period("YEAR") == Period.YEAR
        with pytest.raises(ValueError, match="Unknown period"):
            parse_period("week")

    def test_gender(self):
        assert parse_gender(None) is None
        assert parse_gender("Female") == Gender.FEMALE
        with pytest.raises(ValueError):
            parse_gender("other")

    def test_metrics_mapping(self):
        when = datetime(2026, 3, 14)
        metrics = parse_metrics({"steps": 5000, "sleep_hours": "7.5"}, now=when)
        assert [(m.type, m.value) for m in metrics] == [
            (MetricType.STEPS, 5000.0),
            (MetricType.SLEEP_HOURS, 7.5),
        ]
        assert all(m.source == MetricSource.USER_ENTERED and m.date == when for m in metrics)


class TestTools:
    def test_active_interactions_from_source(self, static_client):
        async def _check():
            async with static_client:
                data = _payload(await static_client.call_tool("active_interactions", {}))
                titles = [i["title"] for i in data["interactions"]]
                assert "Sleep-Exercise Synergy" in titles
                assert data["provenance"]["data_source"] == "manual"
        _run(_check())

    def test_lifespan_impact_from_arguments(self, static_client):
        async def _check():
            async with static_client:
                data = _payload(await static_client.call_tool(
                    "lifespan_impact", {"metrics": {"steps": 2000}, "period": "month"}
                ))
                assert data["provenance"] == {"data_source": "arguments"}
                assert data["total_impact_minutes"] < 0
        _run(_check())

    def test_metric_impact_without_birth_year(self):
        source = StaticHealthDataSource([], UserProfile(id="anon"))
        client = Client(create_app(data_source_override=source, store_override=InMemoryKeyValueStore()))

        async def _check():
            async with client:
                data = _payload(await client.call_tool(
                    "metric_impact", {"metric_type": "steps", "value": 2000}
                ))
                assert data["lifespan_impact_minutes"] == 0.0
                assert data["calculation_method"] == "algorithmic_estimate"
        _run(_check())

    def test_daily_target_uses_latest_reading(self, static_client):
        async def _check():
            async with static_client:
                data = _payload(await static_client.call_tool(
                    "daily_target", {"metric_type": "resting_heart_rate"}
                ))
                assert data["current_value"] == 72
                assert data["target"]["target_value"] < 72
                assert data["recommendation"]["text"].startswith("Lower your resting heart rate")
        _run(_check())

    def test_daily_target_without_reading(self, static_client):
        async def _check():
            async with static_client:
                data = _payload(await static_client.call_tool(
                    "daily_target", {"metric_type": "vo2_max"}
                ))
                assert data["status"] == "error"
                assert "vo2_max" in data["message"]
        _run(_check())
