"""Tests for the impact domain models."""

from __future__ import annotations

from datetime import datetime

import pytest

from vitalspan.domains.impact.domain_logic.models import (
    CalculationMethod,
    DailyTarget,
    HealthMetric,
    MetricImpactDetail,
    MetricType,
    Period,
    StudyReference,
    UserProfile,
    latest_by_type,
)


class TestMetricType:
    def test_fourteen_metrics(self):
        assert len(MetricType) == 14

    def test_questionnaire_metrics(self):
        assert MetricType.STRESS_LEVEL.is_questionnaire
        assert not MetricType.STEPS.is_questionnaire

    def test_display_metadata(self):
        assert MetricType.RESTING_HEART_RATE.display_name == "Resting Heart Rate"
        assert MetricType.BODY_MASS.unit == "kg"


class TestPeriod:
    @pytest.mark.parametrize("period,days", [(Period.DAY, 1), (Period.MONTH, 30), (Period.YEAR, 365)])
    def test_days(self, period, days):
        assert period.days == days


class TestUserProfile:
    def test_age_in_year(self):
        assert UserProfile(birth_year=1986).age_in(2026) == 40

    def test_missing_birth_year(self):
        profile = UserProfile()
        assert profile.age is None
        assert not profile.has_required_data


class TestLatestByType:
    def test_first_wins_on_equal_dates(self):
        when = datetime(2026, 3, 14)
        first = HealthMetric(MetricType.STEPS, 1000, date=when)
        second = HealthMetric(MetricType.STEPS, 2000, date=when)
        assert latest_by_type([first, second])[MetricType.STEPS] is first


class TestStudyReference:
    def test_surname_first_authors(self):
        ref = StudyReference(title="t", authors="Saint-Maurice PF, Troiano RP", journal="JAMA", year=2020)
        assert ref.short_citation == "Saint-Maurice et al. (2020)"

    def test_given_name_first_authors(self):
        ref = StudyReference(title="t", authors="I-Min Lee, Eric J. Shiroma", journal="JAMA", year=2019)
        assert ref.short_citation == "Lee et al. (2019)"

    def test_citation(self):
        ref = StudyReference(title="Steps", authors="Paluch AE", journal="Lancet", year=2022)
        assert ref.citation == "Paluch AE (2022). Steps. Lancet."


class TestMetricImpactDetail:
    def _detail(self) -> MetricImpactDetail:
        return MetricImpactDetail(
            metric_type=MetricType.SLEEP_HOURS,
            current_value=7.0,
            baseline_value=7.5,
            lifespan_impact_minutes=-10.0,
            calculation_method=CalculationMethod.DOSE_RESPONSE_INTERPOLATION,
        )

    def test_adjustment_keeps_base(self):
        adjusted = self._detail().with_adjustment(0.8)
        assert adjusted.lifespan_impact_minutes == pytest.approx(-8.0)
        assert adjusted.base_impact_minutes == -10.0

    def test_readjustment_starts_from_base(self):
        adjusted = self._detail().with_adjustment(0.8).with_adjustment(0.5)
        assert adjusted.lifespan_impact_minutes == pytest.approx(-5.0)

    def test_to_dict_rounds(self):
        data = self._detail().with_adjustment(1 / 3).to_dict()
        assert data["lifespan_impact_minutes"] == -3.33
        assert data["calculation_method"] == "dose_response_interpolation"


class TestDailyTarget:
    def _target(self, original: float = 4000) -> DailyTarget:
        return DailyTarget(
            metric_type=MetricType.STEPS,
            period=Period.DAY,
            target_value=8750,
            original_current_value=original,
            benefit_minutes=25.0,
            created_at=datetime(2026, 3, 14, 23, 59),
        )

    def test_drift_is_relative(self):
        assert self._target().drift(4040) == pytest.approx(0.01)

    def test_drift_near_zero_uses_unit_floor(self):
        assert self._target(original=0).drift(0.005) == pytest.approx(0.005)

    def test_valid_same_calendar_day_only(self):
        target = self._target()
        assert target.is_valid_for(datetime(2026, 3, 14, 0, 1))
        assert not target.is_valid_for(datetime(2026, 3, 15, 0, 0))

    def test_dict_round_trip(self):
        target = self._target()
        assert DailyTarget.from_dict(target.to_dict()) == target
