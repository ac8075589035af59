"""Tests for LifeProjectionService and the life-table baseline."""

from __future__ import annotations

from datetime import datetime

import pytest

from vitalspan.domains.impact.domain_logic.life_projection import (
    MAX_LIFESPAN_YEARS,
    LifeProjection,
    LifeProjectionService,
    baseline_life_expectancy,
    evidence_quality,
)
from vitalspan.domains.impact.domain_logic.models import (
    CalculationMethod,
    Gender,
    HealthMetric,
    MetricImpactDetail,
    MetricType,
    UserProfile,
)


def _detail(method: CalculationMethod) -> MetricImpactDetail:
    return MetricImpactDetail(
        metric_type=MetricType.STEPS,
        current_value=5000,
        baseline_value=8000,
        lifespan_impact_minutes=-10.0,
        calculation_method=method,
    )


class TestBaseline:
    def test_female_at_forty(self):
        assert baseline_life_expectancy(40, Gender.FEMALE) == pytest.approx(78.1)

    def test_male_at_forty(self):
        assert baseline_life_expectancy(40, Gender.MALE) == pytest.approx(73.5)

    def test_unknown_gender_averages_tables(self):
        assert baseline_life_expectancy(30, None) == pytest.approx(30 + (42.8 + 47.7) / 2)

    def test_interpolates_between_ages(self):
        assert baseline_life_expectancy(45, Gender.FEMALE) == pytest.approx(45 + (38.1 + 28.8) / 2)

    def test_very_old_keeps_one_year(self):
        assert baseline_life_expectancy(100, Gender.MALE) == pytest.approx(101)


class TestEvidenceQuality:
    def test_average_of_methods(self):
        impacts = [
            _detail(CalculationMethod.DOSE_RESPONSE_INTERPOLATION),
            _detail(CalculationMethod.ALGORITHMIC_ESTIMATE),
        ]
        assert evidence_quality(impacts) == pytest.approx(0.65)

    def test_empty(self):
        assert evidence_quality([]) == 0.0

    @pytest.mark.parametrize("confidence,label", [
        (0.9, "High confidence (90% evidence quality)"),
        (0.7, "Moderate confidence (70% evidence quality)"),
        (0.5, "Limited confidence (50% evidence quality)"),
        (0.2, "Low confidence (20% evidence quality)"),
    ])
    def test_confidence_description(self, confidence, label):
        projection = LifeProjection(baseline_years=80, adjusted_years=80, current_age=40,
                                    confidence=confidence)
        assert projection.confidence_description == label


class TestProjectDailyImpact:
    def test_zero_impact_is_baseline(self, profile):
        projection = LifeProjectionService().project_daily_impact(0.0, profile, 0.9)
        assert projection.adjusted_years == pytest.approx(78.1)
        assert projection.net_impact_years == pytest.approx(0.0)
        assert projection.remaining_years == pytest.approx(38.1)

    def test_positive_impact_is_discounted(self, profile):
        projection = LifeProjectionService().project_daily_impact(60.0, profile, 1.0)
        undiscounted = 60.0 * 38.1 / 1440
        assert 0 < projection.net_impact_years < undiscounted

    def test_evidence_quality_scales_impact(self, profile):
        service = LifeProjectionService()
        strong = service.project_daily_impact(60.0, profile, 0.9)
        weak = service.project_daily_impact(60.0, profile, 0.45)
        assert weak.net_impact_years == pytest.approx(strong.net_impact_years / 2)

    def test_clamped_above(self, profile):
        projection = LifeProjectionService().project_daily_impact(100000.0, profile, 1.0)
        assert projection.adjusted_years == MAX_LIFESPAN_YEARS

    def test_clamped_below(self, profile):
        projection = LifeProjectionService().project_daily_impact(-100000.0, profile, 1.0)
        assert projection.adjusted_years == pytest.approx(41)

    def test_missing_birth_year_uses_default_age(self, anonymous_profile):
        projection = LifeProjectionService().project_daily_impact(0.0, anonymous_profile, 0.5)
        assert projection.current_age == 30
        assert projection.adjusted_years == pytest.approx(30 + (42.8 + 47.7) / 2)

    def test_range_is_symmetric(self, profile):
        data = LifeProjectionService().project_daily_impact(0.0, profile, 0.9).to_dict()
        assert data["range_years"] == [76.1, 80.1]


class TestProject:
    def test_harmful_metrics_shorten_projection(self, aggregator, profile):
        when = datetime(2026, 3, 14)
        metrics = [
            HealthMetric(MetricType.STEPS, 1500, date=when),
            HealthMetric(MetricType.SLEEP_HOURS, 4.5, date=when),
            HealthMetric(MetricType.SMOKING_STATUS, 2, date=when),
        ]
        projection = LifeProjectionService(aggregator).project(metrics, profile)
        assert projection.net_impact_years < 0
        assert projection.confidence > 0

    def test_no_metrics_is_baseline(self, aggregator):
        profile = UserProfile(birth_year=datetime.now().year - 40, gender=Gender.MALE)
        projection = LifeProjectionService(aggregator).project([], profile)
        assert projection.adjusted_years == pytest.approx(73.5)
        assert projection.confidence == 0.0
