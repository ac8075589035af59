"""Tests for the activity, cardiovascular, and lifestyle calculators."""

from __future__ import annotations

from datetime import datetime

import pytest

from vitalspan.domains.impact.domain_logic.activity_calculator import (
    active_energy_calculator,
    exercise_calculator,
    sleep_calculator,
    steps_calculator,
)
from vitalspan.domains.impact.domain_logic.calculator_base import ImpactCalculator
from vitalspan.domains.impact.domain_logic.cardiovascular_calculator import (
    body_mass_calculator,
    heart_rate_variability_calculator,
    oxygen_saturation_calculator,
    reference_mass_kg,
    resting_heart_rate_calculator,
    vo2_max_calculator,
)
from vitalspan.domains.impact.domain_logic.lifestyle_calculator import (
    alcohol_calculator,
    nutrition_calculator,
    smoking_calculator,
    social_connections_calculator,
    stress_calculator,
)
from vitalspan.domains.impact.domain_logic.models import (
    CalculationMethod,
    MetricType,
    ResponseShape,
    UserProfile,
)


def _minutes(calculator, value, profile) -> float:
    return calculator.evaluate(value, profile).lifespan_impact_minutes


class TestSteps:
    def test_low_steps_are_harmful(self, profile):
        assert _minutes(steps_calculator(), 2000, profile) < 0

    def test_ten_thousand_steps_are_protective(self, profile):
        assert _minutes(steps_calculator(), 10000, profile) > 0

    def test_more_steps_help_up_to_twelve_thousand(self, profile):
        calc = steps_calculator()
        values = [_minutes(calc, s, profile) for s in (1000, 4000, 7000, 9000, 12000)]
        assert values == sorted(values)

    def test_steps_past_optimum_lose_benefit(self, profile):
        calc = steps_calculator()
        values = [_minutes(calc, s, profile) for s in (12000, 20000, 25000, 30000)]
        assert values == sorted(values, reverse=True)
        assert values[-1] < 0

    def test_very_high_steps_level_off(self, profile):
        calc = steps_calculator()
        assert _minutes(calc, 100000, profile) == pytest.approx(_minutes(calc, 35000, profile))

    def test_optimum_metadata(self):
        calc = steps_calculator()
        assert calc.shape == ResponseShape.U_SHAPED
        assert calc.optimum == 12000
        assert calc.has_interior_optimum

    def test_in_range_uses_dose_response(self, profile):
        detail = steps_calculator().evaluate(6500, profile)
        assert detail.calculation_method == CalculationMethod.DOSE_RESPONSE_INTERPOLATION
        assert detail.study_references

    def test_extrapolation_is_flagged(self, profile):
        detail = steps_calculator().evaluate(60000, profile)
        assert detail.calculation_method == CalculationMethod.ALGORITHMIC_ESTIMATE

    def test_missing_birth_year_degrades_to_zero(self, anonymous_profile):
        detail = steps_calculator().evaluate(2000, anonymous_profile)
        assert detail.lifespan_impact_minutes == 0.0
        assert detail.calculation_method == CalculationMethod.ALGORITHMIC_ESTIMATE
        assert "birth year" in detail.recommendation

    def test_younger_users_spread_impact_over_more_days(self):
        calc = steps_calculator()
        year = datetime.now().year
        young = UserProfile(birth_year=year - 30)
        older = UserProfile(birth_year=year - 60)
        assert abs(_minutes(calc, 2000, young)) < abs(_minutes(calc, 2000, older))


class TestExercise:
    def test_no_exercise_is_neutral(self, profile):
        assert _minutes(exercise_calculator(), 0, profile) == pytest.approx(0.0)

    def test_guideline_exercise_is_protective(self, profile):
        assert _minutes(exercise_calculator(), 30, profile) > 0


class TestSleep:
    def test_optimum_is_not_harmful(self, profile):
        assert _minutes(sleep_calculator(), 7.5, profile) >= 0

    def test_short_sleep_is_harmful(self, profile):
        assert _minutes(sleep_calculator(), 4.0, profile) < 0

    def test_long_sleep_is_harmful(self, profile):
        assert _minutes(sleep_calculator(), 11.0, profile) < 0

    def test_u_shape_metadata(self):
        calc = sleep_calculator()
        assert calc.shape == ResponseShape.U_SHAPED
        assert calc.optimum == 7.5
        assert calc.has_interior_optimum

    def test_monotonic_curves_have_no_interior_optimum(self):
        assert not exercise_calculator().has_interior_optimum


class TestActiveEnergy:
    def test_reference_burn_is_neutral(self, anonymous_profile):
        assert _minutes(active_energy_calculator(), 400, anonymous_profile) == pytest.approx(0.0)

    def test_linear_above_reference(self, anonymous_profile):
        assert _minutes(active_energy_calculator(), 850, anonymous_profile) == pytest.approx(78.3)


class TestCardiovascular:
    def test_low_resting_heart_rate_is_protective(self, profile):
        assert _minutes(resting_heart_rate_calculator(), 50, profile) > 0

    def test_high_resting_heart_rate_is_harmful(self, profile):
        assert _minutes(resting_heart_rate_calculator(), 80, profile) < 0

    def test_resting_heart_rate_is_decreasing(self):
        calc = resting_heart_rate_calculator()
        assert calc.shape == ResponseShape.DECREASING
        assert calc.search_range(UserProfile()) == (40, 120)

    def test_hrv_needs_no_birth_year(self, anonymous_profile):
        detail = heart_rate_variability_calculator().evaluate(60, anonymous_profile)
        assert detail.lifespan_impact_minutes == pytest.approx(34.8)
        assert detail.calculation_method == CalculationMethod.EXPERT_CONSENSUS

    def test_hrv_capped_above_curve(self, anonymous_profile):
        detail = heart_rate_variability_calculator().evaluate(200, anonymous_profile)
        assert detail.lifespan_impact_minutes == pytest.approx(121.8)
        assert detail.calculation_method == CalculationMethod.ALGORITHMIC_ESTIMATE

    def test_vo2_max(self, anonymous_profile):
        assert _minutes(vo2_max_calculator(), 50, anonymous_profile) == pytest.approx(43.6)
        assert _minutes(vo2_max_calculator(), 40, anonymous_profile) == pytest.approx(0.0)

    def test_oxygen_saturation(self, anonymous_profile):
        assert _minutes(oxygen_saturation_calculator(), 98, anonymous_profile) == pytest.approx(0.0)
        assert _minutes(oxygen_saturation_calculator(), 90, anonymous_profile) < 0


class TestBodyMass:
    def test_reference_mass_from_height(self, profile):
        assert reference_mass_kg(profile) == pytest.approx(24.5 * 1.75 * 1.75)

    def test_reference_mass_default(self, anonymous_profile):
        assert reference_mass_kg(anonymous_profile) == pytest.approx(72.6)

    def test_at_reference_is_neutral(self, profile):
        reference = reference_mass_kg(profile)
        assert _minutes(body_mass_calculator(), reference, profile) == pytest.approx(0.0)

    def test_below_reference_is_neutral(self, profile):
        assert _minutes(body_mass_calculator(), 65, profile) == pytest.approx(0.0)

    def test_above_reference_is_harmful(self, profile):
        assert _minutes(body_mass_calculator(), 95, profile) < 0

    def test_taller_users_tolerate_more_mass(self, anonymous_profile):
        tall = UserProfile(height_cm=190.0)
        calc = body_mass_calculator()
        assert _minutes(calc, 95, tall) > _minutes(calc, 95, anonymous_profile)

    def test_baseline_is_personalised(self, profile):
        detail = body_mass_calculator().evaluate(90, profile)
        assert detail.baseline_value == pytest.approx(round(reference_mass_kg(profile), 1))

    def test_search_range_starts_at_reference(self, profile):
        floor, ceiling = body_mass_calculator().search_range(profile)
        assert floor == pytest.approx(reference_mass_kg(profile))
        assert ceiling > floor


class TestLifestyle:
    def test_never_smoked_is_neutral(self, anonymous_profile):
        assert _minutes(smoking_calculator(), 10, anonymous_profile) == pytest.approx(0.0)

    def test_heavy_smoking(self, anonymous_profile):
        assert _minutes(smoking_calculator(), 1, anonymous_profile) == pytest.approx(-348.3)

    def test_nutrition_plateau_and_bonus(self, anonymous_profile):
        calc = nutrition_calculator()
        assert _minutes(calc, 7.5, anonymous_profile) == pytest.approx(0.0)
        assert _minutes(calc, 9, anonymous_profile) == pytest.approx(33.35)
        assert _minutes(calc, 4, anonymous_profile) < 0

    def test_social_connections_centered(self, anonymous_profile):
        assert _minutes(social_connections_calculator(), 5.5, anonymous_profile) == pytest.approx(0.0)

    def test_alcohol_abstinence_neutral(self, profile):
        assert _minutes(alcohol_calculator(), 10, profile) == pytest.approx(0.0)
        assert _minutes(alcohol_calculator(), 5, profile) < 0

    def test_stress(self, profile):
        calc = stress_calculator()
        assert _minutes(calc, 2, profile) == pytest.approx(0.0)
        assert _minutes(calc, 9, profile) < 0
        assert calc.shape == ResponseShape.DECREASING


class TestProtocol:
    @pytest.mark.parametrize("factory", [
        steps_calculator,
        sleep_calculator,
        body_mass_calculator,
        stress_calculator,
    ])
    def test_calculators_satisfy_protocol(self, factory):
        assert isinstance(factory(), ImpactCalculator)

    def test_metric_types(self):
        assert steps_calculator().metric_type == MetricType.STEPS
        assert body_mass_calculator().metric_type == MetricType.BODY_MASS
