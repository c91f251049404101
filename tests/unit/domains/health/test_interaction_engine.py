"""Unit tests for the interaction effect engine."""

from __future__ import annotations

import pytest

from amped.domains.health.domain_logic.impact_models import (
    EvidenceStrength,
    MetricImpactDetail,
    MetricType,
)
from amped.domains.health.domain_logic.interaction_engine import (
    RULES,
    InteractionEngine,
    body_mass_activity_factor,
)
from amped.domains.health.domain_logic.metric_calculators import compute


def _impact(metric_type, minutes=10.0):
    return MetricImpactDetail(
        metric_type=metric_type,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.HIGH,
    )


def _adjust(raw, minutes=10.0, age=30):
    """Give every raw metric a fixed impact and run the engine."""
    impacts = {t: _impact(t, minutes) for t in raw}
    return InteractionEngine().adjust(impacts, raw, age=age)


# ===========================================================================
# Test: Individual rules
# ===========================================================================

class TestSynergies:
    def test_sleep_exercise(self):
        out = _adjust({MetricType.SLEEP_HOURS: 7.5, MetricType.EXERCISE_MINUTES: 200})
        assert out[MetricType.SLEEP_HOURS].daily_impact_minutes == pytest.approx(11.5)
        assert out[MetricType.EXERCISE_MINUTES].daily_impact_minutes == pytest.approx(10.0)

    def test_sleep_exercise_requires_guideline(self):
        out = _adjust({MetricType.SLEEP_HOURS: 7.5, MetricType.EXERCISE_MINUTES: 150})
        assert out[MetricType.SLEEP_HOURS].daily_impact_minutes == pytest.approx(10.0)

    def test_sleep_exercise_requires_optimal_sleep(self):
        out = _adjust({MetricType.SLEEP_HOURS: 6.5, MetricType.EXERCISE_MINUTES: 200})
        assert out[MetricType.SLEEP_HOURS].daily_impact_minutes == pytest.approx(10.0)

    def test_exercise_hrv_above_reference(self):
        out = _adjust({MetricType.HEART_RATE_VARIABILITY: 50, MetricType.EXERCISE_MINUTES: 200})
        assert out[MetricType.HEART_RATE_VARIABILITY].daily_impact_minutes == pytest.approx(11.0)

    def test_exercise_hrv_below_reference(self):
        out = _adjust({MetricType.HEART_RATE_VARIABILITY: 35, MetricType.EXERCISE_MINUTES: 200})
        assert out[MetricType.HEART_RATE_VARIABILITY].daily_impact_minutes == pytest.approx(10.0)

    def test_exercise_hrv_uses_age_reference(self):
        # 36 ms is below the 40 ms reference at 30 but above 34 ms at 50
        raw = {MetricType.HEART_RATE_VARIABILITY: 36, MetricType.EXERCISE_MINUTES: 200}
        assert _adjust(raw, age=30)[MetricType.HEART_RATE_VARIABILITY].daily_impact_minutes == pytest.approx(10.0)
        assert _adjust(raw, age=50)[MetricType.HEART_RATE_VARIABILITY].daily_impact_minutes == pytest.approx(11.0)

    def test_nutrition_exercise(self):
        out = _adjust({MetricType.NUTRITION_QUALITY: 8, MetricType.EXERCISE_MINUTES: 200})
        assert out[MetricType.NUTRITION_QUALITY].daily_impact_minutes == pytest.approx(11.2)


class TestAntagonisms:
    def test_alcohol_hrv_and_sleep(self):
        out = _adjust({
            MetricType.ALCOHOL_CONSUMPTION: 1,
            MetricType.HEART_RATE_VARIABILITY: 50,
            MetricType.SLEEP_HOURS: 6.5,
        })
        assert out[MetricType.HEART_RATE_VARIABILITY].daily_impact_minutes == pytest.approx(7.5)
        assert out[MetricType.SLEEP_HOURS].daily_impact_minutes == pytest.approx(8.0)

    def test_moderate_alcohol_no_effect(self):
        # score 2 maps to exactly 2 drinks, not more than 2
        out = _adjust({MetricType.ALCOHOL_CONSUMPTION: 2, MetricType.HEART_RATE_VARIABILITY: 50})
        assert out[MetricType.HEART_RATE_VARIABILITY].daily_impact_minutes == pytest.approx(10.0)

    def test_stress_sleep(self):
        out = _adjust({MetricType.STRESS_LEVEL: 8, MetricType.SLEEP_HOURS: 6.5})
        assert out[MetricType.SLEEP_HOURS].daily_impact_minutes == pytest.approx(8.5)

    def test_stress_at_threshold_no_effect(self):
        out = _adjust({MetricType.STRESS_LEVEL: 7, MetricType.SLEEP_HOURS: 6.5})
        assert out[MetricType.SLEEP_HOURS].daily_impact_minutes == pytest.approx(10.0)


class TestBodyMassActivity:
    @pytest.mark.parametrize("mass,factor", [
        (180, 1.0),
        (200, 1.0),
        (219, 1.0),
        (220, 0.9),
        (245, 0.81),
        (400, 0.9 ** 10),
        (700, 0.9 ** 10),
    ])
    def test_factor(self, mass, factor):
        assert body_mass_activity_factor(mass) == pytest.approx(factor)

    def test_applies_to_all_activity_metrics(self):
        out = _adjust({
            MetricType.BODY_MASS: 245,
            MetricType.STEPS: 10000,
            MetricType.EXERCISE_MINUTES: 100,
            MetricType.ACTIVE_ENERGY_BURNED: 500,
            MetricType.SLEEP_HOURS: 6.5,
        })
        for t in (MetricType.STEPS, MetricType.EXERCISE_MINUTES, MetricType.ACTIVE_ENERGY_BURNED):
            assert out[t].daily_impact_minutes == pytest.approx(8.1)
        assert out[MetricType.SLEEP_HOURS].daily_impact_minutes == pytest.approx(10.0)
        assert out[MetricType.BODY_MASS].daily_impact_minutes == pytest.approx(10.0)


# ===========================================================================
# Test: Composition and edge cases
# ===========================================================================

class TestComposition:
    def test_rules_compose_multiplicatively(self):
        out = _adjust({
            MetricType.SLEEP_HOURS: 7.5,
            MetricType.EXERCISE_MINUTES: 200,
            MetricType.ALCOHOL_CONSUMPTION: 1,
            MetricType.STRESS_LEVEL: 9,
        })
        assert out[MetricType.SLEEP_HOURS].daily_impact_minutes == pytest.approx(10.0 * 1.15 * 0.80 * 0.85)

    def test_zero_base_stays_zero(self, male_30):
        raw = {MetricType.SLEEP_HOURS: 7.5, MetricType.EXERCISE_MINUTES: 200}
        impacts = {t: compute(t, v, male_30) for t, v in raw.items()}
        out = InteractionEngine().adjust(impacts, raw, age=30)
        assert impacts[MetricType.SLEEP_HOURS].daily_impact_minutes == pytest.approx(0.0)
        assert out[MetricType.SLEEP_HOURS].daily_impact_minutes == pytest.approx(0.0)

    def test_alcohol_scenario_scales_hrv(self, male_30):
        hrv = compute(MetricType.HEART_RATE_VARIABILITY, 50, male_30)
        alcohol = compute(MetricType.ALCOHOL_CONSUMPTION, 1, male_30)
        engine = InteractionEngine()

        alone = engine.adjust(
            {MetricType.HEART_RATE_VARIABILITY: hrv},
            {MetricType.HEART_RATE_VARIABILITY: 50},
        )
        with_alcohol = engine.adjust(
            {MetricType.HEART_RATE_VARIABILITY: hrv, MetricType.ALCOHOL_CONSUMPTION: alcohol},
            {MetricType.HEART_RATE_VARIABILITY: 50, MetricType.ALCOHOL_CONSUMPTION: 1},
        )
        assert with_alcohol[MetricType.HEART_RATE_VARIABILITY].daily_impact_minutes == pytest.approx(
            alone[MetricType.HEART_RATE_VARIABILITY].daily_impact_minutes * 0.75
        )

    def test_missing_condition_metric_is_noop(self):
        # Exercise absent: no synergy for sleep
        out = _adjust({MetricType.SLEEP_HOURS: 7.5})
        assert out[MetricType.SLEEP_HOURS].daily_impact_minutes == pytest.approx(10.0)

    def test_missing_target_is_not_added(self):
        out = _adjust({MetricType.ALCOHOL_CONSUMPTION: 1})
        assert set(out) == {MetricType.ALCOHOL_CONSUMPTION}

    def test_keys_preserved(self):
        raw = {MetricType.STEPS: 9000, MetricType.BODY_MASS: 260, MetricType.STRESS_LEVEL: 9}
        assert set(_adjust(raw)) == set(raw)

    def test_input_not_mutated(self):
        impacts = {MetricType.SLEEP_HOURS: _impact(MetricType.SLEEP_HOURS, 10.0)}
        InteractionEngine().adjust(impacts, {MetricType.SLEEP_HOURS: 7.5, MetricType.STRESS_LEVEL: 9})
        assert impacts[MetricType.SLEEP_HOURS].daily_impact_minutes == 10.0

    def test_empty_input(self):
        assert InteractionEngine().adjust({}, {}) == {}


class TestActiveInteractions:
    def test_lists_fired_rules(self):
        raw = {
            MetricType.SLEEP_HOURS: 7.5,
            MetricType.EXERCISE_MINUTES: 200,
            MetricType.ALCOHOL_CONSUMPTION: 1,
        }
        active = InteractionEngine().active_interactions(raw, age=30)
        names = [a.rule for a in active]
        assert names == ["sleep_exercise_synergy", "alcohol_sleep_antagonism"]
        assert active[0].is_positive
        assert not active[1].is_positive

    def test_body_mass_below_first_step_not_listed(self):
        raw = {MetricType.BODY_MASS: 210, MetricType.STEPS: 9000}
        assert InteractionEngine().active_interactions(raw) == []

    def test_as_dict(self):
        raw = {MetricType.BODY_MASS: 245, MetricType.STEPS: 9000}
        (active,) = InteractionEngine().active_interactions(raw)
        data = active.as_dict()
        assert data["rule"] == "body_mass_activity"
        assert data["targets"] == ["steps"]
        assert data["multiplier"] == pytest.approx(0.81)


def test_rules_declared_in_documented_order():
    assert [r.name for r in RULES] == [
        "sleep_exercise_synergy",
        "exercise_hrv_synergy",
        "nutrition_exercise_synergy",
        "alcohol_hrv_antagonism",
        "alcohol_sleep_antagonism",
        "stress_sleep_antagonism",
        "body_mass_activity",
    ]
