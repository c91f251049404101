"""Unit tests for the life projection service."""

from __future__ import annotations

import math
from datetime import datetime, timezone

import pytest

from amped.domains.health.domain_logic.impact_models import (
    EvidenceStrength,
    HealthMetric,
    ImpactDataPoint,
    ImpactPeriod,
    MetricImpactDetail,
    MetricType,
    Sex,
    UserProfile,
)
from amped.domains.health.domain_logic.life_projection_service import (
    LifeProjectionService,
    accumulated_impact_years,
    blended_decay_rate,
)

NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)


def _detail(metric_type, minutes):
    return MetricImpactDetail(
        metric_type=metric_type,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.HIGH,
    )


@pytest.fixture
def service() -> LifeProjectionService:
    return LifeProjectionService()


class TestBlendedDecayRate:
    def test_default_without_breakdown(self):
        assert blended_decay_rate(None) == 0.12
        assert blended_decay_rate({}) == 0.12

    def test_default_when_all_zero(self):
        assert blended_decay_rate({MetricType.STEPS: _detail(MetricType.STEPS, 0.0)}) == 0.12

    def test_single_metric(self):
        assert blended_decay_rate({MetricType.STEPS: _detail(MetricType.STEPS, 9.0)}) == pytest.approx(0.15)

    def test_weighted_by_absolute_impact(self):
        impacts = {
            MetricType.STEPS: _detail(MetricType.STEPS, 10.0),
            MetricType.SMOKING_STATUS: _detail(MetricType.SMOKING_STATUS, -30.0),
        }
        assert blended_decay_rate(impacts) == pytest.approx((0.15 * 10 + 0.05 * 30) / 40)


class TestAccumulatedImpactYears:
    def test_no_decay(self):
        # 144 min/day over 10 years = 10 * 144 / 1440 years
        assert accumulated_impact_years(144.0, 10.0, 0.0) == pytest.approx(1.0)

    def test_partial_last_segment(self):
        rate = 0.1
        expected_minutes = (
            10.0 * math.exp(-rate * 2.5) * 5 * 365.25
            + 10.0 * math.exp(-rate * 6.0) * 2 * 365.25
        )
        assert accumulated_impact_years(10.0, 7.0, rate) == pytest.approx(
            expected_minutes / (365.25 * 24 * 60)
        )

    def test_decay_reduces_total(self):
        assert accumulated_impact_years(10.0, 40.0, 0.12) < accumulated_impact_years(10.0, 40.0, 0.0)

    def test_zero_impact(self):
        assert accumulated_impact_years(0.0, 40.0, 0.12) == 0.0


class TestProject:
    def test_zero_impact_equals_baseline(self, service, male_30):
        projection = service.project(male_30, 0.0, 0.0, computed_at=NOW)
        assert projection.projected_life_expectancy_years == pytest.approx(72.8)
        assert projection.baseline_life_expectancy_years == pytest.approx(72.8)
        assert projection.computed_at == NOW

    @pytest.mark.parametrize("age", [0, 45, 100, 117, 118, 119, 120, 130])
    def test_zero_impact_equals_baseline_at_any_age(self, service, age):
        projection = service.project(UserProfile(age=age, sex=Sex.FEMALE), 0.0, 1.0)
        assert projection.projected_life_expectancy_years == pytest.approx(
            projection.baseline_life_expectancy_years
        )

    def test_zero_evidence_equals_baseline(self, service, male_30):
        projection = service.project(male_30, 50.0, 0.0)
        assert projection.projected_life_expectancy_years == pytest.approx(72.8)

    def test_positive_impact_extends(self, service, male_30):
        projection = service.project(male_30, 10.0, 1.0)
        assert projection.projected_life_expectancy_years > projection.baseline_life_expectancy_years
        assert projection.net_impact_years > 0

    def test_matches_segment_walk(self, service, male_30):
        projection = service.project(male_30, 10.0, 0.8)
        expected = 72.8 + accumulated_impact_years(10.0, 42.8, 0.12) * 0.8
        assert projection.projected_life_expectancy_years == pytest.approx(expected)

    def test_upper_bound(self, service, male_30):
        projection = service.project(male_30, 1e6, 1.0)
        assert projection.projected_life_expectancy_years == 120.0

    def test_lower_bound(self, service, male_30):
        projection = service.project(male_30, -1e6, 1.0)
        assert projection.projected_life_expectancy_years == 31.0

    @pytest.mark.parametrize("age", [0, 20, 45, 70, 95, 110])
    @pytest.mark.parametrize("daily", [-5000.0, -100.0, 0.0, 100.0, 5000.0])
    def test_projection_bound_holds(self, service, age, daily):
        profile = UserProfile(age=age, sex=Sex.FEMALE)
        projection = service.project(profile, daily, 1.0)
        assert age + 1 <= projection.projected_life_expectancy_years <= 120.0

    def test_confidence_fields(self, service, male_30):
        projection = service.project(male_30, 5.0, 0.73)
        assert projection.confidence_percentage == 0.73
        assert projection.confidence_interval_years == 2.0

    def test_breakdown_changes_decay(self, service, male_30):
        smoking = {MetricType.SMOKING_STATUS: _detail(MetricType.SMOKING_STATUS, 10.0)}
        steps = {MetricType.STEPS: _detail(MetricType.STEPS, 10.0)}
        slow = service.project(male_30, 10.0, 1.0, metric_impacts=smoking)
        fast = service.project(male_30, 10.0, 1.0, metric_impacts=steps)
        assert slow.projected_life_expectancy_years > fast.projected_life_expectancy_years

    def test_unknown_age_defaults_to_30(self, service, anonymous_profile):
        projection = service.project(anonymous_profile, 0.0, 0.0)
        assert projection.current_age == 30


class TestProjectFromImpact:
    def test_uses_daily_impact_of_data_point(self, service, male_30):
        impacts = {MetricType.STEPS: _detail(MetricType.STEPS, 10.0)}
        yearly = ImpactDataPoint(
            as_of=NOW,
            period=ImpactPeriod.YEAR,
            total_impact_minutes=3650.0,
            per_metric_impacts=impacts,
            evidence_quality_score=1.0,
        )
        direct = service.project(male_30, 10.0, 1.0, metric_impacts=impacts)
        via_point = service.project_from_impact(male_30, yearly)
        assert via_point.projected_life_expectancy_years == pytest.approx(
            direct.projected_life_expectancy_years
        )
        assert via_point.computed_at == NOW

    def test_from_metrics_empty(self, service, male_30):
        projection = service.project_from_metrics(male_30, [])
        assert projection.projected_life_expectancy_years == pytest.approx(72.8)
        assert projection.confidence_percentage == 0.0

    def test_from_metrics(self, service, male_30):
        metrics = [HealthMetric(type=MetricType.STEPS, value=12000)]
        projection = service.project_from_metrics(male_30, metrics)
        assert projection.projected_life_expectancy_years > 72.8
