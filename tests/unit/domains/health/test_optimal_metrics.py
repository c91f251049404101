"""Unit tests for the optimal-habits reference metric set."""

from __future__ import annotations

import pytest

from amped.domains.health.domain_logic.impact_models import MetricType, Sex, UserProfile
from amped.domains.health.domain_logic.life_impact_service import LifeImpactService
from amped.domains.health.domain_logic.optimal_metrics import (
    create_optimal_metrics,
    optimal_hrv,
    optimal_values,
    optimal_vo2_max,
)


def test_covers_every_metric(male_30):
    metrics = create_optimal_metrics(male_30)
    assert {m.type for m in metrics} == set(MetricType)


def test_fixed_targets(male_30):
    values = optimal_values(male_30)
    assert values[MetricType.STEPS] == 12000
    assert values[MetricType.SLEEP_HOURS] == 7.5
    assert values[MetricType.EXERCISE_MINUTES] == 315
    assert values[MetricType.SMOKING_STATUS] == 10


def test_sex_specific_weight():
    assert optimal_values(UserProfile(age=30, sex=Sex.MALE))[MetricType.BODY_MASS] == 155
    assert optimal_values(UserProfile(age=30, sex=Sex.FEMALE))[MetricType.BODY_MASS] == 135


@pytest.mark.parametrize("age,expected", [(25, 62.5), (30, 60.0), (40, 55.0), (60, 50.0), (80, 50.0)])
def test_hrv_age_adjusted(age, expected):
    assert optimal_hrv(age) == pytest.approx(expected)


def test_vo2_max_floor():
    assert optimal_vo2_max(30, Sex.MALE) == pytest.approx(50.0)
    assert optimal_vo2_max(90, Sex.MALE) == pytest.approx(35.0)
    assert optimal_vo2_max(30, Sex.FEMALE) == pytest.approx(44.0)


def test_optimal_set_has_positive_impact(male_30):
    point = LifeImpactService(male_30).calculate_total_impact(create_optimal_metrics(male_30))
    assert point.total_impact_minutes > 0
