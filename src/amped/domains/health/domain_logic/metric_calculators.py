"""Closed dispatch from MetricType to its calculator."""

from __future__ import annotations

from typing import Callable

from amped.domains.health.domain_logic import (
    activity_calculator as activity,
    cardiovascular_calculator as cardio,
    lifestyle_calculator as lifestyle,
)
from amped.domains.health.domain_logic.impact_models import (
    HealthMetric,
    MetricImpactDetail,
    MetricType,
    UserProfile,
)

Calculator = Callable[[float, UserProfile], MetricImpactDetail]

CALCULATORS: dict[MetricType, Calculator] = {
    MetricType.STEPS: activity.calculate_steps_impact,
    MetricType.EXERCISE_MINUTES: activity.calculate_exercise_impact,
    MetricType.ACTIVE_ENERGY_BURNED: activity.calculate_active_energy_impact,
    MetricType.BODY_MASS: activity.calculate_body_mass_impact,
    MetricType.VO2_MAX: activity.calculate_vo2_max_impact,
    MetricType.OXYGEN_SATURATION: activity.calculate_oxygen_saturation_impact,
    MetricType.SLEEP_HOURS: cardio.calculate_sleep_impact,
    MetricType.RESTING_HEART_RATE: cardio.calculate_resting_heart_rate_impact,
    MetricType.HEART_RATE_VARIABILITY: cardio.calculate_hrv_impact,
    MetricType.ALCOHOL_CONSUMPTION: lifestyle.calculate_alcohol_impact,
    MetricType.SMOKING_STATUS: lifestyle.calculate_smoking_impact,
    MetricType.STRESS_LEVEL: lifestyle.calculate_stress_impact,
    MetricType.NUTRITION_QUALITY: lifestyle.calculate_nutrition_impact,
    MetricType.SOCIAL_CONNECTIONS_QUALITY: lifestyle.calculate_social_impact,
}


def compute(metric_type: MetricType, value: float, profile: UserProfile) -> MetricImpactDetail:
    """Run the calculator bound to ``metric_type``. Never raises for numeric input."""
    return CALCULATORS[metric_type](float(value), profile)


def compute_metric(metric: HealthMetric, profile: UserProfile) -> MetricImpactDetail:
    return compute(metric.type, metric.value, profile)
