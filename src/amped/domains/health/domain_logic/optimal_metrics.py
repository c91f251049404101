"""Research-optimal reading set used as the "optimal habits" comparison."""

from __future__ import annotations

from datetime import datetime, timezone

from amped.domains.health.domain_logic.impact_models import (
    DEFAULT_PROJECTION_AGE,
    HealthMetric,
    MetricType,
    Sex,
    UserProfile,
)

FEMALE_FITNESS_FACTOR = 0.88


def optimal_hrv(age: int) -> float:
    return max(50.0, 60.0 - (age - 30) * 0.5)


def optimal_vo2_max(age: int, sex: Sex) -> float:
    factor = FEMALE_FITNESS_FACTOR if sex == Sex.FEMALE else 1.0
    return max(50.0 * factor - max(0, age - 30) * 0.3, 35.0 * factor)


def optimal_values(profile: UserProfile) -> dict[MetricType, float]:
    age = profile.resolved_age(DEFAULT_PROJECTION_AGE)
    female = profile.sex == Sex.FEMALE
    return {
        MetricType.STEPS: 12000.0,
        MetricType.EXERCISE_MINUTES: 315.0,  # 45 min/day
        MetricType.SLEEP_HOURS: 7.5,
        MetricType.RESTING_HEART_RATE: 55.0,
        MetricType.HEART_RATE_VARIABILITY: optimal_hrv(age),
        MetricType.SMOKING_STATUS: 10.0,
        MetricType.ALCOHOL_CONSUMPTION: 9.0,
        MetricType.STRESS_LEVEL: 2.0,
        MetricType.NUTRITION_QUALITY: 9.0,
        MetricType.SOCIAL_CONNECTIONS_QUALITY: 8.0,
        MetricType.BODY_MASS: 135.0 if female else 155.0,
        MetricType.VO2_MAX: optimal_vo2_max(age, profile.sex),
        MetricType.ACTIVE_ENERGY_BURNED: 600.0,
        MetricType.OXYGEN_SATURATION: 98.0,
    }


def create_optimal_metrics(profile: UserProfile, timestamp: datetime | None = None) -> list[HealthMetric]:
    ts = timestamp or datetime.now(timezone.utc)
    return [
        HealthMetric(type=metric_type, value=value, timestamp=ts)
        for metric_type, value in optimal_values(profile).items()
    ]
