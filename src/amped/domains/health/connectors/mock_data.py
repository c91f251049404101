"""Mock readings for development and testing.

The mock user is a median adult: somewhat active, decent sleep, a drink or
two a week. Their net daily impact lands slightly positive.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from amped.domains.health.domain_logic.impact_models import (
    HealthMetric,
    MetricType,
    Provenance,
    Sex,
    UserProfile,
)

MOCK_SENSOR_VALUES: dict[MetricType, float] = {
    MetricType.STEPS: 8400,
    MetricType.EXERCISE_MINUTES: 170,
    MetricType.ACTIVE_ENERGY_BURNED: 460,
    MetricType.SLEEP_HOURS: 7.2,
    MetricType.RESTING_HEART_RATE: 64,
    MetricType.HEART_RATE_VARIABILITY: 42,
    MetricType.BODY_MASS: 176,
    MetricType.VO2_MAX: 41.5,
    MetricType.OXYGEN_SATURATION: 97.2,
}

MOCK_QUESTIONNAIRE_VALUES: dict[MetricType, float] = {
    MetricType.NUTRITION_QUALITY: 7,
    MetricType.STRESS_LEVEL: 5,
    MetricType.SMOKING_STATUS: 10,
    MetricType.ALCOHOL_CONSUMPTION: 7,
    MetricType.SOCIAL_CONNECTIONS_QUALITY: 7,
}


def get_mock_user_profile() -> UserProfile:
    return UserProfile(id="mock-user", age=38, sex=Sex.MALE, height_cm=178.0, weight_lb=176.0)


def get_mock_metrics(period: str = "day", now: datetime | None = None) -> list[HealthMetric]:
    """Return mock readings, including a stale steps reading superseded by a newer one."""
    now = now or datetime.now(timezone.utc)
    metrics = [
        HealthMetric(
            type=MetricType.STEPS,
            value=5100,
            timestamp=now - timedelta(days=1),
            provenance=Provenance.SENSOR,
        )
    ]
    metrics.extend(
        HealthMetric(type=t, value=v, timestamp=now, provenance=Provenance.SENSOR)
        for t, v in MOCK_SENSOR_VALUES.items()
    )
    metrics.extend(
        HealthMetric(type=t, value=v, timestamp=now, provenance=Provenance.MANUAL)
        for t, v in MOCK_QUESTIONNAIRE_VALUES.items()
    )
    return metrics
