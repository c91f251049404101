"""Life impact coordinator: readings in, ImpactDataPoint out.

Pipeline (strictly sequential, each stage consumes the previous one):
    1. per-metric calculators
    2. interaction rules on the full set
    3. mortality adjustment per metric
    4. evidence-weighted sum and evidence quality score
    5. linear period scaling
    6. battery level (separate output)
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from amped.domains.health.domain_logic.impact_models import (
    DEFAULT_CALCULATOR_AGE,
    DEFAULT_PROJECTION_AGE,
    HealthMetric,
    ImpactDataPoint,
    ImpactPeriod,
    MetricImpactDetail,
    MetricType,
    UserProfile,
    clamp,
)
from amped.domains.health.domain_logic.interaction_engine import InteractionEngine
from amped.domains.health.domain_logic.metric_calculators import compute_metric
from amped.domains.health.domain_logic.mortality_adjuster import MortalityAdjuster

logger = logging.getLogger(__name__)

NEUTRAL_BATTERY_LEVEL = 50.0
# Daily minutes that map to an empty or full battery
BATTERY_FULL_SCALE_MINUTES = 120.0


def scale_for_period(daily_minutes: float, period: ImpactPeriod) -> float:
    """Linear period scaling: day x1, month x30, year x365."""
    return daily_minutes * period.multiplier


def battery_level(total_daily_minutes: float) -> float:
    """0-100 battery; 50 is neutral, +/-120 min/day saturates."""
    level = NEUTRAL_BATTERY_LEVEL + (total_daily_minutes / BATTERY_FULL_SCALE_MINUTES) * 50.0
    return clamp(level, 0.0, 100.0)


def latest_readings(metrics: Iterable[HealthMetric]) -> dict[MetricType, HealthMetric]:
    """Keep the most recent reading for each metric type."""
    latest: dict[MetricType, HealthMetric] = {}
    for metric in metrics:
        current = latest.get(metric.type)
        if current is None or metric.timestamp >= current.timestamp:
            latest[metric.type] = metric
    return latest


class LifeImpactService:
    """Runs the impact pipeline for one user profile."""

    def __init__(
        self,
        profile: UserProfile,
        interaction_engine: InteractionEngine | None = None,
        mortality_adjuster: MortalityAdjuster | None = None,
    ) -> None:
        self.profile = profile
        self.interaction_engine = interaction_engine or InteractionEngine()
        self.mortality_adjuster = mortality_adjuster or MortalityAdjuster()

    def calculate_impact(self, metric: HealthMetric) -> MetricImpactDetail:
        """Single calculator call, without interactions or mortality adjustment."""
        return compute_metric(metric, self.profile)

    def calculate_impacts(self, metrics: Iterable[HealthMetric]) -> dict[MetricType, MetricImpactDetail]:
        """Stages 1-3: calculators, interactions, mortality adjustment."""
        readings = latest_readings(metrics)
        raw_values = {t: m.value for t, m in readings.items()}

        impacts = {t: compute_metric(m, self.profile) for t, m in readings.items()}
        impacts = self.interaction_engine.adjust(
            impacts, raw_values, age=self.profile.resolved_age(DEFAULT_CALCULATOR_AGE)
        )

        age = self.profile.resolved_age(DEFAULT_PROJECTION_AGE)
        return {
            t: d.with_impact(
                self.mortality_adjuster.adjust_for_mortality(
                    d.daily_impact_minutes, age, self.profile.sex
                )
            )
            for t, d in impacts.items()
        }

    def calculate_total_impact(
        self,
        metrics: Iterable[HealthMetric],
        period: ImpactPeriod = ImpactPeriod.DAY,
        as_of: datetime | None = None,
    ) -> ImpactDataPoint:
        impacts = self.calculate_impacts(metrics)

        total_daily = sum(d.weighted_impact_minutes for d in impacts.values())
        if impacts:
            evidence = sum(d.reliability_weight for d in impacts.values()) / len(impacts)
        else:
            evidence = 0.0
            logger.info("No readings supplied; impact is empty")

        data_point = ImpactDataPoint(
            as_of=as_of or datetime.now(timezone.utc),
            period=period,
            total_impact_minutes=scale_for_period(total_daily, period),
            per_metric_impacts=impacts,
            evidence_quality_score=evidence,
        )
        logger.info(
            "Life impact: %d metrics, %.2f min/day, evidence=%.2f, period=%s",
            len(impacts), total_daily, evidence, period.value,
        )
        return data_point

    def calculate_battery_level(self, metrics: Iterable[HealthMetric]) -> float:
        data_point = self.calculate_total_impact(metrics, ImpactPeriod.DAY)
        return battery_level(data_point.daily_impact_minutes)
