"""Life expectancy projection from an aggregate daily impact.

The daily impact is assumed to persist but fade: each 5-year segment of
the remaining lifespan contributes the impact decayed to the segment's
midpoint. The accumulated minutes become years, are weighted by evidence
quality, and the result is bounded to [age + 1, 120].
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, Mapping

from amped.domains.health.domain_logic.impact_models import (
    CONFIDENCE_INTERVAL_YEARS,
    DAYS_PER_YEAR,
    DEFAULT_PROJECTION_AGE,
    MAX_LIFE_EXPECTANCY_YEARS,
    MINUTES_PER_YEAR,
    HealthMetric,
    ImpactDataPoint,
    LifeProjection,
    MetricImpactDetail,
    MetricType,
    UserProfile,
    clamp,
)
from amped.domains.health.domain_logic.life_impact_service import LifeImpactService
from amped.domains.health.domain_logic.mortality_adjuster import (
    DEFAULT_DECAY_RATE,
    MortalityAdjuster,
    apply_behavior_decay,
    decay_rate_for,
)

logger = logging.getLogger(__name__)

SEGMENT_YEARS = 5.0


def blended_decay_rate(metric_impacts: Mapping[MetricType, MetricImpactDetail] | None) -> float:
    """Per-metric decay rates averaged by each metric's share of |impact|."""
    if not metric_impacts:
        return DEFAULT_DECAY_RATE
    total_weight = sum(abs(d.daily_impact_minutes) for d in metric_impacts.values())
    if total_weight == 0:
        return DEFAULT_DECAY_RATE
    return sum(
        decay_rate_for(t) * abs(d.daily_impact_minutes) for t, d in metric_impacts.items()
    ) / total_weight


def accumulated_impact_years(daily_impact_minutes: float, remaining_years: float, decay_rate: float) -> float:
    total_minutes = 0.0
    elapsed = 0.0
    while elapsed < remaining_years:
        segment = min(SEGMENT_YEARS, remaining_years - elapsed)
        midpoint = elapsed + segment / 2.0
        decayed = apply_behavior_decay(daily_impact_minutes, midpoint, decay_rate)
        total_minutes += decayed * segment * DAYS_PER_YEAR
        elapsed += segment
    return total_minutes / MINUTES_PER_YEAR


class LifeProjectionService:
    def __init__(self, mortality_adjuster: MortalityAdjuster | None = None) -> None:
        self.mortality_adjuster = mortality_adjuster or MortalityAdjuster()

    def project(
        self,
        profile: UserProfile,
        daily_impact_minutes: float,
        evidence_quality: float,
        metric_impacts: Mapping[MetricType, MetricImpactDetail] | None = None,
        computed_at: datetime | None = None,
    ) -> LifeProjection:
        age = profile.resolved_age(DEFAULT_PROJECTION_AGE)
        baseline = self.mortality_adjuster.baseline_life_expectancy(profile)
        remaining = max(1.0, baseline - age)
        rate = blended_decay_rate(metric_impacts)

        impact_years = accumulated_impact_years(daily_impact_minutes, remaining, rate)
        adjusted_years = impact_years * evidence_quality
        projected = clamp(baseline + adjusted_years, age + 1.0, MAX_LIFE_EXPECTANCY_YEARS)

        logger.info(
            "Projection: age=%d baseline=%.2f projected=%.2f (decay=%.3f, evidence=%.2f)",
            age, baseline, projected, rate, evidence_quality,
        )
        return LifeProjection(
            computed_at=computed_at or datetime.now(timezone.utc),
            current_age=age,
            baseline_life_expectancy_years=baseline,
            projected_life_expectancy_years=projected,
            confidence_percentage=evidence_quality,
            confidence_interval_years=CONFIDENCE_INTERVAL_YEARS,
        )

    def project_from_impact(self, profile: UserProfile, data_point: ImpactDataPoint) -> LifeProjection:
        return self.project(
            profile,
            data_point.daily_impact_minutes,
            data_point.evidence_quality_score,
            metric_impacts=data_point.per_metric_impacts,
            computed_at=data_point.as_of,
        )

    def project_from_metrics(self, profile: UserProfile, metrics: Iterable[HealthMetric]) -> LifeProjection:
        service = LifeImpactService(profile, mortality_adjuster=self.mortality_adjuster)
        return self.project_from_impact(profile, service.calculate_total_impact(metrics))
