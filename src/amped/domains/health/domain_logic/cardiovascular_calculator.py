"""Cardiovascular and recovery impact calculators: resting HR, sleep, HRV."""

from __future__ import annotations

import logging

from amped.domains.health.domain_logic.impact_models import (
    DEFAULT_CALCULATOR_AGE,
    EvidenceStrength,
    MetricImpactDetail,
    MetricType,
    UserProfile,
    clamp,
    relative_risk_to_daily_minutes,
)

logger = logging.getLogger(__name__)

RESTING_HR_IMPACT_SCALING = 0.04
SLEEP_IMPACT_SCALING = 0.05

RESTING_HR_REFERENCE_BPM = 60.0
# Relative risk increase per 10 bpm above reference
RESTING_HR_RR_PER_10_BPM = 0.16

SLEEP_OPTIMAL_HOURS = 7.5

HRV_MINUTES_PER_10_MS = 17.4
HRV_PLATEAU_MS = 70.0


def resting_heart_rate_relative_risk(bpm: float) -> float:
    value = MetricType.RESTING_HEART_RATE.clamp(bpm)
    return 1.0 + ((value - RESTING_HR_REFERENCE_BPM) / 10.0) * RESTING_HR_RR_PER_10_BPM


def sleep_relative_risk(hours: float) -> float:
    """U-shaped risk curve with the minimum at 7.5 hours.

    Outside 7-8 h each band measures its own deficit or excess from the
    band edge, so the curve steps down where two bands meet.
    """
    h = MetricType.SLEEP_HOURS.clamp(hours)
    if 7.0 <= h <= 8.0:
        deviation = min(abs(h - SLEEP_OPTIMAL_HOURS), 0.5)
        return 1.0 + 0.02 * (deviation / 0.5)
    if 6.0 <= h < 7.0:
        return 1.0 + 0.06 * (7.0 - h)
    if h < 6.0:
        return 1.0 + 0.08 * (6.0 - h)
    if h <= 9.0:
        return 1.0 + 0.06 * (h - 8.0)
    return 1.0 + 0.10 * (h - 9.0)


def hrv_reference(age: int) -> float:
    """Age-adjusted HRV reference in ms. Shared with the interaction rules."""
    return 40.0 - max(0.0, (age - 30) * 0.3)


def calculate_resting_heart_rate_impact(bpm: float, profile: UserProfile) -> MetricImpactDetail:
    age = profile.resolved_age(DEFAULT_CALCULATOR_AGE)
    value = MetricType.RESTING_HEART_RATE.clamp(bpm)
    rr = resting_heart_rate_relative_risk(value)
    minutes = relative_risk_to_daily_minutes(rr, RESTING_HR_IMPACT_SCALING, age)
    logger.debug("resting_hr=%.0f rr=%.4f impact=%.3f min/day", value, rr, minutes)

    if value > 80:
        rec = "Regular aerobic exercise lowers resting heart rate over a few months."
    elif value > RESTING_HR_REFERENCE_BPM:
        rec = "Consistent cardio and good sleep can bring resting heart rate below 60."
    else:
        rec = "Resting heart rate is in an excellent range."
    return MetricImpactDetail(
        metric_type=MetricType.RESTING_HEART_RATE,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.HIGH,
        current_value=bpm,
        reference_value=RESTING_HR_REFERENCE_BPM,
        recommendation=rec,
    )


def calculate_sleep_impact(hours: float, profile: UserProfile) -> MetricImpactDetail:
    age = profile.resolved_age(DEFAULT_CALCULATOR_AGE)
    value = MetricType.SLEEP_HOURS.clamp(hours)
    rr = sleep_relative_risk(value)
    minutes = relative_risk_to_daily_minutes(rr, SLEEP_IMPACT_SCALING, age)
    logger.debug("sleep=%.2f h rr=%.4f impact=%.3f min/day", value, rr, minutes)

    if value < 7.0:
        rec = "Aim for 7-8 hours. A fixed bedtime is the most reliable lever."
    elif value <= 8.0:
        rec = "Sleep duration is in the optimal 7-8 hour window."
    else:
        rec = "Regularly sleeping over 8 hours can signal poor sleep quality."
    return MetricImpactDetail(
        metric_type=MetricType.SLEEP_HOURS,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.HIGH,
        current_value=hours,
        reference_value=SLEEP_OPTIMAL_HOURS,
        recommendation=rec,
    )


def calculate_hrv_impact(hrv_ms: float, profile: UserProfile) -> MetricImpactDetail:
    age = profile.resolved_age(DEFAULT_CALCULATOR_AGE)
    value = MetricType.HEART_RATE_VARIABILITY.clamp(hrv_ms)
    ref = hrv_reference(age)
    diff = clamp(value - ref, -HRV_PLATEAU_MS, HRV_PLATEAU_MS)
    minutes = diff / 10.0 * HRV_MINUTES_PER_10_MS
    logger.debug("hrv=%.1f ms ref=%.1f impact=%.3f min/day", value, ref, minutes)

    if value < ref:
        rec = "Sleep, lower alcohol intake and aerobic training all raise HRV."
    else:
        rec = "HRV is above the reference for your age."
    return MetricImpactDetail(
        metric_type=MetricType.HEART_RATE_VARIABILITY,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.MODERATE,
        current_value=hrv_ms,
        reference_value=ref,
        recommendation=rec,
    )
