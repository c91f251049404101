"""Activity and body-composition impact calculators.

Steps and exercise use relative-risk curves converted to daily minutes.
Active energy, body mass, VO2 max and oxygen saturation are direct
linear models around a reference value.

Every function clamps its input first, so any float is accepted.
"""

from __future__ import annotations

import logging
import math

from amped.domains.health.domain_logic.impact_models import (
    DEFAULT_CALCULATOR_AGE,
    EvidenceStrength,
    MetricImpactDetail,
    MetricType,
    Sex,
    UserProfile,
    clamp,
    relative_risk_to_daily_minutes,
)

logger = logging.getLogger(__name__)

STEPS_IMPACT_SCALING = 0.082
EXERCISE_IMPACT_SCALING = 0.126

# Minutes gained per unit above reference (lost below)
ACTIVE_ENERGY_REFERENCE_KCAL = 400.0
ACTIVE_ENERGY_MINUTES_PER_100_KCAL = 8.7
ACTIVE_ENERGY_PLATEAU_KCAL = 400.0

BODY_MASS_REFERENCE_LB = 160.0
BODY_MASS_MINUTES_PER_20_LB = 17.4

VO2_MAX_MINUTES_PER_5_ML = 21.8
VO2_MAX_PLATEAU_ML = 20.0
FEMALE_VO2_MAX_FACTOR = 0.88

OXYGEN_SATURATION_REFERENCE = 98.0
OXYGEN_SATURATION_MINUTES_PER_2_PCT = 8.7

_LOG_BAND = math.e - 1.0


# ---------------------------------------------------------------------------
# Relative-risk curves
# ---------------------------------------------------------------------------

def steps_relative_risk(steps: float) -> float:
    """Relative all-cause mortality for a daily step count.

    Risk falls steeply up to 4000 steps, flattens logarithmically to 10000,
    bottoms out at 12000 and rises again for extreme volumes.
    """
    s = MetricType.STEPS.clamp(steps)
    if s < 2700:
        return 1.6 - 0.2 * (s / 2700.0)
    if s < 4000:
        return 1.4 - 0.1 * ((s - 2700.0) / 1300.0)
    if s < 10000:
        ratio = (s - 4000.0) / 6000.0
        return 1.3 - 0.35 * math.log(1.0 + ratio * _LOG_BAND)
    if s < 12000:
        return 0.95 - 0.05 * ((s - 10000.0) / 2000.0)
    if s < 20000:
        return 0.90 + 0.03 * ((s - 12000.0) / 8000.0)
    if s < 25000:
        return 0.93 + 0.07 * ((s - 20000.0) / 5000.0)
    return 1.00 + 0.15 * min((s - 25000.0) / 10000.0, 1.0)


def exercise_relative_risk(weekly_minutes: float) -> float:
    """Relative mortality for weekly minutes of moderate-to-vigorous exercise."""
    m = MetricType.EXERCISE_MINUTES.clamp(weekly_minutes)
    if m <= 0:
        return 1.15
    if m <= 150:
        return 1.15 - 0.38 * math.log(1.0 + (m / 150.0) * _LOG_BAND)
    if m <= 300:
        return 0.77 - 0.12 * ((m - 150.0) / 150.0)
    return 0.65 - 0.05 * min((m - 300.0) / 300.0, 1.0)


# ---------------------------------------------------------------------------
# Calculators
# ---------------------------------------------------------------------------

def calculate_steps_impact(steps: float, profile: UserProfile) -> MetricImpactDetail:
    age = profile.resolved_age(DEFAULT_CALCULATOR_AGE)
    value = MetricType.STEPS.clamp(steps)
    rr = steps_relative_risk(value)
    minutes = relative_risk_to_daily_minutes(rr, STEPS_IMPACT_SCALING, age)
    logger.debug("steps=%.0f rr=%.4f impact=%.3f min/day", value, rr, minutes)

    if value < 4000:
        rec = "Every extra 1000 steps helps most at low volumes; aim for 7000+ per day."
    elif value < 10000:
        rec = "Build toward 10000 steps per day with short walks after meals."
    elif value <= 20000:
        rec = "Excellent step volume. Keep it consistent."
    else:
        rec = "Very high step volume; make room for recovery days."
    return MetricImpactDetail(
        metric_type=MetricType.STEPS,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.HIGH,
        current_value=steps,
        reference_value=12000.0,
        recommendation=rec,
    )


def calculate_exercise_impact(weekly_minutes: float, profile: UserProfile) -> MetricImpactDetail:
    age = profile.resolved_age(DEFAULT_CALCULATOR_AGE)
    value = MetricType.EXERCISE_MINUTES.clamp(weekly_minutes)
    rr = exercise_relative_risk(value)
    minutes = relative_risk_to_daily_minutes(rr, EXERCISE_IMPACT_SCALING, age)
    logger.debug("exercise=%.0f min/week rr=%.4f impact=%.3f min/day", value, rr, minutes)

    if value < 150:
        rec = "Work up to at least 150 minutes of moderate exercise per week."
    elif value <= 300:
        rec = "You meet the weekly guideline; up to 300 minutes adds further benefit."
    else:
        rec = "Above 300 minutes per week the extra benefit is small. Prioritize recovery."
    return MetricImpactDetail(
        metric_type=MetricType.EXERCISE_MINUTES,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.HIGH,
        current_value=weekly_minutes,
        reference_value=300.0,
        recommendation=rec,
    )


def calculate_active_energy_impact(kcal: float, profile: UserProfile) -> MetricImpactDetail:
    value = MetricType.ACTIVE_ENERGY_BURNED.clamp(kcal)
    diff = clamp(
        value - ACTIVE_ENERGY_REFERENCE_KCAL,
        -ACTIVE_ENERGY_PLATEAU_KCAL,
        ACTIVE_ENERGY_PLATEAU_KCAL,
    )
    minutes = diff / 100.0 * ACTIVE_ENERGY_MINUTES_PER_100_KCAL
    logger.debug("active_energy=%.0f kcal impact=%.3f min/day", value, minutes)

    if value < ACTIVE_ENERGY_REFERENCE_KCAL:
        rec = "Add light activity through the day to burn 400+ active calories."
    else:
        rec = "Active energy is above the reference level."
    return MetricImpactDetail(
        metric_type=MetricType.ACTIVE_ENERGY_BURNED,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.MODERATE,
        current_value=kcal,
        reference_value=ACTIVE_ENERGY_REFERENCE_KCAL,
        recommendation=rec,
    )


def calculate_body_mass_impact(weight_lb: float, profile: UserProfile) -> MetricImpactDetail:
    value = MetricType.BODY_MASS.clamp(weight_lb)
    # Heavier than reference loses minutes
    minutes = -(value - BODY_MASS_REFERENCE_LB) / 20.0 * BODY_MASS_MINUTES_PER_20_LB
    logger.debug("body_mass=%.1f lb impact=%.3f min/day", value, minutes)

    if value > 200:
        rec = "Gradual weight loss of 5-10% has measurable cardiovascular benefit."
    elif value > BODY_MASS_REFERENCE_LB:
        rec = "Modest weight reduction through diet and activity would help."
    else:
        rec = "Maintain your current weight with balanced nutrition."
    return MetricImpactDetail(
        metric_type=MetricType.BODY_MASS,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.MODERATE,
        current_value=weight_lb,
        reference_value=BODY_MASS_REFERENCE_LB,
        recommendation=rec,
    )


def vo2_max_reference(age: int, sex: Sex) -> float:
    ref = 40.0 - max(0.0, (age - 30) * 0.4)
    if sex == Sex.FEMALE:
        ref *= FEMALE_VO2_MAX_FACTOR
    return ref


def calculate_vo2_max_impact(vo2: float, profile: UserProfile) -> MetricImpactDetail:
    age = profile.resolved_age(DEFAULT_CALCULATOR_AGE)
    value = MetricType.VO2_MAX.clamp(vo2)
    ref = vo2_max_reference(age, profile.sex)
    diff = clamp(value - ref, -VO2_MAX_PLATEAU_ML, VO2_MAX_PLATEAU_ML)
    minutes = diff / 5.0 * VO2_MAX_MINUTES_PER_5_ML
    logger.debug("vo2_max=%.1f ref=%.1f impact=%.3f min/day", value, ref, minutes)

    if value < ref:
        rec = "Interval training two to three times a week raises VO2 max fastest."
    else:
        rec = "Your cardiorespiratory fitness is above average for your age."
    return MetricImpactDetail(
        metric_type=MetricType.VO2_MAX,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.MODERATE,
        current_value=vo2,
        reference_value=ref,
        recommendation=rec,
    )


def calculate_oxygen_saturation_impact(spo2: float, profile: UserProfile) -> MetricImpactDetail:
    value = MetricType.OXYGEN_SATURATION.clamp(spo2)
    minutes = -abs(value - OXYGEN_SATURATION_REFERENCE) / 2.0 * OXYGEN_SATURATION_MINUTES_PER_2_PCT
    logger.debug("spo2=%.1f%% impact=%.3f min/day", value, minutes)

    if value < 95:
        rec = "Persistently low oxygen saturation is worth discussing with a clinician."
    else:
        rec = "Oxygen saturation is in the normal range."
    return MetricImpactDetail(
        metric_type=MetricType.OXYGEN_SATURATION,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.LOW,
        current_value=spo2,
        reference_value=OXYGEN_SATURATION_REFERENCE,
        recommendation=rec,
    )
