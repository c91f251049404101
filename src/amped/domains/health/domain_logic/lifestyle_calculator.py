"""Lifestyle impact calculators driven by 1-10 questionnaire answers.

Higher questionnaire scores always mean healthier behaviour: 10 on the
alcohol scale is "never drinks", 10 on smoking is "never smoked".
"""

from __future__ import annotations

import logging
from enum import Enum

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

STRESS_IMPACT_SCALING = 0.04

ALCOHOL_MINUTES_PER_DRINK = 34.8
MAX_DRINKS_PER_DAY = 10.0

NUTRITION_REFERENCE = 7.0
NUTRITION_UPPER_REFERENCE = 8.0
NUTRITION_PENALTY_PER_POINT = 6.9 / 6.0
NUTRITION_BONUS_PER_POINT = 3.3 / 2.0

SOCIAL_REFERENCE = 8.0
SOCIAL_MINUTES_PER_POINT = 2.9


class SmokingCategory(str, Enum):
    NEVER = "never"
    FORMER = "former"
    LIGHT = "light"
    HEAVY = "heavy"


SMOKING_DAILY_MINUTES = {
    SmokingCategory.NEVER: 0.0,
    SmokingCategory.FORMER: -116.1,
    SmokingCategory.LIGHT: -232.2,
    SmokingCategory.HEAVY: -348.3,
}


# ---------------------------------------------------------------------------
# Questionnaire bucket mappings
# ---------------------------------------------------------------------------

def alcohol_drinks_per_day(score: float) -> float:
    """Map the 1-10 alcohol answer to drinks per day (10 = never drinks).

    Buckets: never, occasionally, several times a week, daily. The lowest
    answer is heavy daily drinking.
    """
    s = MetricType.ALCOHOL_CONSUMPTION.clamp(score)
    if s >= 9:
        drinks = 0.0
    elif s >= 7:
        drinks = 0.5
    elif s >= 3:
        drinks = 1.0
    elif s > 1:
        drinks = 2.0
    else:
        drinks = 5.0
    return clamp(drinks, 0.0, MAX_DRINKS_PER_DAY)


def smoking_category(score: float) -> SmokingCategory:
    s = MetricType.SMOKING_STATUS.clamp(score)
    if s >= 9:
        return SmokingCategory.NEVER
    if s >= 6:
        return SmokingCategory.FORMER
    if s >= 2:
        return SmokingCategory.LIGHT
    return SmokingCategory.HEAVY


def stress_relative_risk(level: float) -> float:
    lv = MetricType.STRESS_LEVEL.clamp(level)
    if lv <= 3:
        return 1.0
    if lv <= 6:
        return 1.0 + 0.03 * (lv - 3.0)
    if lv <= 8:
        return 1.09 + 0.05 * (lv - 6.0)
    return 1.19 + 0.08 * (lv - 8.0)


# ---------------------------------------------------------------------------
# Calculators
# ---------------------------------------------------------------------------

def calculate_alcohol_impact(score: float, profile: UserProfile) -> MetricImpactDetail:
    drinks = alcohol_drinks_per_day(score)
    minutes = -ALCOHOL_MINUTES_PER_DRINK * drinks
    logger.debug("alcohol score=%.1f drinks=%.1f impact=%.3f min/day", score, drinks, minutes)

    if drinks == 0:
        rec = "No regular alcohol intake. Keep it that way."
    elif drinks <= 1:
        rec = "Cutting back to occasional drinks removes most of this cost."
    else:
        rec = "Reducing to fewer than two drinks a day has a large benefit."
    return MetricImpactDetail(
        metric_type=MetricType.ALCOHOL_CONSUMPTION,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.HIGH,
        current_value=score,
        reference_value=0.0,
        recommendation=rec,
    )


def calculate_smoking_impact(score: float, profile: UserProfile) -> MetricImpactDetail:
    category = smoking_category(score)
    minutes = SMOKING_DAILY_MINUTES[category]
    logger.debug("smoking score=%.1f category=%s impact=%.3f min/day", score, category.value, minutes)

    if category == SmokingCategory.NEVER:
        rec = "Never smoking is the single largest protective habit."
    elif category == SmokingCategory.FORMER:
        rec = "Quitting already recovered most of the lost time; stay smoke-free."
    else:
        rec = "Quitting smoking at any age adds years. Ask about cessation support."
    return MetricImpactDetail(
        metric_type=MetricType.SMOKING_STATUS,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.HIGH,
        current_value=score,
        reference_value=10.0,
        recommendation=rec,
    )


def calculate_stress_impact(level: float, profile: UserProfile) -> MetricImpactDetail:
    age = profile.resolved_age(DEFAULT_CALCULATOR_AGE)
    value = MetricType.STRESS_LEVEL.clamp(level)
    rr = stress_relative_risk(value)
    minutes = relative_risk_to_daily_minutes(rr, STRESS_IMPACT_SCALING, age)
    logger.debug("stress=%.1f rr=%.4f impact=%.3f min/day", value, rr, minutes)

    if value > 6:
        rec = "High chronic stress. Daily decompression time and sleep help most."
    elif value > 3:
        rec = "Moderate stress. Short breaks and exercise keep it in check."
    else:
        rec = "Stress is well managed."
    return MetricImpactDetail(
        metric_type=MetricType.STRESS_LEVEL,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.LOW,
        current_value=level,
        reference_value=3.0,
        recommendation=rec,
    )


def calculate_nutrition_impact(score: float, profile: UserProfile) -> MetricImpactDetail:
    q = MetricType.NUTRITION_QUALITY.clamp(score)
    if q < NUTRITION_REFERENCE:
        minutes = -(NUTRITION_REFERENCE - q) * NUTRITION_PENALTY_PER_POINT
    elif q <= NUTRITION_UPPER_REFERENCE:
        minutes = 0.0
    else:
        minutes = (q - NUTRITION_UPPER_REFERENCE) * NUTRITION_BONUS_PER_POINT
    logger.debug("nutrition=%.1f impact=%.3f min/day", q, minutes)

    if q < NUTRITION_REFERENCE:
        rec = "More vegetables, whole grains and fewer processed foods."
    else:
        rec = "Diet quality is good. Keep the variety up."
    return MetricImpactDetail(
        metric_type=MetricType.NUTRITION_QUALITY,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.MODERATE,
        current_value=score,
        reference_value=NUTRITION_REFERENCE,
        recommendation=rec,
    )


def calculate_social_impact(score: float, profile: UserProfile) -> MetricImpactDetail:
    q = MetricType.SOCIAL_CONNECTIONS_QUALITY.clamp(score)
    minutes = (q - SOCIAL_REFERENCE) * SOCIAL_MINUTES_PER_POINT
    logger.debug("social=%.1f impact=%.3f min/day", q, minutes)

    if q < SOCIAL_REFERENCE:
        rec = "Regular contact with friends or community groups is protective."
    else:
        rec = "Strong social connections. Keep investing in them."
    return MetricImpactDetail(
        metric_type=MetricType.SOCIAL_CONNECTIONS_QUALITY,
        daily_impact_minutes=minutes,
        evidence_strength=EvidenceStrength.MODERATE,
        current_value=score,
        reference_value=SOCIAL_REFERENCE,
        recommendation=rec,
    )
