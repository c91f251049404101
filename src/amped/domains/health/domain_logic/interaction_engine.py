"""Interaction effects between metrics.

Some habits reinforce or undermine each other: good sleep amplifies the
benefit of exercise, heavy drinking blunts HRV and sleep gains. Each rule
checks a joint condition on the *raw* readings and scales the daily
impact of its target metrics by a factor.

Rules run in declaration order. Several rules hitting the same target
compose multiplicatively. A rule whose condition or target metric is
missing from the input does nothing.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from amped.domains.health.domain_logic.cardiovascular_calculator import hrv_reference
from amped.domains.health.domain_logic.impact_models import (
    DEFAULT_CALCULATOR_AGE,
    MetricImpactDetail,
    MetricType,
)
from amped.domains.health.domain_logic.lifestyle_calculator import alcohol_drinks_per_day

logger = logging.getLogger(__name__)

GUIDELINE_WEEKLY_EXERCISE_MINUTES = 150.0
HEAVY_DRINKING_PER_DAY = 2.0
HIGH_STRESS_LEVEL = 7.0
BODY_MASS_THRESHOLD_LB = 200.0
BODY_MASS_STEP_LB = 20.0
BODY_MASS_STEP_FACTOR = 0.90

RawValues = Mapping[MetricType, float]


@dataclass(frozen=True)
class InteractionRule:
    """One joint-condition rule.

    ``factor`` returns the multiplier when the condition holds, else None.
    It is only called when every metric in ``requires`` has a raw value.
    """

    name: str
    title: str
    description: str
    requires: tuple[MetricType, ...]
    targets: tuple[MetricType, ...]
    factor: Callable[[RawValues, int], float | None]


@dataclass(frozen=True)
class InteractionDescription:
    rule: str
    title: str
    description: str
    multiplier: float
    is_positive: bool
    targets: tuple[MetricType, ...]

    def as_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "title": self.title,
            "description": self.description,
            "multiplier": round(self.multiplier, 4),
            "is_positive": self.is_positive,
            "targets": [t.value for t in self.targets],
        }


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------

def _exercise_guideline_met(raw: RawValues) -> bool:
    return raw[MetricType.EXERCISE_MINUTES] > GUIDELINE_WEEKLY_EXERCISE_MINUTES


def _heavy_drinking(raw: RawValues) -> bool:
    return alcohol_drinks_per_day(raw[MetricType.ALCOHOL_CONSUMPTION]) > HEAVY_DRINKING_PER_DAY


def _sleep_exercise(raw: RawValues, age: int) -> float | None:
    if 7.0 <= raw[MetricType.SLEEP_HOURS] <= 8.0 and _exercise_guideline_met(raw):
        return 1.15
    return None


def _exercise_hrv(raw: RawValues, age: int) -> float | None:
    if _exercise_guideline_met(raw) and raw[MetricType.HEART_RATE_VARIABILITY] > hrv_reference(age):
        return 1.10
    return None


def _nutrition_exercise(raw: RawValues, age: int) -> float | None:
    if raw[MetricType.NUTRITION_QUALITY] >= 8.0 and _exercise_guideline_met(raw):
        return 1.12
    return None


def _alcohol_hrv(raw: RawValues, age: int) -> float | None:
    return 0.75 if _heavy_drinking(raw) else None


def _alcohol_sleep(raw: RawValues, age: int) -> float | None:
    return 0.80 if _heavy_drinking(raw) else None


def _stress_sleep(raw: RawValues, age: int) -> float | None:
    return 0.85 if raw[MetricType.STRESS_LEVEL] > HIGH_STRESS_LEVEL else None


def body_mass_activity_factor(weight_lb: float) -> float:
    """0.90 for every full 20 lb over 200 lb; 1.0 at or below 200 lb."""
    mass = MetricType.BODY_MASS.clamp(weight_lb)
    if mass <= BODY_MASS_THRESHOLD_LB:
        return 1.0
    steps = math.floor((mass - BODY_MASS_THRESHOLD_LB) / BODY_MASS_STEP_LB)
    return BODY_MASS_STEP_FACTOR ** steps


def _body_mass_activity(raw: RawValues, age: int) -> float | None:
    if raw[MetricType.BODY_MASS] > BODY_MASS_THRESHOLD_LB:
        return body_mass_activity_factor(raw[MetricType.BODY_MASS])
    return None


RULES: tuple[InteractionRule, ...] = (
    InteractionRule(
        name="sleep_exercise_synergy",
        title="Sleep-Exercise Synergy",
        description="Good sleep and regular exercise are amplifying each other's benefits",
        requires=(MetricType.SLEEP_HOURS, MetricType.EXERCISE_MINUTES),
        targets=(MetricType.SLEEP_HOURS,),
        factor=_sleep_exercise,
    ),
    InteractionRule(
        name="exercise_hrv_synergy",
        title="Exercise-HRV Synergy",
        description="Regular exercise is reinforcing your above-reference heart rate variability",
        requires=(MetricType.EXERCISE_MINUTES, MetricType.HEART_RATE_VARIABILITY),
        targets=(MetricType.HEART_RATE_VARIABILITY,),
        factor=_exercise_hrv,
    ),
    InteractionRule(
        name="nutrition_exercise_synergy",
        title="Nutrition-Exercise Synergy",
        description="A high-quality diet is getting more out of your exercise",
        requires=(MetricType.NUTRITION_QUALITY, MetricType.EXERCISE_MINUTES),
        targets=(MetricType.NUTRITION_QUALITY,),
        factor=_nutrition_exercise,
    ),
    InteractionRule(
        name="alcohol_hrv_antagonism",
        title="Alcohol-HRV Impact",
        description="Alcohol consumption is reducing your heart rate variability benefits",
        requires=(MetricType.ALCOHOL_CONSUMPTION,),
        targets=(MetricType.HEART_RATE_VARIABILITY,),
        factor=_alcohol_hrv,
    ),
    InteractionRule(
        name="alcohol_sleep_antagonism",
        title="Alcohol-Sleep Impact",
        description="Alcohol consumption is reducing the restorative value of your sleep",
        requires=(MetricType.ALCOHOL_CONSUMPTION,),
        targets=(MetricType.SLEEP_HOURS,),
        factor=_alcohol_sleep,
    ),
    InteractionRule(
        name="stress_sleep_antagonism",
        title="Stress-Sleep Impact",
        description="High stress is undermining your sleep",
        requires=(MetricType.STRESS_LEVEL,),
        targets=(MetricType.SLEEP_HOURS,),
        factor=_stress_sleep,
    ),
    InteractionRule(
        name="body_mass_activity",
        title="Body Mass-Activity Impact",
        description="Higher body mass is reducing the benefit of your activity",
        requires=(MetricType.BODY_MASS,),
        targets=(
            MetricType.STEPS,
            MetricType.EXERCISE_MINUTES,
            MetricType.ACTIVE_ENERGY_BURNED,
        ),
        factor=_body_mass_activity,
    ),
)


class InteractionEngine:
    """Applies ``RULES`` (or a caller-supplied rule set) to a set of impacts."""

    def __init__(self, rules: tuple[InteractionRule, ...] = RULES) -> None:
        self.rules = rules

    def _fire(self, rule: InteractionRule, raw: RawValues, age: int) -> float | None:
        if any(m not in raw for m in rule.requires):
            return None
        return rule.factor(raw, age)

    def adjust(
        self,
        impacts: Mapping[MetricType, MetricImpactDetail],
        raw_values: RawValues,
        age: int = DEFAULT_CALCULATOR_AGE,
    ) -> dict[MetricType, MetricImpactDetail]:
        """Return a new mapping with the same keys and rule factors applied."""
        factors = {metric_type: 1.0 for metric_type in impacts}
        for rule in self.rules:
            targets = [t for t in rule.targets if t in impacts]
            if not targets:
                continue
            factor = self._fire(rule, raw_values, age)
            if factor is None:
                continue
            for t in targets:
                factors[t] *= factor
            logger.debug("Interaction %s fired: x%.3f on %s", rule.name, factor,
                         ", ".join(t.value for t in targets))

        return {
            metric_type: detail if factors[metric_type] == 1.0
            else detail.with_impact(detail.daily_impact_minutes * factors[metric_type])
            for metric_type, detail in impacts.items()
        }

    def active_interactions(
        self,
        raw_values: RawValues,
        age: int = DEFAULT_CALCULATOR_AGE,
    ) -> list[InteractionDescription]:
        """Describe every rule that would change at least one present metric."""
        active: list[InteractionDescription] = []
        for rule in self.rules:
            targets = tuple(t for t in rule.targets if t in raw_values)
            if not targets:
                continue
            factor = self._fire(rule, raw_values, age)
            if factor is None or factor == 1.0:
                continue
            active.append(InteractionDescription(
                rule=rule.name,
                title=rule.title,
                description=rule.description,
                multiplier=factor,
                is_positive=factor > 1.0,
                targets=targets,
            ))
        return active
