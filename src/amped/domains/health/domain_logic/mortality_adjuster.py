"""Baseline mortality tables and age/sex adjustment of daily impacts.

The tables are module-level constants wrapped in read-only mappings so
they can be shared across threads without locking.
"""

from __future__ import annotations

import bisect
import logging
import math
from types import MappingProxyType
from typing import Mapping

from amped.domains.health.domain_logic.impact_models import (
    DEFAULT_PROJECTION_AGE,
    MAX_LIFE_EXPECTANCY_YEARS,
    MetricType,
    Sex,
    UserProfile,
)

logger = logging.getLogger(__name__)

BASE_MORTALITY_RATE = 0.001
DEFAULT_DECAY_RATE = 0.12

# Annual deaths per 100,000 by decade of age
_MORTALITY_PER_100K: Mapping[Sex, Mapping[int, float]] = MappingProxyType({
    Sex.MALE: MappingProxyType({
        0: 4.5, 10: 0.15, 20: 0.75, 30: 1.2, 40: 2.0,
        50: 4.5, 60: 11.0, 70: 25.0, 80: 60.0, 90: 150.0,
    }),
    Sex.FEMALE: MappingProxyType({
        0: 3.8, 10: 0.12, 20: 0.35, 30: 0.7, 40: 1.4,
        50: 3.0, 60: 7.0, 70: 17.0, 80: 45.0, 90: 130.0,
    }),
})

# Remaining life expectancy in years by decade of age
_REMAINING_YEARS: Mapping[Sex, Mapping[int, float]] = MappingProxyType({
    Sex.MALE: MappingProxyType({
        0: 71.4, 10: 62.1, 20: 52.3, 30: 42.8, 40: 33.5,
        50: 24.7, 60: 16.8, 70: 10.1, 80: 5.5, 90: 3.0,
    }),
    Sex.FEMALE: MappingProxyType({
        0: 76.8, 10: 67.4, 20: 57.5, 30: 47.7, 40: 38.1,
        50: 28.8, 60: 20.1, 70: 12.5, 80: 6.8, 90: 3.5,
    }),
})

_DECAY_RATES: Mapping[MetricType, float] = MappingProxyType({
    MetricType.EXERCISE_MINUTES: 0.15,
    MetricType.STEPS: 0.15,
    MetricType.SMOKING_STATUS: 0.05,
    MetricType.ALCOHOL_CONSUMPTION: 0.05,
    MetricType.SLEEP_HOURS: 0.10,
    MetricType.NUTRITION_QUALITY: 0.10,
})


def _interpolate(table: Mapping[int, float], age: float) -> float:
    """Linear interpolation between decade rows, flat beyond either end."""
    ages = sorted(table)
    if age <= ages[0]:
        return table[ages[0]]
    if age >= ages[-1]:
        return table[ages[-1]]
    i = bisect.bisect_right(ages, age)
    lo, hi = ages[i - 1], ages[i]
    fraction = (age - lo) / (hi - lo)
    return table[lo] + (table[hi] - table[lo]) * fraction


def _lookup(tables: Mapping[Sex, Mapping[int, float]], age: float, sex: Sex) -> float:
    if sex in tables:
        return _interpolate(tables[sex], age)
    # Unspecified: mean of both sexes
    return (
        _interpolate(tables[Sex.MALE], age) + _interpolate(tables[Sex.FEMALE], age)
    ) / 2.0


def decay_rate_for(metric_type: MetricType) -> float:
    """Annual rate at which a current behaviour's influence fades."""
    return _DECAY_RATES.get(metric_type, DEFAULT_DECAY_RATE)


def apply_behavior_decay(impact: float, years_in_future: float, decay_rate: float = DEFAULT_DECAY_RATE) -> float:
    """Share of today's impact still in effect after ``years_in_future`` years."""
    return impact * math.exp(-decay_rate * years_in_future)


class MortalityAdjuster:
    """Stateless wrapper around the static life tables."""

    def annual_mortality_rate(self, age: float, sex: Sex) -> float:
        """Annual mortality as a probability (per-100k rate / 100000)."""
        return _lookup(_MORTALITY_PER_100K, age, sex) / 100_000.0

    def remaining_life_expectancy(self, age: float, sex: Sex) -> float:
        return _lookup(_REMAINING_YEARS, age, sex)

    def baseline_life_expectancy(self, profile: UserProfile) -> float:
        """Expected age at death from the tables, held inside the projection bounds."""
        age = profile.resolved_age(DEFAULT_PROJECTION_AGE)
        expected = age + self.remaining_life_expectancy(age, profile.sex)
        return min(expected, max(MAX_LIFE_EXPECTANCY_YEARS, age + 1.0))

    def adjust_for_mortality(self, daily_impact: float, age: float, sex: Sex) -> float:
        """Dampen an impact for cohorts with higher baseline mortality.

        Cohorts at or below the base rate are left unchanged; above it the
        impact shrinks with the square root of the rate ratio.
        """
        rate = self.annual_mortality_rate(age, sex)
        factor = BASE_MORTALITY_RATE / max(rate, BASE_MORTALITY_RATE)
        return daily_impact * math.sqrt(factor)
