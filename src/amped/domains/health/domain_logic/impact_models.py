"""Life impact value objects and domain constants.

Every type here is immutable. Calculators, the interaction engine and the
mortality adjuster produce new ``MetricImpactDetail`` instances instead of
mutating readings or earlier results.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

DAYS_PER_YEAR = 365.25
MINUTES_PER_DAY = 24 * 60
MINUTES_PER_YEAR = DAYS_PER_YEAR * MINUTES_PER_DAY

# Reference lifespan used to turn a relative risk into minutes of life
REFERENCE_LIFESPAN_YEARS = 78.0
BASELINE_LIFE_MINUTES = REFERENCE_LIFESPAN_YEARS * DAYS_PER_YEAR * MINUTES_PER_DAY

# Fallback ages when a profile carries neither age nor birth year
DEFAULT_CALCULATOR_AGE = 40
DEFAULT_PROJECTION_AGE = 30

MAX_LIFE_EXPECTANCY_YEARS = 120.0
CONFIDENCE_INTERVAL_YEARS = 2.0


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"
    UNSPECIFIED = "unspecified"


class Provenance(str, Enum):
    """Where a reading came from. Informational only; the engine ignores it."""

    SENSOR = "sensor"
    MANUAL = "manual"


class EvidenceStrength(str, Enum):
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"

    @property
    def reliability_weight(self) -> float:
        return _RELIABILITY_WEIGHTS[self]


_RELIABILITY_WEIGHTS = {
    EvidenceStrength.HIGH: 1.0,
    EvidenceStrength.MODERATE: 0.8,
    EvidenceStrength.LOW: 0.6,
}


class ImpactPeriod(str, Enum):
    DAY = "day"
    MONTH = "month"
    YEAR = "year"

    @property
    def multiplier(self) -> int:
        # Linear scaling, not calendar lengths
        return _PERIOD_MULTIPLIERS[self]


_PERIOD_MULTIPLIERS = {
    ImpactPeriod.DAY: 1,
    ImpactPeriod.MONTH: 30,
    ImpactPeriod.YEAR: 365,
}


class MetricType(str, Enum):
    """Closed set of measured quantities. Each maps to exactly one calculator."""

    STEPS = "steps"
    EXERCISE_MINUTES = "exerciseMinutes"
    ACTIVE_ENERGY_BURNED = "activeEnergyBurned"
    SLEEP_HOURS = "sleepHours"
    RESTING_HEART_RATE = "restingHeartRate"
    HEART_RATE_VARIABILITY = "heartRateVariability"
    BODY_MASS = "bodyMass"
    VO2_MAX = "vo2Max"
    OXYGEN_SATURATION = "oxygenSaturation"
    NUTRITION_QUALITY = "nutritionQuality"
    STRESS_LEVEL = "stressLevel"
    SMOKING_STATUS = "smokingStatus"
    ALCOHOL_CONSUMPTION = "alcoholConsumption"
    SOCIAL_CONNECTIONS_QUALITY = "socialConnectionsQuality"

    @property
    def display_name(self) -> str:
        return _METRIC_INFO[self][0]

    @property
    def unit(self) -> str:
        return _METRIC_INFO[self][1]

    @property
    def valid_range(self) -> tuple[float, float]:
        """Inclusive clamp range applied before any formula."""
        return _METRIC_INFO[self][2]

    @property
    def is_manual(self) -> bool:
        """True for questionnaire metrics (1-10 scales)."""
        return self in _MANUAL_METRICS

    def clamp(self, value: float) -> float:
        lo, hi = self.valid_range
        return max(lo, min(hi, value))

    @classmethod
    def parse(cls, name: str) -> MetricType:
        """Look up a metric by wire name (``sleepHours``) or member name (``SLEEP_HOURS``)."""
        try:
            return cls(name)
        except ValueError:
            pass
        try:
            return cls[name.upper()]
        except KeyError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown metric type {name!r}; expected one of: {valid}") from None


# (display name, unit, valid range)
_METRIC_INFO: dict[MetricType, tuple[str, str, tuple[float, float]]] = {
    MetricType.STEPS: ("Steps", "steps/day", (0.0, 50_000.0)),
    MetricType.EXERCISE_MINUTES: ("Exercise", "min/week", (0.0, 1_500.0)),
    MetricType.ACTIVE_ENERGY_BURNED: ("Active Energy", "kcal/day", (0.0, 2_000.0)),
    MetricType.SLEEP_HOURS: ("Sleep", "h/night", (3.0, 12.0)),
    MetricType.RESTING_HEART_RATE: ("Resting Heart Rate", "bpm", (40.0, 120.0)),
    MetricType.HEART_RATE_VARIABILITY: ("Heart Rate Variability", "ms", (5.0, 150.0)),
    MetricType.BODY_MASS: ("Weight", "lb", (80.0, 400.0)),
    MetricType.VO2_MAX: ("VO2 Max", "ml/kg/min", (15.0, 80.0)),
    MetricType.OXYGEN_SATURATION: ("Oxygen Saturation", "%", (80.0, 100.0)),
    MetricType.NUTRITION_QUALITY: ("Nutrition", "score 1-10", (1.0, 10.0)),
    MetricType.STRESS_LEVEL: ("Stress Level", "score 1-10", (1.0, 10.0)),
    MetricType.SMOKING_STATUS: ("Smoking", "score 1-10", (1.0, 10.0)),
    MetricType.ALCOHOL_CONSUMPTION: ("Alcohol", "score 1-10", (1.0, 10.0)),
    MetricType.SOCIAL_CONNECTIONS_QUALITY: ("Social Connections", "score 1-10", (1.0, 10.0)),
}

_MANUAL_METRICS = frozenset({
    MetricType.NUTRITION_QUALITY,
    MetricType.STRESS_LEVEL,
    MetricType.SMOKING_STATUS,
    MetricType.ALCOHOL_CONSUMPTION,
    MetricType.SOCIAL_CONNECTIONS_QUALITY,
})


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UserProfile:
    """Caller-supplied profile. Either ``age`` or ``birth_year`` may be set."""

    id: str = "anonymous"
    birth_year: int | None = None
    age: int | None = None
    sex: Sex = Sex.UNSPECIFIED
    height_cm: float | None = None
    weight_lb: float | None = None

    def resolved_age(self, default: int, *, today: datetime | None = None) -> int:
        if self.age is not None:
            return self.age
        if self.birth_year is not None:
            year = (today or datetime.now(timezone.utc)).year
            return max(0, year - self.birth_year)
        return default

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "birth_year": self.birth_year,
            "age": self.age,
            "sex": self.sex.value,
            "height_cm": self.height_cm,
            "weight_lb": self.weight_lb,
        }


@dataclass(frozen=True)
class HealthMetric:
    """A single reading. Never mutated; impacts live in ``MetricImpactDetail``."""

    type: MetricType
    value: float
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    provenance: Provenance = Provenance.SENSOR

    def __post_init__(self) -> None:
        # Naive timestamps are read as UTC so readings always compare
        if self.timestamp.tzinfo is None:
            object.__setattr__(self, "timestamp", self.timestamp.replace(tzinfo=timezone.utc))

    def as_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "value": self.value,
            "timestamp": self.timestamp.isoformat(),
            "provenance": self.provenance.value,
        }


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MetricImpactDetail:
    """Calculator output for one metric."""

    metric_type: MetricType
    daily_impact_minutes: float
    evidence_strength: EvidenceStrength
    current_value: float | None = None
    reference_value: float | None = None
    recommendation: str = ""

    @property
    def reliability_weight(self) -> float:
        return self.evidence_strength.reliability_weight

    @property
    def weighted_impact_minutes(self) -> float:
        return self.daily_impact_minutes * self.reliability_weight

    def with_impact(self, daily_impact_minutes: float) -> MetricImpactDetail:
        return replace(self, daily_impact_minutes=daily_impact_minutes)

    @property
    def impact_description(self) -> str:
        return describe_minutes(self.daily_impact_minutes)

    def as_dict(self) -> dict[str, Any]:
        return {
            "metric_type": self.metric_type.value,
            "display_name": self.metric_type.display_name,
            "daily_impact_minutes": round(self.daily_impact_minutes, 4),
            "evidence_strength": self.evidence_strength.value,
            "reliability_weight": self.reliability_weight,
            "current_value": self.current_value,
            "reference_value": self.reference_value,
            "recommendation": self.recommendation,
            "description": self.impact_description,
        }


@dataclass(frozen=True)
class ImpactDataPoint:
    """Aggregated impact for one period. Built fresh on every aggregation."""

    as_of: datetime
    period: ImpactPeriod
    total_impact_minutes: float
    per_metric_impacts: Mapping[MetricType, MetricImpactDetail]
    evidence_quality_score: float

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "per_metric_impacts", MappingProxyType(dict(self.per_metric_impacts))
        )

    @property
    def daily_impact_minutes(self) -> float:
        return self.total_impact_minutes / self.period.multiplier

    @property
    def is_empty(self) -> bool:
        return not self.per_metric_impacts

    @property
    def top_contributing_metric(self) -> MetricType | None:
        if not self.per_metric_impacts:
            return None
        return max(
            self.per_metric_impacts.values(),
            key=lambda d: abs(d.weighted_impact_minutes),
        ).metric_type

    @property
    def formatted_impact(self) -> str:
        minutes = self.total_impact_minutes
        sign = "+" if minutes >= 0 else "-"
        if abs(minutes) < 60:
            return f"{sign}{int(abs(minutes))} min"
        hours = abs(minutes) / 60.0
        if hours < 24:
            return f"{sign}{hours:.1f} hrs"
        return f"{sign}{hours / 24.0:.1f} days"

    def as_dict(self) -> dict[str, Any]:
        top = self.top_contributing_metric
        return {
            "as_of": self.as_of.isoformat(),
            "period": self.period.value,
            "total_impact_minutes": round(self.total_impact_minutes, 4),
            "daily_impact_minutes": round(self.daily_impact_minutes, 4),
            "formatted_impact": self.formatted_impact,
            "evidence_quality_score": round(self.evidence_quality_score, 4),
            "top_contributing_metric": top.value if top else None,
            "per_metric_impacts": {
                t.value: d.as_dict() for t, d in self.per_metric_impacts.items()
            },
        }


@dataclass(frozen=True)
class LifeProjection:
    computed_at: datetime
    current_age: int
    baseline_life_expectancy_years: float
    projected_life_expectancy_years: float
    confidence_percentage: float
    confidence_interval_years: float = CONFIDENCE_INTERVAL_YEARS

    @property
    def net_impact_years(self) -> float:
        return self.projected_life_expectancy_years - self.baseline_life_expectancy_years

    @property
    def net_impact_days(self) -> float:
        return self.net_impact_years * DAYS_PER_YEAR

    @property
    def lower_bound_years(self) -> float:
        return self.projected_life_expectancy_years - self.confidence_interval_years / 2.0

    @property
    def upper_bound_years(self) -> float:
        return self.projected_life_expectancy_years + self.confidence_interval_years / 2.0

    @property
    def remaining_years(self) -> float:
        return max(0.0, self.projected_life_expectancy_years - self.current_age)

    @property
    def interpretation(self) -> str:
        net = self.net_impact_years
        if net > 5.0:
            return "Significantly extending life expectancy"
        if net > 2.0:
            return "Moderately extending life expectancy"
        if net > 0.5:
            return "Slightly extending life expectancy"
        if net > -0.5:
            return "Maintaining baseline life expectancy"
        if net > -2.0:
            return "Slightly reducing life expectancy"
        if net > -5.0:
            return "Moderately reducing life expectancy"
        return "Significantly reducing life expectancy"

    @property
    def confidence_description(self) -> str:
        pct = int(self.confidence_percentage * 100)
        if self.confidence_percentage >= 0.8:
            label = "High"
        elif self.confidence_percentage >= 0.6:
            label = "Moderate"
        elif self.confidence_percentage >= 0.4:
            label = "Limited"
        else:
            label = "Low"
        return f"{label} confidence ({pct}% evidence quality)"

    def as_dict(self) -> dict[str, Any]:
        return {
            "computed_at": self.computed_at.isoformat(),
            "current_age": self.current_age,
            "baseline_life_expectancy_years": round(self.baseline_life_expectancy_years, 2),
            "projected_life_expectancy_years": round(self.projected_life_expectancy_years, 2),
            "net_impact_years": round(self.net_impact_years, 2),
            "remaining_years": round(self.remaining_years, 2),
            "confidence_percentage": round(self.confidence_percentage, 4),
            "confidence_interval_years": self.confidence_interval_years,
            "confidence_description": self.confidence_description,
            "interpretation": self.interpretation,
        }


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

_DURATION_UNITS = [
    ("year", 525_600.0),
    ("month", 43_200.0),
    ("week", 10_080.0),
    ("day", 1_440.0),
    ("hour", 60.0),
]


def describe_minutes(minutes: float) -> str:
    """Render a signed minute count as e.g. ``'1.5 hours gained'``."""
    direction = "gained" if minutes >= 0 else "lost"
    magnitude = abs(minutes)
    for unit, size in _DURATION_UNITS:
        if magnitude >= size:
            amount = magnitude / size
            text = f"{amount:.1f}" if amount < 10 else f"{amount:.0f}"
            plural = "" if text == "1.0" else "s"
            return f"{text} {unit}{plural} {direction}"
    whole = int(magnitude)
    return f"{whole} minute{'' if whole == 1 else 's'} {direction}"


# ---------------------------------------------------------------------------
# Shared conversions
# ---------------------------------------------------------------------------

def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def relative_risk_to_daily_minutes(relative_risk: float, impact_scaling: float, age: int) -> float:
    """Convert a relative risk into signed minutes of life per day.

    RR < 1.0 (protective) yields positive minutes, RR > 1.0 negative.
    The remaining-years floor of 1 keeps the divisor non-zero past 78.
    """
    risk_reduction = 1.0 - relative_risk
    remaining_years = max(1.0, REFERENCE_LIFESPAN_YEARS - age)
    return (
        BASELINE_LIFE_MINUTES * risk_reduction * impact_scaling
        / (remaining_years * DAYS_PER_YEAR)
    )
