"""MCP tools exposing the life impact engine.

Every tool reads the current readings and profile from the configured
HealthMetricProvider, runs the pure engine, and returns JSON.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

from amped.domains.health.domain_logic.impact_models import (
    DEFAULT_CALCULATOR_AGE,
    ImpactPeriod,
    MetricType,
)
from amped.domains.health.domain_logic.interaction_engine import InteractionEngine
from amped.domains.health.domain_logic.life_impact_service import (
    LifeImpactService,
    battery_level,
    latest_readings,
)
from amped.domains.health.domain_logic.life_projection_service import LifeProjectionService
from amped.domains.health.domain_logic.metric_calculators import compute
from amped.domains.health.domain_logic.optimal_metrics import create_optimal_metrics
from amped.domains.health.domain_logic.study_references import get_study_reference

if TYPE_CHECKING:
    from amped.domains.health.connectors import HealthMetricProvider

logger = logging.getLogger(__name__)


def parse_period(name: str) -> ImpactPeriod:
    try:
        return ImpactPeriod(name.lower())
    except ValueError:
        valid = ", ".join(p.value for p in ImpactPeriod)
        raise ValueError(f"Unknown period {name!r}; expected one of: {valid}") from None


def _insufficient_data(provider: HealthMetricProvider, **extra) -> str:
    return json.dumps({
        "status": "insufficient_data",
        "message": (
            "No health readings are available. Record readings or connect a "
            "data source before calculating life impact."
        ),
        **extra,
        "provenance": provider.get_provenance(),
    })


def register_life_impact_tools(
    mcp: FastMCP,
    provider: HealthMetricProvider,
    default_period: str = "day",
) -> None:
    """Register life impact and projection tools on the MCP server."""

    interaction_engine = InteractionEngine()
    projection_service = LifeProjectionService()

    @mcp.tool
    async def life_impact(ctx: Context, period: str = "") -> str:
        """Calculate how current habits add or remove minutes of life.

        Runs every available reading through its impact curve, applies
        interaction effects between habits and an age/sex mortality
        adjustment, then reports the evidence-weighted total for the period.

        Args:
            period: 'day', 'month' or 'year'. Defaults to the server setting.
        """
        impact_period = parse_period(period or default_period)
        metrics = await provider.get_metrics(impact_period.value)
        if not metrics:
            return _insufficient_data(provider, period=impact_period.value)

        profile = await provider.get_user_profile()
        service = LifeImpactService(profile, interaction_engine=interaction_engine)
        data_point = service.calculate_total_impact(metrics, impact_period)

        raw_values = {t: m.value for t, m in latest_readings(metrics).items()}
        interactions = interaction_engine.active_interactions(
            raw_values, age=profile.resolved_age(DEFAULT_CALCULATOR_AGE)
        )
        logger.info("life_impact: %s over %s", data_point.formatted_impact, impact_period.value)
        return json.dumps({
            "status": "ok",
            "impact": data_point.as_dict(),
            "battery_level": round(battery_level(data_point.daily_impact_minutes), 1),
            "active_interactions": [i.as_dict() for i in interactions],
            "provenance": provider.get_provenance(),
        })

    @mcp.tool
    async def life_projection(ctx: Context) -> str:
        """Project life expectancy if current habits continue.

        The daily impact is assumed to fade over time, is weighted by the
        strength of the underlying evidence, and is bounded to a plausible
        range. Includes the baseline expectancy for the user's age and sex.
        """
        metrics = await provider.get_metrics("day")
        profile = await provider.get_user_profile()
        projection = projection_service.project_from_metrics(profile, metrics)
        if not metrics:
            return _insufficient_data(provider, projection=projection.as_dict())
        return json.dumps({
            "status": "ok",
            "projection": projection.as_dict(),
            "provenance": provider.get_provenance(),
        })

    @mcp.tool
    async def optimal_comparison(ctx: Context) -> str:
        """Compare the current projection with an optimal-habits projection.

        The optimal set uses research-backed targets (12000 steps, 7.5 h
        sleep, no smoking, ...) adjusted for the user's age and sex.
        """
        metrics = await provider.get_metrics("day")
        profile = await provider.get_user_profile()
        optimal = projection_service.project_from_metrics(profile, create_optimal_metrics(profile))
        if not metrics:
            return _insufficient_data(provider, optimal=optimal.as_dict())

        current = projection_service.project_from_metrics(profile, metrics)
        gap = optimal.projected_life_expectancy_years - current.projected_life_expectancy_years
        return json.dumps({
            "status": "ok",
            "current": current.as_dict(),
            "optimal": optimal.as_dict(),
            "potential_gain_years": round(max(0.0, gap), 2),
            "provenance": provider.get_provenance(),
        })

    @mcp.tool
    async def metric_impact(ctx: Context, metric_type: str, value: float) -> str:
        """Evaluate a single reading without interactions or aggregation.

        Args:
            metric_type: Metric wire name, e.g. 'steps', 'sleepHours', 'alcoholConsumption'.
            value: Raw reading. Questionnaire metrics use a 1-10 scale (10 = healthiest).
        """
        mtype = MetricType.parse(metric_type)
        profile = await provider.get_user_profile()
        detail = compute(mtype, value, profile)
        reference = get_study_reference(mtype)
        return json.dumps({
            "status": "ok",
            "impact": detail.as_dict(),
            "unit": mtype.unit,
            "valid_range": list(mtype.valid_range),
            "study": reference.short_citation if reference else None,
        })

    @mcp.tool
    async def study_reference(ctx: Context, metric_type: str) -> str:
        """Return the primary research citation behind a metric's impact curve.

        Args:
            metric_type: Metric wire name, e.g. 'steps' or 'smokingStatus'.
        """
        mtype = MetricType.parse(metric_type)
        reference = get_study_reference(mtype)
        if reference is None:
            return json.dumps({"status": "not_found", "metric_type": mtype.value})
        return json.dumps({"status": "ok", "metric_type": mtype.value, "reference": reference.as_dict()})
