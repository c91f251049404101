"""MCP tools for manual reading entry.

Lifestyle metrics (nutrition, stress, smoking, alcohol, social connections)
have no sensor; users answer a 1-10 questionnaire instead. Any other metric
can be entered by hand too, e.g. weight from a bathroom scale.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

from amped.domains.health.domain_logic.impact_models import MetricType, Sex, UserProfile

if TYPE_CHECKING:
    from amped.domains.health.connectors.manual_entry import ManualEntryProvider

logger = logging.getLogger(__name__)


def register_manual_entry_tools(
    mcp: FastMCP,
    manual_provider: ManualEntryProvider,
) -> None:
    """Register manual entry tools on the MCP server."""

    @mcp.tool
    async def record_metric(
        ctx: Context,
        metric_type: str,
        value: float,
        recorded_at: str = "",
    ) -> str:
        """Record a reading by hand.

        Values outside the metric's valid range are stored as given and
        clamped when impacts are calculated.

        Args:
            metric_type: Metric wire name, e.g. 'stressLevel' or 'bodyMass'.
            value: Reading value. Questionnaire metrics use 1-10 (10 = healthiest).
            recorded_at: ISO 8601 timestamp, read as UTC without an offset. Defaults to now.
        """
        mtype = MetricType.parse(metric_type)
        timestamp = datetime.fromisoformat(recorded_at) if recorded_at else None
        metric = manual_provider.record(mtype, value, timestamp)
        return json.dumps({
            "status": "saved",
            "metric": metric.as_dict(),
            "valid_range": list(mtype.valid_range),
            "is_questionnaire": mtype.is_manual,
        })

    @mcp.tool
    async def set_user_profile(
        ctx: Context,
        age: int | None = None,
        birth_year: int | None = None,
        sex: str = "unspecified",
        weight_lb: float | None = None,
        height_cm: float | None = None,
    ) -> str:
        """Set the profile used for age/sex-adjusted calculations.

        Args:
            age: Age in years. Takes precedence over birth_year.
            birth_year: Four-digit year of birth.
            sex: 'male', 'female' or 'unspecified'.
            weight_lb: Body weight in pounds.
            height_cm: Height in centimetres.
        """
        try:
            parsed_sex = Sex(sex.lower())
        except ValueError:
            raise ValueError(
                f"Unknown sex {sex!r}; expected one of: male, female, unspecified"
            ) from None
        profile = UserProfile(
            id="manual-user",
            birth_year=birth_year,
            age=age,
            sex=parsed_sex,
            height_cm=height_cm,
            weight_lb=weight_lb,
        )
        manual_provider.set_profile(profile)
        logger.info("Manual profile updated")
        return json.dumps({"status": "saved", "profile": profile.as_dict()})

    @mcp.tool
    async def list_manual_metrics(ctx: Context) -> str:
        """List every manually entered reading, oldest first."""
        metrics = await manual_provider.get_metrics()
        ordered = sorted(metrics, key=lambda m: m.timestamp)
        return json.dumps({
            "count": len(ordered),
            "metrics": [m.as_dict() for m in ordered],
        })
