"""MCP Resources for metric and citation discovery."""

from __future__ import annotations

import json

from fastmcp import FastMCP

from amped.domains.health.domain_logic.impact_models import MetricType
from amped.domains.health.domain_logic.metric_calculators import CALCULATORS
from amped.domains.health.domain_logic.study_references import all_study_references


def register_metric_catalog_resources(mcp: FastMCP) -> None:
    """Register metric catalog resources on the MCP server."""

    @mcp.resource("amped://metrics/catalog")
    def metric_catalog_resource() -> str:
        """Discover every supported metric with its unit and valid range."""
        references = all_study_references()
        return json.dumps(
            {
                "metric_count": len(CALCULATORS),
                "metrics": [
                    {
                        "metric_type": m.value,
                        "display_name": m.display_name,
                        "unit": m.unit,
                        "valid_range": list(m.valid_range),
                        "is_questionnaire": m.is_manual,
                        "study": references[m].short_citation if m in references else None,
                    }
                    for m in MetricType
                ],
            },
            indent=2,
        )
