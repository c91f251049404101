"""Amped Life Impact MCP Server: application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from amped.core.config.settings import Settings, get_settings
from amped.domains.health.connectors import HealthMetricProvider
from amped.domains.health.connectors.composite import CompositeHealthMetricProvider
from amped.domains.health.connectors.manual_entry import ManualEntryProvider
from amped.domains.health.connectors.mock_data import get_mock_user_profile
from amped.domains.health.connectors.providers import MockHealthMetricProvider
from amped.domains.health.domain_logic.impact_models import Sex, UserProfile
from amped.domains.health.domain_logic.metric_calculators import CALCULATORS
from amped.domains.health.domain_logic.study_references import all_study_references
from amped.domains.health.prompts.health_prompts import register_health_prompts
from amped.domains.health.resources.metric_catalog import register_metric_catalog_resources
from amped.domains.health.tools.life_impact_tools import register_life_impact_tools
from amped.domains.health.tools.manual_entry_tools import register_manual_entry_tools

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def _profile_from_settings(settings: Settings, base: UserProfile) -> UserProfile:
    """Overlay any profile fields set in the environment onto ``base``."""
    return UserProfile(
        id=base.id,
        birth_year=settings.profile_birth_year if settings.profile_birth_year is not None else base.birth_year,
        age=settings.profile_age if settings.profile_age is not None else base.age,
        sex=Sex(settings.profile_sex) if settings.profile_sex else base.sex,
        height_cm=base.height_cm,
        weight_lb=settings.profile_weight_lb if settings.profile_weight_lb is not None else base.weight_lb,
    )


def create_app(
    *,
    health_metric_provider_override: HealthMetricProvider | None = None,
    manual_provider_override: ManualEntryProvider | None = None,
) -> FastMCP:
    """Create and configure the Amped Life Impact server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Initializes the manual entry provider and the reading provider
    3. Registers all tools, resources, and prompts
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        "Amped Life Impact",
        instructions=(
            "Amped life impact server. Converts daily health readings "
            "(steps, sleep, heart rate, lifestyle questionnaires) into minutes "
            "of life gained or lost and a projected life expectancy."
        ),
    )

    # --- Initialize providers ---
    base_profile = UserProfile() if settings.data_source == "manual" else get_mock_user_profile()
    profile = _profile_from_settings(settings, base_profile)

    if manual_provider_override is not None:
        manual_provider = manual_provider_override
    else:
        manual_provider = ManualEntryProvider(profile)

    if health_metric_provider_override is not None:
        provider = health_metric_provider_override
    elif settings.data_source == "manual":
        provider = manual_provider
        logger.info("Using manual entry provider only")
    else:
        provider = CompositeHealthMetricProvider([manual_provider, MockHealthMetricProvider(profile)])
        logger.info("Using manual entries over mock readings")

    references = all_study_references()
    logger.info("Loaded %d study references", len(references))

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": "Amped Life Impact",
            "version": VERSION,
            "data_source": provider.data_source,
            "connected": provider.is_connected(),
            "metrics_supported": len(CALCULATORS),
            "study_references": len(references),
            "default_period": settings.default_period,
        }

    register_life_impact_tools(server, provider, default_period=settings.default_period)
    logger.info("Life impact tools registered")

    register_manual_entry_tools(server, manual_provider)
    logger.info("Manual entry tools registered")

    # --- Register resources ---
    register_metric_catalog_resources(server)

    # --- Register prompts ---
    register_health_prompts(server)

    return server


# Module-level instance for FastMCP discovery ("server": "...app.py:mcp").
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
