"""Composite provider: merges several sources with per-metric priority.

For each metric type, readings come from the highest-priority provider
that has any reading of that type. The profile always comes from the
highest-priority provider.
"""

from __future__ import annotations

import logging

from amped.domains.health.connectors import HealthMetricProvider
from amped.domains.health.domain_logic.impact_models import HealthMetric, MetricType, UserProfile

logger = logging.getLogger(__name__)


class CompositeHealthMetricProvider:
    """Merges multiple HealthMetricProviders with priority ordering.

    Usage::

        composite = CompositeHealthMetricProvider([
            manual_provider,  # Highest priority
            mock_provider,    # Fallback
        ])
        metrics = await composite.get_metrics("day")
    """

    def __init__(self, providers: list[HealthMetricProvider]) -> None:
        if not providers:
            raise ValueError("At least one provider is required")
        self._providers = providers

    async def get_metrics(self, period: str = "day") -> list[HealthMetric]:
        claimed: set[MetricType] = set()
        merged: list[HealthMetric] = []
        for provider in self._providers:
            readings = await provider.get_metrics(period)
            fresh = [m for m in readings if m.type not in claimed]
            merged.extend(fresh)
            claimed.update(m.type for m in fresh)
        logger.debug("Composite merged %d readings across %d types", len(merged), len(claimed))
        return merged

    async def get_user_profile(self) -> UserProfile:
        return await self._providers[0].get_user_profile()

    def is_connected(self) -> bool:
        """True if any provider is connected."""
        return any(p.is_connected() for p in self._providers)

    @property
    def data_source(self) -> str:
        for provider in self._providers:
            if provider.is_connected():
                return provider.data_source
        return self._providers[-1].data_source

    def get_provenance(self) -> dict[str, str]:
        active = [p.data_source for p in self._providers if p.is_connected()]
        return {
            "data_source": self.data_source,
            "active_sources": ", ".join(active) if active else "none",
            "data_source_note": (
                f"Composite provider with {len(active)} active source(s). "
                f"Priority: {' > '.join(p.data_source for p in self._providers)}."
            ),
        }
