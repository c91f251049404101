"""Health metric connectors: abstraction layer for reading retrieval."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from amped.domains.health.domain_logic.impact_models import HealthMetric, UserProfile


@runtime_checkable
class HealthMetricProvider(Protocol):
    """Abstract source of readings and the profile they belong to.

    Tools call these methods without knowing whether readings come from a
    wearable export, manual questionnaire answers, or mock generators.
    """

    async def get_metrics(self, period: str = "day") -> list[HealthMetric]:
        """Readings for the period. May contain several per metric type."""
        ...

    async def get_user_profile(self) -> UserProfile:
        ...

    def is_connected(self) -> bool:
        """Whether real readings are available."""
        ...

    @property
    def data_source(self) -> str:
        """Label for the active data source: 'manual', 'composite', or 'mock'."""
        ...

    def get_provenance(self) -> dict[str, str]:
        """Return provenance metadata suitable for merging into tool output."""
        ...
