"""Manual entry provider: questionnaire answers and hand-entered readings.

Users record lifestyle answers (1-10 scales) and occasional measurements
via MCP tools. Entries are held in memory for the life of the server.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from amped.domains.health.domain_logic.impact_models import (
    HealthMetric,
    MetricType,
    Provenance,
    UserProfile,
)

logger = logging.getLogger(__name__)


class ManualEntryProvider:
    """HealthMetricProvider backed by manually entered readings."""

    def __init__(self, profile: UserProfile | None = None) -> None:
        self._profile = profile or UserProfile()
        self._entries: list[HealthMetric] = []

    def record(
        self,
        metric_type: MetricType,
        value: float,
        timestamp: datetime | None = None,
    ) -> HealthMetric:
        metric = HealthMetric(
            type=metric_type,
            value=float(value),
            timestamp=timestamp or datetime.now(timezone.utc),
            provenance=Provenance.MANUAL,
        )
        self._entries.append(metric)
        logger.info("Recorded manual %s=%s", metric_type.value, value)
        return metric

    def set_profile(self, profile: UserProfile) -> None:
        self._profile = profile

    async def get_metrics(self, period: str = "day") -> list[HealthMetric]:
        return list(self._entries)

    async def get_user_profile(self) -> UserProfile:
        return self._profile

    def is_connected(self) -> bool:
        """Connected once at least one entry exists."""
        return bool(self._entries)

    @property
    def data_source(self) -> str:
        return "manual"

    def get_provenance(self) -> dict[str, str]:
        return {
            "data_source": self.data_source,
            "data_source_note": f"Manually entered readings ({len(self._entries)} stored).",
        }
