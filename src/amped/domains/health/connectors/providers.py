"""Concrete HealthMetricProvider implementations."""

from __future__ import annotations

from amped.domains.health.connectors.mock_data import get_mock_metrics, get_mock_user_profile
from amped.domains.health.domain_logic.impact_models import HealthMetric, UserProfile


class MockHealthMetricProvider:
    """Uses mock data generators. Always available."""

    def __init__(self, profile: UserProfile | None = None) -> None:
        self._profile = profile or get_mock_user_profile()

    async def get_metrics(self, period: str = "day") -> list[HealthMetric]:
        return get_mock_metrics(period)

    async def get_user_profile(self) -> UserProfile:
        return self._profile

    def is_connected(self) -> bool:
        return False

    @property
    def data_source(self) -> str:
        return "mock"

    def get_provenance(self) -> dict[str, str]:
        return {
            "data_source": self.data_source,
            "data_source_note": (
                "Using simulated health readings. "
                "Connect a health data source for real measurements."
            ),
        }
