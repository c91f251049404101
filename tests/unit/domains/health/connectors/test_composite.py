"""Tests for the CompositeHealthMetricProvider."""

from __future__ import annotations

import asyncio

import pytest

from amped.domains.health.connectors import HealthMetricProvider
from amped.domains.health.connectors.composite import CompositeHealthMetricProvider
from amped.domains.health.connectors.manual_entry import ManualEntryProvider
from amped.domains.health.connectors.providers import MockHealthMetricProvider
from amped.domains.health.domain_logic.impact_models import (
    MetricType,
    Provenance,
    Sex,
    UserProfile,
)


def _run(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


class EmptyProvider:
    """Provider that returns no readings."""

    async def get_metrics(self, period="day"):
        return []

    async def get_user_profile(self):
        return UserProfile(id="empty")

    def is_connected(self):
        return True

    @property
    def data_source(self):
        return "empty"

    def get_provenance(self):
        return {"data_source": "empty"}


class TestPriorityOrdering:
    def test_falls_through_to_provider_with_data(self):
        composite = CompositeHealthMetricProvider([EmptyProvider(), MockHealthMetricProvider()])
        metrics = _run(composite.get_metrics())
        assert {m.type for m in metrics} == set(MetricType)

    def test_manual_reading_overrides_mock_for_same_type(self):
        manual = ManualEntryProvider()
        manual.record(MetricType.STRESS_LEVEL, 9)
        composite = CompositeHealthMetricProvider([manual, MockHealthMetricProvider()])

        metrics = _run(composite.get_metrics())
        stress = [m for m in metrics if m.type is MetricType.STRESS_LEVEL]
        assert len(stress) == 1
        assert stress[0].value == 9
        assert stress[0].provenance is Provenance.MANUAL

    def test_other_types_still_come_from_fallback(self):
        manual = ManualEntryProvider()
        manual.record(MetricType.STRESS_LEVEL, 9)
        composite = CompositeHealthMetricProvider([manual, MockHealthMetricProvider()])

        types = {m.type for m in _run(composite.get_metrics())}
        assert MetricType.STEPS in types

    def test_duplicates_within_one_provider_kept(self):
        composite = CompositeHealthMetricProvider([MockHealthMetricProvider()])
        steps = [m for m in _run(composite.get_metrics()) if m.type is MetricType.STEPS]
        assert len(steps) == 2


class TestProfileAndStatus:
    def test_profile_from_highest_priority(self):
        manual = ManualEntryProvider(UserProfile(id="me", age=52, sex=Sex.FEMALE))
        composite = CompositeHealthMetricProvider([manual, MockHealthMetricProvider()])
        assert _run(composite.get_user_profile()).id == "me"

    def test_data_source_first_connected(self):
        manual = ManualEntryProvider()
        composite = CompositeHealthMetricProvider([manual, MockHealthMetricProvider()])
        assert composite.data_source == "mock"
        assert not composite.is_connected()

        manual.record(MetricType.SLEEP_HOURS, 7)
        assert composite.data_source == "manual"
        assert composite.is_connected()

    def test_provenance_lists_priority(self):
        composite = CompositeHealthMetricProvider([ManualEntryProvider(), MockHealthMetricProvider()])
        provenance = composite.get_provenance()
        assert "manual > mock" in provenance["data_source_note"]
        assert provenance["active_sources"] == "none"

    def test_requires_a_provider(self):
        with pytest.raises(ValueError):
            CompositeHealthMetricProvider([])

    def test_satisfies_protocol(self):
        assert isinstance(CompositeHealthMetricProvider([EmptyProvider()]), HealthMetricProvider)
