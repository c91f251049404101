"""Shared test fixtures for Amped life impact tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

_SETTINGS_ENV_VARS = (
    "AMPED_HOST",
    "AMPED_PORT",
    "AMPED_LOG_LEVEL",
    "AMPED_TRANSPORT",
    "AMPED_ALLOW_INSECURE_BIND",
    "DEFAULT_PERIOD",
    "PROFILE_AGE",
    "PROFILE_BIRTH_YEAR",
    "PROFILE_SEX",
    "PROFILE_WEIGHT_LB",
)


@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DATA_SOURCE", "mock")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from amped.domains.health.domain_logic.impact_models import Sex, UserProfile  # noqa: E402


@pytest.fixture
def male_30() -> UserProfile:
    return UserProfile(id="m30", age=30, sex=Sex.MALE)


@pytest.fixture
def female_50() -> UserProfile:
    return UserProfile(id="f50", age=50, sex=Sex.FEMALE)


@pytest.fixture
def anonymous_profile() -> UserProfile:
    """No age, no birth year, unspecified sex."""
    return UserProfile()
