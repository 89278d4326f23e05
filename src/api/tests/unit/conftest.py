"""Unit test fixtures with deterministic dependencies."""

from __future__ import annotations

import pytest

from activity.infrastructure import InMemoryActivityStore, InteractionBus
from infrastructure.settings import TenancySettings

# 2026-01-01T00:00:00Z in milliseconds
START_MS = 1_767_225_600_000


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now_ms: int = START_MS) -> None:
        self.current = now_ms

    def now_ms(self) -> int:
        return self.current

    def advance(self, seconds: float = 0, ms: int = 0) -> None:
        self.current += int(seconds * 1000) + ms


class RecordingNavigator:
    """Navigator that remembers every URL it was sent to."""

    def __init__(self) -> None:
        self.urls: list[str] = []

    def navigate(self, url: str) -> None:
        self.urls.append(url)


@pytest.fixture
def clock() -> FakeClock:
    """Provide a fake clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def activity_store() -> InMemoryActivityStore:
    """Provide an empty in-memory activity store."""
    return InMemoryActivityStore()


@pytest.fixture
def interaction_bus() -> InteractionBus:
    """Provide an interaction bus with no listeners."""
    return InteractionBus()


@pytest.fixture
def navigator() -> RecordingNavigator:
    """Provide a navigator that records redirects."""
    return RecordingNavigator()


@pytest.fixture
def production_tenancy() -> TenancySettings:
    """Tenancy settings for the production environment."""
    return TenancySettings(environment="production")


@pytest.fixture
def development_tenancy() -> TenancySettings:
    """Tenancy settings for local development."""
    return TenancySettings(environment="development")
