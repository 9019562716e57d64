"""
Pytest configuration and fixtures for togglflex tests.

Shared fixtures: settings pinned to UTC, a fixed clock (Wednesday
2024-03-13 12:00 UTC) and a service wired to an in-memory store.
"""

from datetime import UTC, datetime

import pytest

from togglflex.config import FlexSettings
from togglflex.confirmation_store import InMemoryConfirmationStore
from togglflex.service import FlexService

# =========================================================================
# Constants
# =========================================================================

FIXED_NOW = datetime(2024, 3, 13, 12, 0, tzinfo=UTC)
WORKSPACE_ID = 1
ABSENCE_PROJECT_ID = 500
ABSENCE_TASK_ID = 77
FLEX_TAG_ID = 10


# =========================================================================
# Configuration Fixtures
# =========================================================================


@pytest.fixture
def settings() -> FlexSettings:
    """Settings for workspace 1 with window boundaries in UTC."""
    return FlexSettings(
        workspace_id=WORKSPACE_ID,
        absence_project_id=ABSENCE_PROJECT_ID,
        timezone="UTC",
    )


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


# =========================================================================
# Service Fixtures
# =========================================================================


@pytest.fixture
def store() -> InMemoryConfirmationStore:
    return InMemoryConfirmationStore()


@pytest.fixture
def service(
    store: InMemoryConfirmationStore, settings: FlexSettings, fixed_now: datetime
) -> FlexService:
    """FlexService whose clock is frozen at ``fixed_now``."""
    return FlexService(store=store, settings=settings, clock=lambda: fixed_now)
