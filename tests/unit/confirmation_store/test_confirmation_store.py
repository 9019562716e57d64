# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for InMemoryConfirmationStore.

Tests storage, replacement, atomic pop, discard and protocol conformance.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from togglflex.confirmation_store import (
    InMemoryConfirmationStore,
    ProtocolConfirmationStore,
)
from togglflex.models import ModelPendingConfirmation
from togglflex.period import resolve_flex_request

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_pending(
    user_id: str = "U123",
    delta_seconds: int = 3600,
) -> ModelPendingConfirmation:
    """Build a pending confirmation for last week against 40h."""
    now = datetime(2024, 3, 13, 12, 0, tzinfo=UTC)
    return ModelPendingConfirmation(
        user_id=user_id,
        request=resolve_flex_request(["-1w", "40h"], now=now),
        delta_seconds=delta_seconds,
        created_at=now,
    )


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestInMemoryConfirmationStore:
    """Keyed per-user pending state."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryConfirmationStore(), ProtocolConfirmationStore)

    def test_put_then_get(self) -> None:
        store = InMemoryConfirmationStore()
        pending = _make_pending()

        assert store.put(pending) is None
        assert store.get("U123") == pending
        # get does not clear
        assert store.get("U123") == pending
        assert store.count() == 1

    def test_put_replaces_and_returns_previous(self) -> None:
        store = InMemoryConfirmationStore()
        first = _make_pending(delta_seconds=3600)
        second = _make_pending(delta_seconds=-1800)

        store.put(first)
        replaced = store.put(second)

        assert replaced == first
        assert store.get("U123") == second
        assert store.count() == 1

    def test_pop_clears(self) -> None:
        store = InMemoryConfirmationStore()
        pending = _make_pending()
        store.put(pending)

        assert store.pop("U123") == pending
        assert store.pop("U123") is None
        assert store.get("U123") is None

    def test_discard(self) -> None:
        store = InMemoryConfirmationStore()
        store.put(_make_pending())

        assert store.discard("U123") is True
        assert store.discard("U123") is False
        assert store.count() == 0

    def test_users_are_independent(self) -> None:
        store = InMemoryConfirmationStore()
        store.put(_make_pending("U1"))
        store.put(_make_pending("U2", delta_seconds=60))

        store.discard("U1")

        assert store.get("U1") is None
        assert store.get("U2") is not None
        assert store.get("U2").delta_seconds == 60

    def test_unknown_user(self) -> None:
        store = InMemoryConfirmationStore()

        assert store.get("nobody") is None
        assert store.pop("nobody") is None
        assert store.count() == 0
