# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""In-memory confirmation store.

Pending confirmations live in a plain dict with no expiry and are lost on
restart. An entry is removed only by the owning user's own interactions
(confirm, or anything else, which cancels).

Concurrency:
    Safe under a single asyncio event loop because no method awaits. Not
    thread-safe.
"""

from __future__ import annotations

import logging

from togglflex.models import ModelPendingConfirmation

logger = logging.getLogger(__name__)


class InMemoryConfirmationStore:
    """Dict-backed ``ProtocolConfirmationStore`` keyed by user id."""

    def __init__(self) -> None:
        # user_id -> ModelPendingConfirmation
        self._pending: dict[str, ModelPendingConfirmation] = {}

    def put(self, pending: ModelPendingConfirmation) -> ModelPendingConfirmation | None:
        replaced = self._pending.get(pending.user_id)
        self._pending[pending.user_id] = pending
        logger.debug(
            "Pending confirmation stored. user_id=%s delta=%ds replaced=%s",
            pending.user_id,
            pending.delta_seconds,
            replaced is not None,
        )
        return replaced

    def get(self, user_id: str) -> ModelPendingConfirmation | None:
        return self._pending.get(user_id)

    def pop(self, user_id: str) -> ModelPendingConfirmation | None:
        pending = self._pending.pop(user_id, None)
        if pending is not None:
            logger.debug("Pending confirmation taken. user_id=%s", user_id)
        return pending

    def discard(self, user_id: str) -> bool:
        return self.pop(user_id) is not None

    def count(self) -> int:
        return len(self._pending)


__all__ = ["InMemoryConfirmationStore"]
