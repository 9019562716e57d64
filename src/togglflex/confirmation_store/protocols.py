# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Protocol definitions for confirmation store dependency injection.

The flex service depends on ``ProtocolConfirmationStore`` rather than the
in-memory implementation, so a test double or a networked store can be
swapped in.

All methods are synchronous. ``pop`` in particular must read and clear in
one step with no suspension point, which is what keeps two confirmations
racing from the same user from both applying.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from togglflex.models import ModelPendingConfirmation


@runtime_checkable
class ProtocolConfirmationStore(Protocol):
    """Keyed store of at most one pending confirmation per user.

    Implementations must provide:
    - ``put``: Store, replacing any previous entry for the user.
    - ``get``: Read without clearing.
    - ``pop``: Read and clear atomically.
    - ``discard``: Clear unconditionally.
    - ``count``: Number of users with a pending entry.
    """

    def put(self, pending: ModelPendingConfirmation) -> ModelPendingConfirmation | None:
        """Store ``pending`` for its user.

        Returns:
            The replaced entry, or None.
        """
        ...

    def get(self, user_id: str) -> ModelPendingConfirmation | None:
        """Return the user's pending entry without clearing it."""
        ...

    def pop(self, user_id: str) -> ModelPendingConfirmation | None:
        """Return and clear the user's pending entry."""
        ...

    def discard(self, user_id: str) -> bool:
        """Clear the user's pending entry.

        Returns:
            True if an entry was cleared.
        """
        ...

    def count(self) -> int:
        """Return the number of users with a pending entry."""
        ...


__all__ = ["ProtocolConfirmationStore"]
