# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Per-user confirmation state machine enums.

A user is either idle or awaiting confirmation of a previously computed flex
result. Every transition out of AWAITING_CONFIRMATION ends in IDLE, with the
reason recorded as an EnumFlexOutcome:

    IDLE --query(delta != 0)--> AWAITING_CONFIRMATION
    AWAITING_CONFIRMATION --confirm(delta unchanged)--> IDLE  (applied)
    AWAITING_CONFIRMATION --confirm(delta changed)----> IDLE  (rejected)
    AWAITING_CONFIRMATION --any other input-----------> IDLE  (cancelled)
"""

from enum import Enum


class EnumConfirmationState(str, Enum):
    """Confirmation state of a single user."""

    IDLE = "idle"
    AWAITING_CONFIRMATION = "awaiting_confirmation"


class EnumFlexOutcome(str, Enum):
    """How a flex interaction ended.

    Attributes:
        APPLIED: The surplus or deficit was written to the ledger.
        BALANCED: Logged time matched the quota, nothing to write.
        NOTHING_PENDING: A confirm or cancel arrived with nothing pending.
        CANCELLED: A pending result was discarded by another interaction.
    """

    APPLIED = "applied"
    BALANCED = "balanced"
    NOTHING_PENDING = "nothing_pending"
    CANCELLED = "cancelled"


__all__ = ["EnumConfirmationState", "EnumFlexOutcome"]
