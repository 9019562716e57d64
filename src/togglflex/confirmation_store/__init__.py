# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Confirmation store: ephemeral per-user state between query and confirm."""

from togglflex.confirmation_store.protocols import ProtocolConfirmationStore
from togglflex.confirmation_store.repository import InMemoryConfirmationStore

__all__ = [
    "InMemoryConfirmationStore",
    "ProtocolConfirmationStore",
]
