# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""togglflex - flex time reconciliation against Toggl.

Reconciles logged work time against a quota for a relative window and turns
the surplus or deficit into ledger writes: flex tags, one split record, or
one absence record.

Quick Start:
    >>> from togglflex import FlexService, InMemoryConfirmationStore, LedgerClient
    >>> service = FlexService(store=InMemoryConfirmationStore(), settings=settings)
    >>> ledger = LedgerClient(toggl_client, token, settings)
    >>> result = await service.query("U123", ledger, ["-1w", "40h"])
    >>> result.delta_seconds
    7200
    >>> outcome = await service.confirm("U123", ledger)
"""

from togglflex.config import FlexSettings
from togglflex.confirmation_store import InMemoryConfirmationStore
from togglflex.errors import (
    ConfirmationMismatchError,
    FlexError,
    NoAccountError,
    NotFoundError,
    OpenTimerError,
    RemoteRequestError,
    ValidationError,
)
from togglflex.flex import apply_flex, compute_flex
from togglflex.ledger import LedgerClient
from togglflex.period import resolve_flex_request
from togglflex.service import FlexService

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "FlexSettings",
    # Engine
    "FlexService",
    "InMemoryConfirmationStore",
    "LedgerClient",
    "apply_flex",
    "compute_flex",
    "resolve_flex_request",
    # Exceptions
    "ConfirmationMismatchError",
    "FlexError",
    "NoAccountError",
    "NotFoundError",
    "OpenTimerError",
    "RemoteRequestError",
    "ValidationError",
]
