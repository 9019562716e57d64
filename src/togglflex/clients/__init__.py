# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""HTTP clients for togglflex.

Transport libraries (httpx) are imported only here; the flex engine depends
on ``ProtocolLedgerClient`` and receives clients via dependency injection.
"""

from __future__ import annotations

from togglflex.clients.client_toggl import INVALID_RESPONSE_MESSAGE, TogglClient

__all__ = ["INVALID_RESPONSE_MESSAGE", "TogglClient"]
