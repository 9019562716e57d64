# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Ledger access: the user-bound Toggl client used by the flex engine."""

from togglflex.ledger.ledger_client import LedgerClient

__all__ = ["LedgerClient"]
