# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Testing utilities for togglflex.

Mock implementations of the ledger protocols, importable from the test suite
and from downstream projects that embed the flex engine.

Modules:
    mock_ledger: In-memory ledger implementing the ledger and timer protocols
"""

from togglflex.testing.mock_ledger import MockLedger, make_record

__all__ = ["MockLedger", "make_record"]
