# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Flex calculation: logged seconds versus quota over a window.

Records that already carry the flex tag are left out of the sum. They were
allocated by an earlier pass, and counting them again would turn the same
surplus into flex twice when windows overlap or a reconciliation is re-run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from togglflex.models import ModelFlexRequest, ModelFlexResult

if TYPE_CHECKING:
    from togglflex.protocols import ProtocolLedgerClient

logger = logging.getLogger(__name__)


async def compute_flex(
    request: ModelFlexRequest,
    ledger: ProtocolLedgerClient,
    *,
    flex_tag: str,
) -> ModelFlexResult:
    """Compute the signed flex delta for ``request``.

    Args:
        request: Window and quota to reconcile.
        ledger: The user's ledger.
        flex_tag: Name of the reserved flex tag.

    Returns:
        Result with the counted records (ascending) and
        ``delta_seconds = logged - quota``.

    Raises:
        OpenTimerError: If a record in the window is still running.
        RemoteRequestError: If the ledger cannot be read.
    """
    fetched = await ledger.fetch_records(request.window)
    records = tuple(record for record in fetched if not record.has_tag(flex_tag))

    logged = sum(record.duration for record in records)
    delta = logged - request.quota_seconds

    logger.debug(
        "Flex computed: %d records (%d already flex), logged=%ds quota=%ds delta=%ds",
        len(records),
        len(fetched) - len(records),
        logged,
        request.quota_seconds,
        delta,
    )
    return ModelFlexResult(request=request, records=records, delta_seconds=delta)


__all__ = ["compute_flex"]
