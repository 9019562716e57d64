# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Year-to-date flex balance.

Earned flex is the tracked time carrying the flex tag; used flex is the time
logged against the absence task. Both come from the reports summary
aggregate, so the balance reflects the ledger as it is now, including
records edited by hand.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from togglflex.models import ModelFlexBalance

if TYPE_CHECKING:
    from togglflex.config import FlexSettings
    from togglflex.protocols import ProtocolLedgerClient

logger = logging.getLogger(__name__)

_MS_PER_SECOND = 1000


async def compute_balance(
    ledger: ProtocolLedgerClient,
    *,
    settings: FlexSettings,
    today: date,
) -> ModelFlexBalance:
    """Compute earned and used flex from January 1st of ``today``'s year.

    Raises:
        NotFoundError: If the flex tag or the absence task is missing.
        RemoteRequestError: If the reports API fails.
    """
    since = date(today.year, 1, 1)
    tag_id = await ledger.resolve_tag_id(settings.flex_tag_name)
    task_id = await ledger.resolve_task_id(
        settings.absence_project_id, settings.absence_task_name
    )

    earned_ms = await ledger.report_summary(since, today, tag_ids=[tag_id])
    used_ms = await ledger.report_summary(
        since,
        today,
        project_ids=[settings.absence_project_id],
        task_ids=[task_id],
    )

    balance = ModelFlexBalance(
        since=since,
        until=today,
        earned_seconds=earned_ms // _MS_PER_SECOND,
        used_seconds=used_ms // _MS_PER_SECOND,
    )
    logger.debug(
        "Flex balance %s..%s: earned=%ds used=%ds",
        since,
        today,
        balance.earned_seconds,
        balance.used_seconds,
    )
    return balance


__all__ = ["compute_balance"]
