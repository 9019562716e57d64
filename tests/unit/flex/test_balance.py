# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for the year-to-date flex balance."""

from __future__ import annotations

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

import pytest

from togglflex.config import FlexSettings
from togglflex.errors import NotFoundError
from togglflex.flex import compute_balance
from togglflex.testing import MockLedger, make_record

TODAY = date(2024, 3, 13)


@pytest.mark.unit
class TestComputeBalance:
    """Earned flex minus used absence since January 1st."""

    async def test_balance_from_ledger(self, settings: FlexSettings) -> None:
        ledger = MockLedger(
            [
                make_record(1, datetime(2024, 1, 8, 9, tzinfo=UTC), hours=3, tags=["flex"]),
                make_record(2, datetime(2024, 2, 5, 9, tzinfo=UTC), hours=1, tags=["flex"]),
                make_record(3, datetime(2024, 2, 6, 9, tzinfo=UTC), hours=1.5, pid=500, tid=77),
                make_record(4, datetime(2024, 2, 7, 9, tzinfo=UTC), hours=8),
                # Last year's flex does not count.
                make_record(5, datetime(2023, 12, 29, 9, tzinfo=UTC), hours=6, tags=["flex"]),
            ],
            tags={"flex": 10},
            tasks={500: {"Absence": 77}},
        )

        balance = await compute_balance(ledger, settings=settings, today=TODAY)

        assert balance.since == date(2024, 1, 1)
        assert balance.until == TODAY
        assert balance.earned_seconds == 4 * 3600
        assert balance.used_seconds == 5400
        assert balance.balance_seconds == 4 * 3600 - 5400

    async def test_milliseconds_are_floored(self, settings: FlexSettings) -> None:
        ledger = AsyncMock()
        ledger.resolve_tag_id.return_value = 10
        ledger.resolve_task_id.return_value = 77
        ledger.report_summary.side_effect = [5_400_999, 1_800_000]

        balance = await compute_balance(ledger, settings=settings, today=TODAY)

        assert balance.earned_seconds == 5400
        assert balance.used_seconds == 1800

    async def test_report_filters(self, settings: FlexSettings) -> None:
        ledger = AsyncMock()
        ledger.resolve_tag_id.return_value = 10
        ledger.resolve_task_id.return_value = 77
        ledger.report_summary.return_value = 0

        await compute_balance(ledger, settings=settings, today=TODAY)

        ledger.resolve_task_id.assert_awaited_once_with(500, "Absence")
        earned_call, used_call = ledger.report_summary.call_args_list
        assert earned_call.args == (date(2024, 1, 1), TODAY)
        assert earned_call.kwargs == {"tag_ids": [10]}
        assert used_call.kwargs == {"project_ids": [500], "task_ids": [77]}

    async def test_negative_balance(self, settings: FlexSettings) -> None:
        ledger = MockLedger(
            [make_record(1, datetime(2024, 2, 6, 9, tzinfo=UTC), hours=2, pid=500, tid=77)],
            tags={"flex": 10},
            tasks={500: {"Absence": 77}},
        )

        balance = await compute_balance(ledger, settings=settings, today=TODAY)

        assert balance.balance_seconds == -7200

    async def test_missing_flex_tag(self, settings: FlexSettings) -> None:
        ledger = MockLedger(tasks={500: {"Absence": 77}})

        with pytest.raises(NotFoundError):
            await compute_balance(ledger, settings=settings, today=TODAY)
