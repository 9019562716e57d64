# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for flex allocation and absence logging.

Tests cover:
- Greedy tag-or-split planning, including the exact-fit tie-break
- Conservation of logged time across a split
- Re-computation after applying converges to zero
- Absence anchoring
- Failure behavior (missing tag/task, partially failed split)
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from togglflex.config import FlexSettings
from togglflex.errors import NotFoundError, RemoteRequestError
from togglflex.flex import SplitPlan, apply_flex, compute_flex, plan_allocation
from togglflex.period import resolve_flex_request
from togglflex.testing import MockLedger, make_record

NOW = datetime(2024, 3, 13, 12, 0, tzinfo=UTC)
WINDOW_START = datetime(2024, 3, 4, tzinfo=UTC)
MONDAY = datetime(2024, 3, 4, 8, 0, tzinfo=UTC)
TUESDAY = datetime(2024, 3, 5, 8, 0, tzinfo=UTC)
WEDNESDAY = datetime(2024, 3, 6, 8, 0, tzinfo=UTC)
HOUR = 3600


def _ledger(*hours: float, **kwargs) -> MockLedger:
    starts = [MONDAY, TUESDAY, WEDNESDAY]
    records = [
        make_record(i + 1, starts[i], hours=h, description=f"task {i + 1}", pid=9, tid=90)
        for i, h in enumerate(hours)
    ]
    return MockLedger(
        records,
        tags={"flex": 10},
        tasks={500: {"Absence": 77}},
        **kwargs,
    )


async def _compute(ledger: MockLedger, quota: str):
    request = resolve_flex_request(["-1w", quota], now=NOW)
    return await compute_flex(request, ledger, flex_tag="flex")


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestPlanAllocation:
    """Greedy allocation over ascending records."""

    def test_tags_whole_records_then_splits_one(self) -> None:
        records = [
            make_record(1, MONDAY, hours=5),
            make_record(2, TUESDAY, hours=10),
            make_record(3, WEDNESDAY, hours=27),
        ]

        plan = plan_allocation(records, 17 * HOUR)

        assert plan.tag_ids == (1, 2)
        assert plan.split == SplitPlan(record=records[2], flex_seconds=2 * HOUR)

    def test_first_record_larger_than_surplus_is_split(self) -> None:
        records = [make_record(1, MONDAY, hours=5), make_record(2, TUESDAY, hours=10)]

        plan = plan_allocation(records, 2 * HOUR)

        assert plan.tag_ids == ()
        assert plan.split is not None
        assert plan.split.record.id == 1
        assert plan.split.flex_seconds == 2 * HOUR

    def test_exact_fit_is_tagged_not_split(self) -> None:
        records = [make_record(1, MONDAY, hours=5), make_record(2, TUESDAY, hours=10)]

        plan = plan_allocation(records, 5 * HOUR)

        assert plan.tag_ids == (1,)
        assert plan.split is None

    def test_records_after_exhaustion_are_untouched(self) -> None:
        records = [
            make_record(1, MONDAY, hours=1),
            make_record(2, TUESDAY, hours=1),
            make_record(3, WEDNESDAY, hours=1),
        ]

        plan = plan_allocation(records, 2 * HOUR)

        assert plan.tag_ids == (1, 2)
        assert plan.split is None

    def test_conservation(self) -> None:
        records = [
            make_record(1, MONDAY, seconds=1234),
            make_record(2, TUESDAY, seconds=4321),
            make_record(3, WEDNESDAY, seconds=9999),
        ]
        surplus = 7000
        by_id = {r.id: r for r in records}

        plan = plan_allocation(records, surplus)

        tagged = sum(by_id[i].duration for i in plan.tag_ids)
        split = plan.split.flex_seconds if plan.split else 0
        assert tagged + split == surplus

    @pytest.mark.parametrize("surplus", [0, -1])
    def test_rejects_non_positive_surplus(self, surplus: int) -> None:
        with pytest.raises(ValueError, match="surplus must be positive"):
            plan_allocation([make_record(1, MONDAY, hours=1)], surplus)


# ---------------------------------------------------------------------------
# Surplus
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestApplySurplus:
    """Tagging and splitting against the ledger."""

    async def test_tags_two_and_splits_third(self, settings: FlexSettings) -> None:
        ledger = _ledger(5, 10, 27)
        result = await _compute(ledger, "25h")
        assert result.delta_seconds == 17 * HOUR

        applied = await apply_flex(result, ledger, settings=settings)

        assert applied == 17 * HOUR
        assert ledger.records[1].has_tag("flex")
        assert ledger.records[2].has_tag("flex")
        assert not ledger.records[3].has_tag("flex")
        assert ledger.records[3].duration == 25 * HOUR

        [piece_id] = ledger.created_ids
        piece = ledger.records[piece_id]
        assert piece.duration == 2 * HOUR
        assert piece.start == WEDNESDAY
        assert piece.tags == frozenset({"flex"})
        assert piece.description == "task 3"
        assert (piece.wid, piece.pid, piece.tid) == (1, 9, 90)

    async def test_two_hour_surplus_splits_first_record(
        self, settings: FlexSettings
    ) -> None:
        ledger = _ledger(5, 10, 27)
        result = await _compute(ledger, "40h")
        assert result.delta_seconds == 7200

        await apply_flex(result, ledger, settings=settings)

        assert ledger.records[1].duration == 3 * HOUR
        assert ledger.records[2].duration == 10 * HOUR
        assert ledger.records[3].duration == 27 * HOUR
        assert not any(ledger.records[i].has_tag("flex") for i in (1, 2, 3))
        [piece_id] = ledger.created_ids
        assert ledger.records[piece_id].duration == 2 * HOUR
        assert ledger.records[piece_id].start == MONDAY

    async def test_split_preserves_total_logged_time(
        self, settings: FlexSettings
    ) -> None:
        ledger = _ledger(5, 10, 27)
        before = sum(r.duration for r in ledger.records.values())

        await apply_flex(await _compute(ledger, "40h"), ledger, settings=settings)

        assert sum(r.duration for r in ledger.records.values()) == before

    @pytest.mark.parametrize("quota", ["25h", "40h", "37h", "41.5h"])
    async def test_recomputation_after_apply_is_balanced(
        self, settings: FlexSettings, quota: str
    ) -> None:
        ledger = _ledger(5, 10, 27)

        await apply_flex(await _compute(ledger, quota), ledger, settings=settings)

        assert (await _compute(ledger, quota)).delta_seconds == 0

    async def test_exact_fit_creates_no_split(self, settings: FlexSettings) -> None:
        ledger = _ledger(5, 10, 27)

        await apply_flex(await _compute(ledger, "37h"), ledger, settings=settings)

        assert ledger.created_ids == []
        assert "shrink_record" not in ledger.calls
        assert ledger.records[1].has_tag("flex")

    async def test_missing_flex_tag_fails_before_writing(
        self, settings: FlexSettings
    ) -> None:
        ledger = _ledger(5, 10, 27)
        ledger.tags.clear()
        result = await _compute(ledger, "25h")

        with pytest.raises(NotFoundError, match="Tag `flex`"):
            await apply_flex(result, ledger, settings=settings)

        assert "tag_records" not in ledger.calls
        assert ledger.created_ids == []

    async def test_failed_shrink_keeps_created_piece(
        self, settings: FlexSettings
    ) -> None:
        ledger = _ledger(5, 10, 27, fail_on=["shrink_record"])
        result = await _compute(ledger, "25h")

        with pytest.raises(RemoteRequestError):
            await apply_flex(result, ledger, settings=settings)

        # Both writes were issued; earlier tagging is not rolled back.
        assert "create_record" in ledger.calls
        assert len(ledger.created_ids) == 1
        assert ledger.records[1].has_tag("flex")
        assert ledger.records[3].duration == 27 * HOUR


# ---------------------------------------------------------------------------
# Deficit and balanced
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestApplyDeficit:
    """Absence logging."""

    async def test_creates_one_absence_record_at_first_start(
        self, settings: FlexSettings
    ) -> None:
        ledger = _ledger(15, 20)
        result = await _compute(ledger, "40h")
        assert result.delta_seconds == -18_000

        applied = await apply_flex(result, ledger, settings=settings)

        assert applied == -18_000
        [absence_id] = ledger.created_ids
        absence = ledger.records[absence_id]
        assert absence.duration == 5 * HOUR
        assert absence.start == MONDAY
        assert absence.description == "Absence"
        assert (absence.wid, absence.pid, absence.tid) == (1, 500, 77)
        assert absence.tags == frozenset()

    async def test_existing_records_are_not_modified(
        self, settings: FlexSettings
    ) -> None:
        ledger = _ledger(15, 20)
        before = {1: ledger.records[1], 2: ledger.records[2]}

        await apply_flex(await _compute(ledger, "40h"), ledger, settings=settings)

        assert ledger.records[1] == before[1]
        assert ledger.records[2] == before[2]

    async def test_empty_window_anchors_at_window_start(
        self, settings: FlexSettings
    ) -> None:
        ledger = _ledger()

        await apply_flex(await _compute(ledger, "8h"), ledger, settings=settings)

        [absence_id] = ledger.created_ids
        assert ledger.records[absence_id].start == WINDOW_START
        assert ledger.records[absence_id].duration == 8 * HOUR

    async def test_recomputation_after_absence_is_balanced(
        self, settings: FlexSettings
    ) -> None:
        ledger = _ledger(15, 20)

        await apply_flex(await _compute(ledger, "40h"), ledger, settings=settings)

        assert (await _compute(ledger, "40h")).delta_seconds == 0

    async def test_missing_absence_task(self, settings: FlexSettings) -> None:
        ledger = _ledger(15, 20)
        ledger.tasks.clear()

        with pytest.raises(NotFoundError, match="Task `Absence`"):
            await apply_flex(await _compute(ledger, "40h"), ledger, settings=settings)

        assert ledger.created_ids == []


@pytest.mark.unit
async def test_balanced_result_writes_nothing(settings: FlexSettings) -> None:
    ledger = _ledger(15, 25)
    result = await _compute(ledger, "40h")
    ledger.calls.clear()

    assert await apply_flex(result, ledger, settings=settings) == 0
    assert ledger.calls == []
