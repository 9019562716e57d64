# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Flex application: turning a computed delta into ledger writes.

Surplus (delta > 0), greedy allocation over the records in ascending order:

    remaining = delta
    for each record, oldest first:
        remaining == 0              -> stop, later records are untouched
        duration <= remaining       -> tag as flex, remaining -= duration
        duration >  remaining       -> split and stop

A split creates a new record of ``remaining`` seconds at the original's
start, carrying its description/workspace/project/task plus the flex tag,
and shrinks the original by the same amount. Total logged time is unchanged
and only the new piece is tagged. A record whose duration equals the
remaining surplus is tagged whole, so no zero-length piece is ever created.

Deficit (delta < 0): one absence record of ``abs(delta)`` seconds against the
absence project/task, anchored at the first counted record's start (the
window start when there are none). Existing records are not modified.

Balanced (delta == 0): nothing is written.

Writes are independent requests without a transaction. A failure part way
leaves earlier writes in place; re-running converges because flex-tagged
records are excluded from the next computation.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, NamedTuple

from togglflex.models import ModelFlexResult, ModelNewTimeRecord, ModelTimeRecord

if TYPE_CHECKING:
    from togglflex.config import FlexSettings
    from togglflex.protocols import ProtocolLedgerClient

logger = logging.getLogger(__name__)


class SplitPlan(NamedTuple):
    """The single record to split and the seconds to carve off as flex."""

    record: ModelTimeRecord
    flex_seconds: int


class AllocationPlan(NamedTuple):
    """Writes needed to allocate a surplus, computed before any of them run."""

    tag_ids: tuple[int, ...]
    split: SplitPlan | None


def plan_allocation(records: Sequence[ModelTimeRecord], surplus: int) -> AllocationPlan:
    """Plan the greedy tag-or-split allocation of ``surplus`` seconds.

    Args:
        records: Candidate records in ascending chronological order.
        surplus: Positive number of seconds to allocate.

    Returns:
        Ids to bulk-tag and at most one split.
    """
    if surplus <= 0:
        raise ValueError(f"surplus must be positive, got {surplus}")

    remaining = surplus
    tag_ids: list[int] = []
    split: SplitPlan | None = None

    for record in records:
        if remaining == 0:
            break
        if record.duration <= remaining:
            tag_ids.append(record.id)
            remaining -= record.duration
        else:
            split = SplitPlan(record=record, flex_seconds=remaining)
            remaining = 0
            break

    if remaining:
        # Unreachable when surplus was derived from these records' sum.
        logger.warning("Allocation left %ds of surplus unallocated", remaining)

    return AllocationPlan(tag_ids=tuple(tag_ids), split=split)


def _flex_piece(split: SplitPlan, flex_tag: str) -> ModelNewTimeRecord:
    original = split.record
    return ModelNewTimeRecord(
        start=original.start,
        duration=split.flex_seconds,
        description=original.description,
        tags=(flex_tag,),
        wid=original.wid,
        pid=original.pid,
        tid=original.tid,
    )


async def _apply_split(
    split: SplitPlan, ledger: ProtocolLedgerClient, flex_tag: str
) -> None:
    # Both writes are issued together and both awaited before reporting.
    outcomes = await asyncio.gather(
        ledger.create_record(_flex_piece(split, flex_tag)),
        ledger.shrink_record(split.record, split.flex_seconds),
        return_exceptions=True,
    )
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            logger.warning(
                "Split of record %d partially failed: %s", split.record.id, outcome
            )
            raise outcome


async def apply_surplus(
    result: ModelFlexResult,
    ledger: ProtocolLedgerClient,
    *,
    flex_tag: str,
) -> int:
    """Tag and split records so that ``result.delta_seconds`` become flex."""
    # Fails with NotFoundError before any write if the tag is missing.
    await ledger.resolve_tag_id(flex_tag)

    plan = plan_allocation(result.records, result.delta_seconds)
    logger.info(
        "Allocating %ds of flex: tagging %d records%s",
        result.delta_seconds,
        len(plan.tag_ids),
        f", splitting record {plan.split.record.id}" if plan.split else "",
    )

    await ledger.tag_records(plan.tag_ids, flex_tag)
    if plan.split is not None:
        await _apply_split(plan.split, ledger, flex_tag)
    return result.delta_seconds


async def apply_deficit(
    result: ModelFlexResult,
    ledger: ProtocolLedgerClient,
    *,
    settings: FlexSettings,
) -> int:
    """Create one absence record covering ``abs(result.delta_seconds)``."""
    task_id = await ledger.resolve_task_id(
        settings.absence_project_id, settings.absence_task_name
    )
    anchor = result.records[0].start if result.records else result.request.window.start
    absence = ModelNewTimeRecord(
        start=anchor,
        duration=-result.delta_seconds,
        description=settings.absence_task_name,
        wid=settings.workspace_id,
        pid=settings.absence_project_id,
        tid=task_id,
    )
    await ledger.create_record(absence)
    logger.info("Logged %ds of absence at %s", absence.duration, anchor.isoformat())
    return result.delta_seconds


async def apply_flex(
    result: ModelFlexResult,
    ledger: ProtocolLedgerClient,
    *,
    settings: FlexSettings,
) -> int:
    """Apply a flex result to the ledger.

    Returns:
        The applied signed seconds: the full surplus, the (negative) deficit,
        or 0 when balanced.

    Raises:
        NotFoundError: If the flex tag or the absence task is missing.
        RemoteRequestError: If a write fails; earlier writes are kept.
    """
    if result.delta_seconds > 0:
        return await apply_surplus(result, ledger, flex_tag=settings.flex_tag_name)
    if result.delta_seconds < 0:
        return await apply_deficit(result, ledger, settings=settings)
    logger.debug("Flex balanced, nothing to apply")
    return 0


__all__ = [
    "AllocationPlan",
    "SplitPlan",
    "apply_deficit",
    "apply_flex",
    "apply_surplus",
    "plan_allocation",
]
