# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Period resolution: relative tokens to an absolute window and quota.

A flex request is described by two tokens:

    <signed-integer><unit>     timeslot, unit ``d`` (day) or ``w`` (ISO week)
    <non-negative-number>h     quota in hours

Examples: ``-1w 40h`` is last week against a 40 hour quota, ``-1d 7.5h`` is
yesterday against 7.5 hours, ``0w 40h`` is the current week.

Resolution is all-or-nothing: the first violated rule raises
``ValidationError`` with a message meant to be shown to the user verbatim.
"""

from __future__ import annotations

import math
import re
import string
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta

from togglflex.enums import EnumWindowUnit
from togglflex.errors import ValidationError
from togglflex.models import ModelFlexRequest, ModelWindow

SECONDS_PER_HOUR = 3600
QUOTA_UNIT = "h"
USAGE = "Expected a timeslot and a quota, e.g. `-1w 40h` or `-1d 8h`."

_INTEGER_RE = re.compile(r"[+-]?\d+")
_NON_NEGATIVE_NUMBER_RE = re.compile(r"(\d+(\.\d*)?|\.\d+)")

_END_OF_PERIOD = timedelta(microseconds=1)


def _split_token(token: str) -> tuple[str, str]:
    stripped = token.strip()
    amount = stripped.rstrip(string.ascii_letters)
    return amount, stripped[len(amount):]


def _period_bounds(first_day: date, days: int, now: datetime) -> tuple[datetime, datetime]:
    start = datetime.combine(first_day, time.min, tzinfo=now.tzinfo)
    next_start = datetime.combine(
        first_day + timedelta(days=days), time.min, tzinfo=now.tzinfo
    )
    return start, next_start - _END_OF_PERIOD


def resolve_window(timeslot: str, *, now: datetime) -> ModelWindow:
    """Resolve a timeslot token to an absolute window around ``now``.

    Args:
        timeslot: Token such as ``-1d``, ``0w`` or ``+2w``.
        now: Reference instant; its tzinfo defines the local day boundaries.

    Returns:
        The day or ISO week containing ``now`` shifted by the token's offset.

    Raises:
        ValidationError: If the magnitude is not an integer, the unit is
            not ``d``/``w``, or the shifted period falls outside the
            representable calendar.
    """
    amount, suffix = _split_token(timeslot)
    if not _INTEGER_RE.fullmatch(amount):
        raise ValidationError(
            f"Timeslot `{timeslot}` must start with a whole number of days or "
            "weeks, e.g. `-1w`.",
            details={"token": timeslot},
        )
    unit = EnumWindowUnit.from_suffix(suffix)
    if unit is None:
        raise ValidationError(
            f"Timeslot `{timeslot}` must end with `d` (days) or `w` (weeks).",
            details={"token": timeslot},
        )

    try:
        # int() also refuses digit strings longer than the interpreter limit.
        offset = int(amount)
        if unit is EnumWindowUnit.DAY:
            day = now.date() + timedelta(days=offset)
            start, end = _period_bounds(day, 1, now)
        else:
            day = now.date() + timedelta(weeks=offset)
            monday = day - timedelta(days=day.weekday())
            start, end = _period_bounds(monday, 7, now)
    except (OverflowError, ValueError) as exc:
        raise ValidationError(
            f"Timeslot `{timeslot}` is out of range.",
            details={"token": timeslot},
        ) from exc

    return ModelWindow(start=start, end=end, unit=unit)


def resolve_quota(quota: str) -> int:
    """Resolve a quota token such as ``40h`` or ``7.5h`` to whole seconds.

    Raises:
        ValidationError: If the amount is not a non-negative number or the
            unit is not ``h``.
    """
    amount, suffix = _split_token(quota)
    if not _NON_NEGATIVE_NUMBER_RE.fullmatch(amount):
        raise ValidationError(
            f"Quota `{quota}` must be a non-negative number of hours, e.g. `40h`.",
            details={"token": quota},
        )
    hours = float(amount)
    if not math.isfinite(hours):
        raise ValidationError(
            f"Quota `{quota}` must be a finite number of hours.",
            details={"token": quota},
        )
    if suffix != QUOTA_UNIT:
        raise ValidationError(
            f"Quota `{quota}` must be given in hours, e.g. `40h`.",
            details={"token": quota},
        )
    return round(hours * SECONDS_PER_HOUR)


def resolve_flex_request(tokens: Sequence[str], *, now: datetime) -> ModelFlexRequest:
    """Resolve ``[timeslot, quota]`` into a flex request.

    Re-resolving the same tokens against the same ``now`` yields an equal
    request.

    Raises:
        ValidationError: If a token is missing, an extra token is supplied,
            or either token is malformed.
    """
    if len(tokens) != 2 or not all(token and token.strip() for token in tokens):
        raise ValidationError(USAGE, details={"tokens": list(tokens)})

    timeslot, quota = tokens
    window = resolve_window(timeslot, now=now)
    quota_seconds = resolve_quota(quota)
    return ModelFlexRequest(window=window, quota_seconds=quota_seconds)


__all__ = [
    "QUOTA_UNIT",
    "SECONDS_PER_HOUR",
    "USAGE",
    "resolve_flex_request",
    "resolve_quota",
    "resolve_window",
]
