# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Window unit enum for relative timeslot tokens."""

from enum import Enum


class EnumWindowUnit(str, Enum):
    """Calendar unit a reconciliation window was derived from.

    Attributes:
        DAY: A single local calendar day (timeslot suffix ``d``).
        ISO_WEEK: A Monday-to-Sunday ISO week (timeslot suffix ``w``).

    Example:
        >>> EnumWindowUnit.from_suffix("w")
        <EnumWindowUnit.ISO_WEEK: 'isoWeek'>
    """

    DAY = "day"
    ISO_WEEK = "isoWeek"

    @classmethod
    def from_suffix(cls, suffix: str) -> "EnumWindowUnit | None":
        """Map a timeslot token suffix to its unit, or None if unsupported."""
        return _SUFFIXES.get(suffix)


_SUFFIXES: dict[str, EnumWindowUnit] = {
    "d": EnumWindowUnit.DAY,
    "w": EnumWindowUnit.ISO_WEEK,
}


__all__ = ["EnumWindowUnit"]
