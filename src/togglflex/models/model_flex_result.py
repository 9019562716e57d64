# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Flex computation results and user-facing outcomes."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from togglflex.enums import EnumFlexOutcome
from togglflex.models.model_time_record import ModelTimeRecord
from togglflex.models.model_window import ModelFlexRequest


class ModelFlexResult(BaseModel):
    """Logged time versus quota for one request.

    Attributes:
        request: The request the result was computed from.
        records: Records counted, ascending by start, flex-tagged ones removed.
        delta_seconds: ``logged - quota``; positive is surplus (flex),
            negative is deficit (absence), zero is balanced.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    request: ModelFlexRequest
    records: tuple[ModelTimeRecord, ...] = ()
    delta_seconds: int

    @property
    def logged_seconds(self) -> int:
        return sum(record.duration for record in self.records)

    @property
    def is_balanced(self) -> bool:
        return self.delta_seconds == 0


class ModelPendingConfirmation(BaseModel):
    """A computed-but-unapplied flex result awaiting the user's confirmation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    user_id: str
    request: ModelFlexRequest
    delta_seconds: int
    created_at: datetime


class ModelConfirmationOutcome(BaseModel):
    """Result of a confirm or apply interaction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: EnumFlexOutcome
    applied_seconds: int = 0
    result: ModelFlexResult | None = None


class ModelFlexBalance(BaseModel):
    """Year-to-date flex balance: earned flex minus used absence."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    since: date
    until: date
    earned_seconds: int = Field(..., ge=0)
    used_seconds: int = Field(..., ge=0)

    @property
    def balance_seconds(self) -> int:
        return self.earned_seconds - self.used_seconds


__all__ = [
    "ModelConfirmationOutcome",
    "ModelFlexBalance",
    "ModelFlexResult",
    "ModelPendingConfirmation",
]
