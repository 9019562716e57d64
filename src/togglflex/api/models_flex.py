"""Request and response models for the flex HTTP surface."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from togglflex.enums import EnumFlexOutcome, EnumWindowUnit
from togglflex.models import ModelConfirmationOutcome, ModelFlexBalance, ModelFlexResult


class ModelFlexCommand(BaseModel):
    """Timeslot and quota tokens as typed by the user, e.g. ``-1w`` / ``40h``."""

    model_config = ConfigDict(extra="forbid")

    timeslot: str = Field(..., max_length=32, examples=["-1w"])
    quota: str = Field(..., max_length=32, examples=["40h"])

    @property
    def tokens(self) -> list[str]:
        return [self.timeslot, self.quota]


class ModelFlexResultResponse(BaseModel):
    """Summary of a computed flex result."""

    window_start: datetime
    window_end: datetime
    unit: EnumWindowUnit
    quota_seconds: int
    logged_seconds: int
    delta_seconds: int
    record_count: int
    awaiting_confirmation: bool = False

    @classmethod
    def from_result(
        cls, result: ModelFlexResult, *, awaiting_confirmation: bool = False
    ) -> ModelFlexResultResponse:
        window = result.request.window
        return cls(
            window_start=window.start,
            window_end=window.end,
            unit=window.unit,
            quota_seconds=result.request.quota_seconds,
            logged_seconds=result.logged_seconds,
            delta_seconds=result.delta_seconds,
            record_count=len(result.records),
            awaiting_confirmation=awaiting_confirmation,
        )


class ModelFlexOutcomeResponse(BaseModel):
    """Outcome of an apply or confirm intent."""

    status: EnumFlexOutcome
    applied_seconds: int = 0
    result: ModelFlexResultResponse | None = None

    @classmethod
    def from_outcome(cls, outcome: ModelConfirmationOutcome) -> ModelFlexOutcomeResponse:
        return cls(
            status=outcome.status,
            applied_seconds=outcome.applied_seconds,
            result=(
                ModelFlexResultResponse.from_result(outcome.result)
                if outcome.result is not None
                else None
            ),
        )


class ModelCancelResponse(BaseModel):
    status: EnumFlexOutcome
    cancelled: bool


class ModelFlexBalanceResponse(BaseModel):
    """Year-to-date flex balance in seconds."""

    since: date
    until: date
    earned_seconds: int
    used_seconds: int
    balance_seconds: int

    @classmethod
    def from_balance(cls, balance: ModelFlexBalance) -> ModelFlexBalanceResponse:
        return cls(
            since=balance.since,
            until=balance.until,
            earned_seconds=balance.earned_seconds,
            used_seconds=balance.used_seconds,
            balance_seconds=balance.balance_seconds,
        )


class ModelStartTimerCommand(BaseModel):
    model_config = ConfigDict(extra="forbid")

    description: str | None = Field(default=None, max_length=3000)


__all__ = [
    "ModelCancelResponse",
    "ModelFlexBalanceResponse",
    "ModelFlexCommand",
    "ModelFlexOutcomeResponse",
    "ModelFlexResultResponse",
    "ModelStartTimerCommand",
]
