# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Reconciliation window and flex request models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from togglflex.enums import EnumWindowUnit


class ModelWindow(BaseModel):
    """Absolute time range covered by one reconciliation pass.

    ``end`` is the last instant of the period (inclusive), i.e. one
    microsecond before the next period starts.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    start: datetime
    end: datetime
    unit: EnumWindowUnit

    @model_validator(mode="after")
    def _check_order(self) -> ModelWindow:
        if self.end < self.start:
            raise ValueError("window end must not precede window start")
        return self


class ModelFlexRequest(BaseModel):
    """A window plus the expected quota of worked seconds inside it.

    Re-deriving a request from the same tokens at the same instant yields an
    equal value, which is what the confirmation step relies on.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    window: ModelWindow
    quota_seconds: int = Field(..., ge=0, description="Expected worked seconds")


__all__ = ["ModelFlexRequest", "ModelWindow"]
