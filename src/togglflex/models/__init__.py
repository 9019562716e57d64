# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pydantic models shared across togglflex components."""

from togglflex.models.model_flex_result import (
    ModelConfirmationOutcome,
    ModelFlexBalance,
    ModelFlexResult,
    ModelPendingConfirmation,
)
from togglflex.models.model_time_record import (
    CREATED_WITH,
    ModelNewTimeRecord,
    ModelTimeRecord,
)
from togglflex.models.model_toggl_account import ModelTogglProject, ModelTogglUser
from togglflex.models.model_window import ModelFlexRequest, ModelWindow

__all__ = [
    "CREATED_WITH",
    "ModelConfirmationOutcome",
    "ModelFlexBalance",
    "ModelFlexRequest",
    "ModelFlexResult",
    "ModelNewTimeRecord",
    "ModelPendingConfirmation",
    "ModelTimeRecord",
    "ModelTogglProject",
    "ModelTogglUser",
    "ModelWindow",
]
