# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Toggl account-level models: the authenticated user and projects."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ModelTogglUser(BaseModel):
    """Profile of the user owning an API token (``GET /me``)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    fullname: str | None = None
    email: str | None = None
    default_wid: int | None = None


class ModelTogglProject(BaseModel):
    """A workspace project; ``at`` is the last modification time."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    at: datetime | None = None
    wid: int | None = None


__all__ = ["ModelTogglProject", "ModelTogglUser"]
