# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Flex reconciliation settings loaded from the environment.

Environment variables (prefix ``TOGGL_FLEX_``):
    TOGGL_FLEX_WORKSPACE_ID: int (required)
    TOGGL_FLEX_ABSENCE_PROJECT_ID: int (required)
    TOGGL_FLEX_ABSENCE_TASK_NAME: str (default "Absence")
    TOGGL_FLEX_FLEX_TAG_NAME: str (default "flex")
    TOGGL_FLEX_API_BASE_URL: str
    TOGGL_FLEX_REPORTS_BASE_URL: str
    TOGGL_FLEX_TIMEOUT_SECONDS: float (default 30.0)
    TOGGL_FLEX_USER_AGENT: str (default "togglflex")
    TOGGL_FLEX_TIMEZONE: IANA zone name (default: system local zone)
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://api.track.toggl.com/api/v8"
DEFAULT_REPORTS_BASE_URL = "https://api.track.toggl.com/reports/api/v2"


class FlexSettings(BaseSettings):
    """Workspace constants and transport settings for flex reconciliation.

    The ids and names are opaque lookups: togglflex never creates the flex
    tag or the absence task, it only resolves them.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOGGL_FLEX_",
        extra="ignore",
        frozen=True,
    )

    workspace_id: int = Field(..., description="Toggl workspace id")
    absence_project_id: int = Field(
        ..., description="Project that absence records are logged against"
    )
    absence_task_name: str = Field(
        default="Absence",
        min_length=1,
        description="Display name of the absence task inside the absence project",
    )
    flex_tag_name: str = Field(
        default="flex",
        min_length=1,
        description="Reserved tag marking records as compensable flex time",
    )
    api_base_url: str = Field(default=DEFAULT_API_BASE_URL)
    reports_base_url: str = Field(default=DEFAULT_REPORTS_BASE_URL)
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    user_agent: str = Field(default="togglflex", min_length=1)
    timezone: str | None = Field(
        default=None,
        description="IANA time zone for window boundaries; system local if unset",
    )

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown time zone: {value!r}") from exc
        return value

    @property
    def zone(self) -> tzinfo:
        """Zone used for day and week boundaries."""
        if self.timezone is None:
            local = datetime.now().astimezone().tzinfo
            assert local is not None
            return local
        return ZoneInfo(self.timezone)

    def now(self) -> datetime:
        """Current instant in the configured zone."""
        return datetime.now(self.zone)


__all__ = ["DEFAULT_API_BASE_URL", "DEFAULT_REPORTS_BASE_URL", "FlexSettings"]
