# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for FlexSettings environment loading."""

from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pydantic
import pytest

from togglflex.config import FlexSettings

_ENV_VARS = (
    "TOGGL_FLEX_WORKSPACE_ID",
    "TOGGL_FLEX_ABSENCE_PROJECT_ID",
    "TOGGL_FLEX_ABSENCE_TASK_NAME",
    "TOGGL_FLEX_FLEX_TAG_NAME",
    "TOGGL_FLEX_TIMEZONE",
    "TOGGL_FLEX_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.mark.unit
class TestFlexSettings:
    def test_loads_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TOGGL_FLEX_WORKSPACE_ID", "42")
        monkeypatch.setenv("TOGGL_FLEX_ABSENCE_PROJECT_ID", "7")
        monkeypatch.setenv("TOGGL_FLEX_FLEX_TAG_NAME", "overtime")
        monkeypatch.setenv("TOGGL_FLEX_TIMEZONE", "Europe/Oslo")

        settings = FlexSettings()

        assert settings.workspace_id == 42
        assert settings.absence_project_id == 7
        assert settings.flex_tag_name == "overtime"
        assert settings.zone == ZoneInfo("Europe/Oslo")

    def test_defaults(self) -> None:
        settings = FlexSettings(workspace_id=1, absence_project_id=2)

        assert settings.absence_task_name == "Absence"
        assert settings.flex_tag_name == "flex"
        assert settings.api_base_url == "https://api.track.toggl.com/api/v8"
        assert settings.timeout_seconds == 30.0
        assert settings.timezone is None

    def test_workspace_is_required(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            FlexSettings(absence_project_id=2)

    def test_unknown_timezone(self) -> None:
        with pytest.raises(pydantic.ValidationError, match="unknown time zone"):
            FlexSettings(workspace_id=1, absence_project_id=2, timezone="Mars/Olympus")

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            FlexSettings(workspace_id=1, absence_project_id=2, timeout_seconds=0)

    def test_frozen(self, settings: FlexSettings) -> None:
        with pytest.raises(pydantic.ValidationError):
            settings.flex_tag_name = "other"

    def test_now_is_in_configured_zone(self, settings: FlexSettings) -> None:
        now = settings.now()

        assert now.tzinfo == ZoneInfo("UTC")
        assert abs(now - datetime.now(UTC)).total_seconds() < 60

    def test_local_zone_when_unset(self) -> None:
        settings = FlexSettings(workspace_id=1, absence_project_id=2)

        assert settings.now().utcoffset() is not None
