# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Time record models.

ModelTimeRecord mirrors a Toggl time entry as returned by the API. The ledger
owns these records; togglflex only reads them and proposes mutations.
ModelNewTimeRecord carries the fields sent when creating a record (split
pieces and absence records).
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

CREATED_WITH = "togglflex"


class ModelTimeRecord(BaseModel):
    """A single Toggl time entry.

    ``duration`` is negative while the entry is still running (Toggl stores
    ``-start_epoch`` for running entries); such records cannot take part in
    a reconciliation.

    Attributes:
        id: Toggl time entry id.
        start: Start instant.
        stop: Stop instant, None while running.
        duration: Duration in seconds, negative while running.
        description: Free-text description.
        tags: Tag names attached to the entry.
        wid: Workspace id.
        pid: Project id.
        tid: Task id.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    start: datetime
    stop: datetime | None = None
    duration: int
    description: str | None = None
    tags: frozenset[str] = Field(default_factory=frozenset)
    wid: int | None = None
    pid: int | None = None
    tid: int | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags_to_empty(cls, value: Any) -> Any:
        # Toggl omits or nulls the tags key on untagged entries.
        if value is None:
            return frozenset()
        return value

    @property
    def is_running(self) -> bool:
        """True while the entry has no stop time recorded."""
        return self.duration < 0

    def has_tag(self, tag: str) -> bool:
        """Return True if the entry carries the given tag name."""
        return tag in self.tags


class ModelNewTimeRecord(BaseModel):
    """Fields for a time entry to be created in Toggl.

    ``stop`` is always derived as ``start + duration`` so that the created
    entry is closed and its duration is exact.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    start: datetime
    duration: int = Field(..., gt=0, description="Duration in seconds")
    description: str | None = None
    tags: tuple[str, ...] = ()
    wid: int | None = None
    pid: int | None = None
    tid: int | None = None
    created_with: str = CREATED_WITH

    @property
    def stop(self) -> datetime:
        """Stop instant derived from start and duration."""
        return self.start + timedelta(seconds=self.duration)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the ``time_entry`` object expected by Toggl."""
        payload: dict[str, Any] = {
            "start": self.start.isoformat(),
            "stop": self.stop.isoformat(),
            "duration": self.duration,
            "created_with": self.created_with,
        }
        if self.description is not None:
            payload["description"] = self.description
        if self.tags:
            payload["tags"] = list(self.tags)
        for key in ("wid", "pid", "tid"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload


__all__ = ["CREATED_WITH", "ModelNewTimeRecord", "ModelTimeRecord"]
