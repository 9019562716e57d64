# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Toggl-backed ledger client for a single user.

Wraps ``TogglClient`` with the domain contract the flex engine relies on:

- records come back in ascending chronological order (Toggl delivers them
  most-recent-first),
- an open timer anywhere in the window aborts the fetch,
- tag and task lookups fail with ``NotFoundError`` rather than returning
  nothing, since tagging and absence logging cannot proceed without them.
- a 200 response whose body does not have the expected shape is reported
  as ``RemoteRequestError``, like any other failed request.

The client is cheap to build: the front end creates one per interaction
from the user's stored token and the shared ``TogglClient``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, date, datetime, timedelta
from typing import Any, TypeVar

import pydantic

from togglflex.clients import INVALID_RESPONSE_MESSAGE, TogglClient
from togglflex.config import FlexSettings
from togglflex.errors import (
    NoAccountError,
    NotFoundError,
    OpenTimerError,
    RemoteRequestError,
)
from togglflex.models import (
    CREATED_WITH,
    ModelNewTimeRecord,
    ModelTimeRecord,
    ModelTogglProject,
    ModelTogglUser,
    ModelWindow,
)

logger = logging.getLogger(__name__)

_TAG_ACTION_ADD = "add"

_ModelT = TypeVar("_ModelT", bound=pydantic.BaseModel)


def _ids_param(ids: Sequence[int]) -> str:
    return ",".join(str(i) for i in ids)


def _data(body: Any) -> Any:
    # Toggl v8 wraps single objects in {"data": ...}; lists come bare.
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


def _parse(model: type[_ModelT], payload: Any) -> _ModelT:
    """Validate one Toggl object, treating a malformed payload as a remote failure."""
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        logger.warning(
            "Toggl returned a malformed %s: %d validation errors",
            model.__name__,
            exc.error_count(),
        )
        raise RemoteRequestError(INVALID_RESPONSE_MESSAGE, remote_status=200) from exc


def _items(body: Any) -> list[Any]:
    if body is None:
        return []
    if not isinstance(body, list):
        logger.warning("Toggl returned %s where a list was expected", type(body).__name__)
        raise RemoteRequestError(INVALID_RESPONSE_MESSAGE, remote_status=200)
    return body


class LedgerClient:
    """Ledger operations on behalf of one Toggl user.

    Implements ``ProtocolLedgerClient`` and ``ProtocolTimerClient``.
    """

    def __init__(self, client: TogglClient, token: str, settings: FlexSettings) -> None:
        if not token:
            raise NoAccountError()
        self._client = client
        self._token = token
        self._settings = settings

    @property
    def settings(self) -> FlexSettings:
        return self._settings

    async def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        return await self._client.request_json(self._token, method, path, **kwargs)

    # ------------------------------------------------------------------
    # Reconciliation reads
    # ------------------------------------------------------------------

    async def fetch_records(self, window: ModelWindow) -> tuple[ModelTimeRecord, ...]:
        """Fetch the window's records, oldest first.

        Raises:
            OpenTimerError: If any record in the window is still running.
            RemoteRequestError: If Toggl rejects the request.
        """
        body = await self._call(
            "GET",
            "/time_entries",
            params={
                "start_date": window.start.isoformat(),
                "end_date": window.end.isoformat(),
            },
        )
        records = [_parse(ModelTimeRecord, item) for item in _items(body)]
        records.reverse()
        # Stable: entries sharing a start keep the reversed delivery order.
        records.sort(key=lambda record: record.start)

        for record in records:
            if record.is_running:
                raise OpenTimerError(record.id, record.description)

        logger.debug(
            "Fetched %d records for window %s..%s",
            len(records),
            window.start.isoformat(),
            window.end.isoformat(),
        )
        return tuple(records)

    async def resolve_tag_id(self, name: str) -> int:
        """Return the id of workspace tag ``name``.

        Raises:
            NotFoundError: If the workspace has no such tag.
        """
        tags = await self._call("GET", f"/workspaces/{self._settings.workspace_id}/tags")
        for tag in _items(tags):
            if isinstance(tag, dict) and tag.get("name") == name:
                return int(tag["id"])
        raise NotFoundError(
            f"Tag `{name}` does not exist in workspace {self._settings.workspace_id}.",
            details={"tag": name, "workspace_id": self._settings.workspace_id},
        )

    async def resolve_task_id(self, project_id: int, task_name: str) -> int:
        """Return the id of task ``task_name`` inside ``project_id``.

        Raises:
            NotFoundError: If the project has no such task.
        """
        tasks = await self._call("GET", f"/projects/{project_id}/tasks")
        for task in _items(tasks):
            if isinstance(task, dict) and task.get("name") == task_name:
                return int(task["id"])
        raise NotFoundError(
            f"Task `{task_name}` does not exist in project {project_id}.",
            details={"task": task_name, "project_id": project_id},
        )

    async def report_summary(
        self,
        since: date,
        until: date,
        *,
        tag_ids: Sequence[int] = (),
        project_ids: Sequence[int] = (),
        task_ids: Sequence[int] = (),
    ) -> int:
        """Return total tracked milliseconds in ``[since, until]`` for the filters."""
        params: dict[str, Any] = {
            "workspace_id": self._settings.workspace_id,
            "since": since.isoformat(),
            "until": until.isoformat(),
            "user_agent": self._settings.user_agent,
        }
        if tag_ids:
            params["tag_ids"] = _ids_param(tag_ids)
        if project_ids:
            params["project_ids"] = _ids_param(project_ids)
        if task_ids:
            params["task_ids"] = _ids_param(task_ids)

        body = await self._call("GET", "/summary", params=params, reports=True)
        total = body.get("total_grand") if isinstance(body, dict) else None
        return int(total or 0)

    # ------------------------------------------------------------------
    # Reconciliation writes
    # ------------------------------------------------------------------

    async def tag_records(self, record_ids: Sequence[int], tag: str) -> None:
        """Add ``tag`` to every record in ``record_ids`` with one bulk update."""
        if not record_ids:
            return
        await self._call(
            "PUT",
            f"/time_entries/{_ids_param(record_ids)}",
            json={"time_entry": {"tags": [tag], "tag_action": _TAG_ACTION_ADD}},
        )
        logger.info("Tagged %d records with %r", len(record_ids), tag)

    async def update_record_duration(
        self, record_id: int, start: datetime, new_duration: int
    ) -> ModelTimeRecord:
        """Set a record's duration and the stop time derived from it."""
        stop = start + timedelta(seconds=new_duration)
        body = await self._call(
            "PUT",
            f"/time_entries/{record_id}",
            json={"time_entry": {"duration": new_duration, "stop": stop.isoformat()}},
        )
        return _parse(ModelTimeRecord, _data(body))

    async def shrink_record(
        self, record: ModelTimeRecord, by_seconds: int
    ) -> ModelTimeRecord:
        """Shorten ``record`` by ``by_seconds``, keeping its start.

        Raises:
            ValueError: If the shrink would not leave a positive duration.
        """
        if not 0 < by_seconds < record.duration:
            raise ValueError(
                f"cannot shrink record {record.id} of {record.duration}s "
                f"by {by_seconds}s"
            )
        new_duration = record.duration - by_seconds
        updated = await self.update_record_duration(record.id, record.start, new_duration)
        logger.info(
            "Shrunk record %d from %ds to %ds", record.id, record.duration, new_duration
        )
        return updated

    async def create_record(self, fields: ModelNewTimeRecord) -> ModelTimeRecord:
        """Create a closed record from ``fields``."""
        body = await self._call(
            "POST", "/time_entries", json={"time_entry": fields.to_payload()}
        )
        created = _parse(ModelTimeRecord, _data(body))
        logger.info("Created record %d of %ds", created.id, created.duration)
        return created

    # ------------------------------------------------------------------
    # Timer and account operations
    # ------------------------------------------------------------------

    async def whoami(self) -> ModelTogglUser:
        """Return the profile of the token's owner."""
        body = await self._call("GET", "/me")
        return _parse(ModelTogglUser, _data(body))

    async def current_record(self) -> ModelTimeRecord | None:
        """Return the running record, or None if no timer runs."""
        body = await self._call("GET", "/time_entries/current")
        data = _data(body)
        if not data:
            return None
        return _parse(ModelTimeRecord, data)

    async def start_record(
        self, description: str | None, *, start: datetime | None = None
    ) -> ModelTimeRecord:
        """Start a new running record in the configured workspace."""
        entry: dict[str, Any] = {
            "created_with": CREATED_WITH,
            "wid": self._settings.workspace_id,
        }
        if description:
            entry["description"] = description
        if start is not None:
            entry["start"] = start.isoformat()
        body = await self._call("POST", "/time_entries/start", json={"time_entry": entry})
        started = _parse(ModelTimeRecord, _data(body))
        logger.info("Started record %d", started.id)
        return started

    async def stop_current_record(self) -> ModelTimeRecord:
        """Stop the running record.

        Raises:
            NotFoundError: If no timer is running.
        """
        current = await self.current_record()
        if current is None:
            raise NotFoundError("No current time entry to stop.")
        body = await self._call("PUT", f"/time_entries/{current.id}/stop")
        stopped = _parse(ModelTimeRecord, _data(body))
        logger.info("Stopped record %d after %ds", stopped.id, stopped.duration)
        return stopped

    async def recent_projects(self, limit: int = 5) -> list[ModelTogglProject]:
        """Return the workspace's most recently modified projects, newest first."""
        body = await self._call(
            "GET", f"/workspaces/{self._settings.workspace_id}/projects"
        )
        projects = [_parse(ModelTogglProject, item) for item in _items(body)]
        oldest = datetime.min.replace(tzinfo=UTC)
        projects.sort(key=lambda project: project.at or oldest, reverse=True)
        return projects[:limit]


__all__ = ["LedgerClient"]
