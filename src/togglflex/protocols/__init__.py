"""Shared protocol definitions for togglflex.

The flex engine (calculator, applier, balance, service) depends on these
protocols rather than on the concrete Toggl-backed client, so tests and
alternative ledgers can be injected.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from togglflex.models import (
        ModelNewTimeRecord,
        ModelTimeRecord,
        ModelTogglProject,
        ModelTogglUser,
        ModelWindow,
    )


@runtime_checkable
class ProtocolLedgerClient(Protocol):
    """One user's view of the time ledger.

    Every method is a suspension point performing one network round-trip,
    except ``tag_records`` with no ids, which sends nothing.
    """

    async def fetch_records(self, window: ModelWindow) -> tuple[ModelTimeRecord, ...]:
        """Return the window's records in ascending chronological order.

        Raises OpenTimerError if any record in the window is still running.
        """
        ...

    async def tag_records(self, record_ids: Sequence[int], tag: str) -> None:
        """Add ``tag`` to all given records in one request."""
        ...

    async def shrink_record(
        self, record: ModelTimeRecord, by_seconds: int
    ) -> ModelTimeRecord:
        """Reduce a record's duration, recomputing its stop time."""
        ...

    async def create_record(self, fields: ModelNewTimeRecord) -> ModelTimeRecord:
        """Create a closed record and return it as stored."""
        ...

    async def resolve_tag_id(self, name: str) -> int:
        """Return the workspace tag id for ``name`` or raise NotFoundError."""
        ...

    async def resolve_task_id(self, project_id: int, task_name: str) -> int:
        """Return the project's task id for ``task_name`` or raise NotFoundError."""
        ...

    async def report_summary(
        self,
        since: date,
        until: date,
        *,
        tag_ids: Sequence[int] = (),
        project_ids: Sequence[int] = (),
        task_ids: Sequence[int] = (),
    ) -> int:
        """Return the total tracked milliseconds matching the filters."""
        ...


@runtime_checkable
class ProtocolTimerClient(Protocol):
    """Running-timer and account operations of the ledger."""

    async def whoami(self) -> ModelTogglUser: ...

    async def current_record(self) -> ModelTimeRecord | None: ...

    async def start_record(
        self, description: str | None, *, start: datetime | None = None
    ) -> ModelTimeRecord: ...

    async def stop_current_record(self) -> ModelTimeRecord: ...

    async def recent_projects(self, limit: int = 5) -> list[ModelTogglProject]: ...


__all__ = ["ProtocolLedgerClient", "ProtocolTimerClient"]
