# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Error taxonomy for flex reconciliation.

Every failure aborts the current operation and is reported to the user as a
single human-readable message (``str(error)``). Writes already issued before
the failure are left as they are; re-running the reconciliation converges
because flex-tagged records are excluded from later computations.

Hierarchy:
    FlexError
    ├── ValidationError            malformed timeslot/quota tokens
    ├── OpenTimerError             a record in the window is still running
    ├── NotFoundError              required tag/task/record missing remotely
    ├── RemoteRequestError         non-success response from Toggl
    ├── ConfirmationMismatchError  ledger changed before confirmation
    └── NoAccountError             no Toggl token supplied for the caller
"""

from __future__ import annotations

from typing import Any

from togglflex.enums import EnumFlexErrorCode

NO_ACCOUNT_MESSAGE = (
    "No Toggl account set up. Link your account with your Toggl API token first."
)


class FlexError(Exception):
    """Base exception for flex reconciliation errors."""

    def __init__(
        self,
        message: str,
        error_code: EnumFlexErrorCode,
        details: dict[str, Any] | None = None,
        status_code: int = 500,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(FlexError):
    """Raised when a timeslot or quota token is malformed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            error_code=EnumFlexErrorCode.VALIDATION_ERROR,
            details=details,
            status_code=422,
        )


class OpenTimerError(FlexError):
    """Raised when a record inside the window is still running."""

    def __init__(self, record_id: int, description: str | None = None) -> None:
        label = f" ({description})" if description else ""
        super().__init__(
            f"Time entry {record_id}{label} is still running. "
            "Stop the timer before reconciling flex time.",
            error_code=EnumFlexErrorCode.OPEN_TIMER,
            details={"record_id": record_id},
            status_code=409,
        )
        self.record_id = record_id


class NotFoundError(FlexError):
    """Raised when a tag, task or record required by the operation is missing."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            error_code=EnumFlexErrorCode.NOT_FOUND,
            details=details,
            status_code=404,
        )


class RemoteRequestError(FlexError):
    """Raised when the Toggl API answers with a non-success status.

    ``remote_status`` is None when no response was received at all
    (timeout or connection failure).
    """

    def __init__(
        self,
        message: str,
        remote_status: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["remote_status"] = remote_status
        super().__init__(
            message,
            error_code=EnumFlexErrorCode.REMOTE_REQUEST_FAILED,
            details=details,
            status_code=502,
        )
        self.remote_status = remote_status


class ConfirmationMismatchError(FlexError):
    """Raised when the recomputed delta differs from the confirmed one."""

    def __init__(self, expected_seconds: int, actual_seconds: int) -> None:
        super().__init__(
            "Your time entries changed since the flex result was computed "
            f"({expected_seconds}s then, {actual_seconds}s now). "
            "Run the query again.",
            error_code=EnumFlexErrorCode.CONFIRMATION_MISMATCH,
            details={
                "expected_seconds": expected_seconds,
                "actual_seconds": actual_seconds,
            },
            status_code=409,
        )
        self.expected_seconds = expected_seconds
        self.actual_seconds = actual_seconds


class NoAccountError(FlexError):
    """Raised when the caller has no linked Toggl token."""

    def __init__(self, message: str = NO_ACCOUNT_MESSAGE) -> None:
        super().__init__(
            message,
            error_code=EnumFlexErrorCode.NO_ACCOUNT,
            status_code=401,
        )


__all__ = [
    "NO_ACCOUNT_MESSAGE",
    "ConfirmationMismatchError",
    "FlexError",
    "NoAccountError",
    "NotFoundError",
    "OpenTimerError",
    "RemoteRequestError",
    "ValidationError",
]
