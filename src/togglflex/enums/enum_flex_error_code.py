# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Error codes carried by FlexError and its subclasses."""

from enum import Enum


class EnumFlexErrorCode(str, Enum):
    """Machine-readable classification of a flex failure."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    OPEN_TIMER = "OPEN_TIMER"
    NOT_FOUND = "NOT_FOUND"
    REMOTE_REQUEST_FAILED = "REMOTE_REQUEST_FAILED"
    CONFIRMATION_MISMATCH = "CONFIRMATION_MISMATCH"
    NO_ACCOUNT = "NO_ACCOUNT"


__all__ = ["EnumFlexErrorCode"]
