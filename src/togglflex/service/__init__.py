# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Command-level flex service."""

from togglflex.service.flex_service import FlexService

__all__ = ["FlexService"]
