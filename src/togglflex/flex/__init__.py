# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Flex engine: calculation, allocation and balance."""

from togglflex.flex.applier import (
    AllocationPlan,
    SplitPlan,
    apply_flex,
    plan_allocation,
)
from togglflex.flex.balance import compute_balance
from togglflex.flex.calculator import compute_flex

__all__ = [
    "AllocationPlan",
    "SplitPlan",
    "apply_flex",
    "compute_balance",
    "compute_flex",
    "plan_allocation",
]
