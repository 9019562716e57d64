"""
Flex Enums Package.

Unified import location for the enums used across togglflex:

    from togglflex.enums import (
        EnumConfirmationState,
        EnumFlexErrorCode,
        EnumFlexOutcome,
        EnumWindowUnit,
    )
"""

from togglflex.enums.enum_confirmation_state import (
    EnumConfirmationState,
    EnumFlexOutcome,
)
from togglflex.enums.enum_flex_error_code import EnumFlexErrorCode
from togglflex.enums.enum_window_unit import EnumWindowUnit

__all__ = [
    "EnumConfirmationState",
    "EnumFlexErrorCode",
    "EnumFlexOutcome",
    "EnumWindowUnit",
]
