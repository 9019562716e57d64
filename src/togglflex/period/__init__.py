"""Period resolution for relative timeslot and quota tokens."""

from togglflex.period.resolver import (
    resolve_flex_request,
    resolve_quota,
    resolve_window,
)

__all__ = ["resolve_flex_request", "resolve_quota", "resolve_window"]
