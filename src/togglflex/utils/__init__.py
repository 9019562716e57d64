"""Utility modules for togglflex.

Available modules:
- log_sanitizer: Log sanitization utilities for removing Toggl credentials
"""

from togglflex.utils.log_sanitizer import (
    LogSanitizer,
    get_log_sanitizer,
    sanitize_logs,
)

__all__ = [
    "LogSanitizer",
    "get_log_sanitizer",
    "sanitize_logs",
]
