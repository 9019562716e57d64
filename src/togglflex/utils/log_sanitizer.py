# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Log sanitization for Toggl credentials.

Remote error bodies, URLs and exception messages can echo the caller's API
token back. Everything that goes to a log record or a user-visible message
from the transport layer is passed through ``sanitize_logs`` first.

Usage:
    from togglflex.utils.log_sanitizer import sanitize_logs

    logger.warning("Toggl request failed: %s", sanitize_logs(response.text))
"""

from __future__ import annotations

import re
from functools import lru_cache

# Toggl API tokens are 32 lowercase hex characters.
_DEFAULT_PATTERNS: tuple[tuple[str, str], ...] = (
    (r"(?i)(authorization\s*[:=]\s*)(basic|bearer)\s+[A-Za-z0-9+/=._-]+", r"\1\2 [REDACTED]"),
    (r"(?i)(api_token=)[^&\s\"']+", r"\1[REDACTED]"),
    (r"\b[0-9a-f]{32}\b", "[TOGGL_API_TOKEN]"),
)


class LogSanitizer:
    """Replaces credential-looking substrings with placeholders."""

    def __init__(
        self,
        extra_patterns: list[tuple[str, str]] | None = None,
        *,
        enabled: bool = True,
    ) -> None:
        self.enabled = enabled
        self._patterns = [
            (re.compile(pattern), replacement)
            for pattern, replacement in (*_DEFAULT_PATTERNS, *(extra_patterns or []))
        ]

    def add_secret(self, secret: str, placeholder: str = "[REDACTED]") -> None:
        """Redact an exact secret value (e.g. a token known at runtime)."""
        if secret:
            self._patterns.append((re.compile(re.escape(secret)), placeholder))

    def sanitize(self, text: str | None) -> str:
        if text is None:
            return ""
        if not self.enabled or not text:
            return text
        for pattern, replacement in self._patterns:
            text = pattern.sub(replacement, text)
        return text


@lru_cache(maxsize=1)
def get_log_sanitizer() -> LogSanitizer:
    """Return the process-wide sanitizer instance."""
    return LogSanitizer()


def sanitize_logs(text: str | None) -> str:
    """Sanitize text with the process-wide sanitizer."""
    return get_log_sanitizer().sanitize(text)


__all__ = ["LogSanitizer", "get_log_sanitizer", "sanitize_logs"]
