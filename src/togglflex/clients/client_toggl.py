# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Async HTTP client for the Toggl API.

Thin transport over one pooled ``httpx.AsyncClient``. Every call is made on
behalf of a single user: the user's API token is sent as HTTP basic auth
(``<token>:api_token``) on that request only, so one client instance serves
all users of the process.

Failures are never retried here. A partially applied tag/create/shrink
sequence is not safe to replay blindly, so retries are left to the user.

Example:
    ```python
    async with TogglClient(settings) as client:
        entries = await client.request_json(
            token, "GET", "/time_entries", params={"start_date": ...}
        )
    ```
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from togglflex.errors import RemoteRequestError
from togglflex.utils.log_sanitizer import sanitize_logs

if TYPE_CHECKING:
    from types import TracebackType

    from togglflex.config import FlexSettings

logger = logging.getLogger(__name__)

_HTTP_OK = 200
_ERROR_BODY_MAX_CHARS = 200

INVALID_RESPONSE_MESSAGE = "Request failed with the Toggl API (invalid response body)"


class TogglClient:
    """Async Toggl API client with connection pooling.

    Supports both context manager and manual lifecycle management, and an
    injectable ``transport`` for tests (``httpx.MockTransport``).
    """

    def __init__(
        self,
        settings: FlexSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def settings(self) -> FlexSettings:
        return self._settings

    @property
    def is_connected(self) -> bool:
        """True if the connection pool is open."""
        return self._client is not None

    async def connect(self) -> None:
        """Open the connection pool. Safe to call multiple times."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.timeout_seconds),
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            headers={
                "Content-Type": "application/json",
                "User-Agent": self._settings.user_agent,
            },
            transport=self._transport,
        )
        logger.debug("TogglClient connected to %s", self._settings.api_base_url)

    async def close(self) -> None:
        """Close the connection pool. Safe to call multiple times."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        logger.debug("TogglClient connection closed")

    async def __aenter__(self) -> TogglClient:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    def api_url(self, path: str) -> str:
        return f"{self._settings.api_base_url.rstrip('/')}/{path.lstrip('/')}"

    def reports_url(self, path: str) -> str:
        return f"{self._settings.reports_base_url.rstrip('/')}/{path.lstrip('/')}"

    async def request_json(
        self,
        token: str,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        reports: bool = False,
    ) -> Any:
        """Send an authenticated request and return the decoded JSON body.

        Args:
            token: The user's Toggl API token.
            method: HTTP method.
            path: Path relative to the API (or reports API) base URL.
            params: Query string parameters.
            json: JSON request body.
            reports: Target the reports API instead of the main API.

        Returns:
            Decoded JSON body, or None for an empty body.

        Raises:
            RemoteRequestError: On any non-200 status, timeout, connection
                failure or undecodable body.
        """
        if self._client is None:
            await self.connect()
        assert self._client is not None

        url = self.reports_url(path) if reports else self.api_url(path)
        try:
            response = await self._client.request(
                method,
                url,
                params=params,
                json=json,
                auth=httpx.BasicAuth(token, "api_token"),
            )
        except httpx.TimeoutException as exc:
            logger.warning("Toggl request timed out: %s %s", method, url)
            raise RemoteRequestError(
                f"Request to the Toggl API timed out after "
                f"{self._settings.timeout_seconds}s"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "Toggl request failed: %s %s: %s", method, url, sanitize_logs(str(exc))
            )
            raise RemoteRequestError(
                "Request to the Toggl API failed: could not reach the service"
            ) from exc

        if response.status_code != _HTTP_OK:
            logger.warning(
                "Toggl API error: %s %s -> %d %s",
                method,
                url,
                response.status_code,
                sanitize_logs(response.text[:_ERROR_BODY_MAX_CHARS]),
            )
            raise RemoteRequestError(
                f"Request failed with the Toggl API (HTTP {response.status_code})",
                remote_status=response.status_code,
            )

        logger.debug("Toggl %s %s -> %d", method, url, response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.warning(
                "Toggl API returned a non-JSON body: %s %s: %s",
                method,
                url,
                sanitize_logs(response.text[:_ERROR_BODY_MAX_CHARS]),
            )
            raise RemoteRequestError(
                INVALID_RESPONSE_MESSAGE, remote_status=response.status_code
            ) from exc


__all__ = ["INVALID_RESPONSE_MESSAGE", "TogglClient"]
