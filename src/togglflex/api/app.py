"""FastAPI application factory for the togglflex command surface.

Usage:
    >>> app = create_app()  # settings from TOGGL_FLEX_* environment variables
    >>> # Run with uvicorn:
    >>> # uvicorn togglflex.api.app:create_app --factory

The shared TogglClient connection pool is opened and closed by the FastAPI
lifespan. Pending confirmations live in one InMemoryConfirmationStore per
process and are lost on restart.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated

import httpx
from fastapi import FastAPI, Header, HTTPException

from togglflex.api.router_flex import create_flex_router, install_error_handlers
from togglflex.clients import TogglClient
from togglflex.config import FlexSettings
from togglflex.confirmation_store import (
    InMemoryConfirmationStore,
    ProtocolConfirmationStore,
)
from togglflex.ledger import LedgerClient
from togglflex.service import FlexService

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class _AppState:
    """Typed shared state for the FastAPI lifespan and dependency closures.

    ``client`` is set before the server accepts requests and cleared only
    after in-flight requests have drained, so handlers see None only during
    startup or shutdown (answered with HTTP 503).
    """

    settings: FlexSettings
    service: FlexService
    transport: httpx.AsyncBaseTransport | None = None
    client: TogglClient | None = None


def create_app(
    *,
    settings: FlexSettings | None = None,
    store: ProtocolConfirmationStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Flex settings; loaded from the environment if omitted.
        store: Confirmation store; a fresh in-memory store if omitted.
        transport: Optional httpx transport for the Toggl client (tests).

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = FlexSettings()  # type: ignore[call-arg]  # fields populated from env vars at runtime
    service = FlexService(store=store or InMemoryConfirmationStore(), settings=settings)
    state = _AppState(settings=settings, service=service, transport=transport)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:  # noqa: ARG001
        """Manage the Toggl connection pool lifecycle."""
        client = TogglClient(state.settings, transport=state.transport)
        await client.connect()
        state.client = client
        logger.info("Toggl client ready for workspace %d", state.settings.workspace_id)

        yield

        await client.close()
        state.client = None
        logger.info("Toggl client closed")

    async def get_service() -> FlexService:
        return state.service

    async def get_ledger(
        token: Annotated[str | None, Header(alias="X-Toggl-Api-Token")] = None,
    ) -> LedgerClient:
        """FastAPI dependency building a ledger for the caller's token.

        Raises NoAccountError (HTTP 401) when the header is missing.
        """
        client = state.client
        if client is None:
            raise HTTPException(
                status_code=503,
                detail="Service unavailable: Toggl client not initialized.",
            )
        return LedgerClient(client, token or "", state.settings)

    app = FastAPI(
        title="togglflex",
        description="Flex time reconciliation against Toggl",
        version="0.1.0",
        lifespan=lifespan,
    )
    install_error_handlers(app)
    app.include_router(create_flex_router(get_service=get_service, get_ledger=get_ledger))

    @app.get("/health", tags=["infrastructure"])
    async def health_check() -> dict[str, str]:
        """Liveness probe."""
        if state.client is None:
            return {"status": "starting"}
        return {"status": "healthy"}

    return app


__all__ = ["create_app"]
