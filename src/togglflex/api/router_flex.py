"""FastAPI router exposing the flex intents and timer commands.

The router is a thin shell: all business logic lives in FlexService and
LedgerClient. Callers identify the user with the ``X-User-Id`` header; the
``get_ledger`` dependency turns the ``X-Toggl-Api-Token`` header into a
ledger bound to that user. Flex errors become JSON responses with a single
human-readable ``detail`` via ``install_error_handlers``.
"""

# NOTE: Do NOT use `from __future__ import annotations` in this module.
# FastAPI requires runtime-accessible type annotations for dependency injection
# and header/body extraction.

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, FastAPI, Header, Request
from fastapi.responses import JSONResponse

from togglflex.api.models_flex import (
    ModelCancelResponse,
    ModelFlexBalanceResponse,
    ModelFlexCommand,
    ModelFlexOutcomeResponse,
    ModelFlexResultResponse,
    ModelStartTimerCommand,
)
from togglflex.enums import EnumConfirmationState, EnumFlexOutcome
from togglflex.errors import FlexError
from togglflex.ledger import LedgerClient
from togglflex.models import ModelTimeRecord, ModelTogglProject, ModelTogglUser
from togglflex.service import FlexService

logger = logging.getLogger(__name__)

UserId = Annotated[str, Header(alias="X-User-Id", min_length=1, max_length=128)]


async def _flex_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, FlexError)
    logger.info(
        "Flex request failed: %s %s -> %s", request.method, request.url.path, exc.error_code.value
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_code": exc.error_code.value},
    )


def install_error_handlers(app: FastAPI) -> None:
    """Render every FlexError as ``{"detail": message, "error_code": code}``."""
    app.add_exception_handler(FlexError, _flex_error_handler)


def create_flex_router(
    *,
    get_service: Any,
    get_ledger: Any,
) -> APIRouter:
    """Create a FastAPI router for the flex and timer endpoints.

    Args:
        get_service: Dependency callable returning the shared FlexService.
        get_ledger: Dependency callable returning a LedgerClient for the
            caller's token.

    Returns:
        Configured APIRouter ready to be mounted on a FastAPI app.
    """
    router = APIRouter(prefix="/api/v1")

    Service = Annotated[FlexService, Depends(get_service)]

    async def clear_pending(user_id: UserId, service: Service) -> str:
        # Declared before Ledger so the pending entry is dropped even when
        # the ledger cannot be built for the caller.
        service.cancel(user_id)
        return user_id

    CallerId = Annotated[str, Depends(clear_pending)]
    Ledger = Annotated[LedgerClient, Depends(get_ledger)]

    @router.post(
        "/flex/query",
        response_model=ModelFlexResultResponse,
        tags=["flex"],
        summary="Report flex for a window and hold it for confirmation",
    )
    async def query_flex(
        command: ModelFlexCommand, user_id: CallerId, service: Service, ledger: Ledger
    ) -> ModelFlexResultResponse:
        result = await service.query(user_id, ledger, command.tokens)
        return ModelFlexResultResponse.from_result(
            result,
            awaiting_confirmation=(
                service.state(user_id) is EnumConfirmationState.AWAITING_CONFIRMATION
            ),
        )

    @router.post(
        "/flex/apply",
        response_model=ModelFlexOutcomeResponse,
        tags=["flex"],
        summary="Compute and apply flex for a window without confirmation",
    )
    async def apply_flex(
        command: ModelFlexCommand, user_id: CallerId, service: Service, ledger: Ledger
    ) -> ModelFlexOutcomeResponse:
        outcome = await service.apply(user_id, ledger, command.tokens)
        return ModelFlexOutcomeResponse.from_outcome(outcome)

    @router.post(
        "/flex/confirm",
        response_model=ModelFlexOutcomeResponse,
        tags=["flex"],
        summary="Apply the pending flex result",
    )
    async def confirm_flex(
        user_id: UserId, service: Service, ledger: Ledger
    ) -> ModelFlexOutcomeResponse:
        outcome = await service.confirm(user_id, ledger)
        return ModelFlexOutcomeResponse.from_outcome(outcome)

    @router.post(
        "/flex/cancel",
        response_model=ModelCancelResponse,
        tags=["flex"],
        summary="Drop the pending flex result",
    )
    async def cancel_flex(user_id: UserId, service: Service) -> ModelCancelResponse:
        cancelled = service.cancel(user_id)
        return ModelCancelResponse(
            status=(
                EnumFlexOutcome.CANCELLED if cancelled else EnumFlexOutcome.NOTHING_PENDING
            ),
            cancelled=cancelled,
        )

    @router.get(
        "/flex/balance",
        response_model=ModelFlexBalanceResponse,
        tags=["flex"],
        summary="Year-to-date flex balance",
    )
    async def flex_balance(
        user_id: CallerId, service: Service, ledger: Ledger
    ) -> ModelFlexBalanceResponse:
        balance = await service.balance(user_id, ledger)
        return ModelFlexBalanceResponse.from_balance(balance)

    @router.get("/timer/current", response_model=ModelTimeRecord | None, tags=["timer"])
    async def current_timer(
        caller: CallerId, ledger: Ledger
    ) -> ModelTimeRecord | None:
        return await ledger.current_record()

    @router.post("/timer/start", response_model=ModelTimeRecord, tags=["timer"])
    async def start_timer(
        command: ModelStartTimerCommand, caller: CallerId, ledger: Ledger
    ) -> ModelTimeRecord:
        return await ledger.start_record(command.description)

    @router.post("/timer/stop", response_model=ModelTimeRecord, tags=["timer"])
    async def stop_timer(caller: CallerId, ledger: Ledger) -> ModelTimeRecord:
        return await ledger.stop_current_record()

    @router.get(
        "/projects/recent", response_model=list[ModelTogglProject], tags=["account"]
    )
    async def recent_projects(
        caller: CallerId, ledger: Ledger
    ) -> list[ModelTogglProject]:
        return await ledger.recent_projects()

    @router.get("/me", response_model=ModelTogglUser, tags=["account"])
    async def whoami(caller: CallerId, ledger: Ledger) -> ModelTogglUser:
        return await ledger.whoami()

    return router


__all__ = ["create_flex_router", "install_error_handlers"]
