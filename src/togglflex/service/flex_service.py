# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Flex service: the command surface offered to the chat front end.

Intents:
    query    resolve window and quota, report the delta, and hold a non-zero
             delta for confirmation
    apply    resolve, compute and apply at once
    confirm  apply the held delta if the ledger has not changed since
    cancel   any other interaction from the user drops what is held
    balance  year-to-date earned minus used flex

Per-user state machine (see ``EnumConfirmationState``):

    IDLE --query(delta != 0)--> AWAITING_CONFIRMATION
    AWAITING_CONFIRMATION --confirm, same delta------> IDLE (applied)
    AWAITING_CONFIRMATION --confirm, different delta-> IDLE (rejected)
    AWAITING_CONFIRMATION --anything else-----------> IDLE (cancelled)

``confirm`` takes the pending entry out of the store before its first await.
A second confirmation arriving while the first is still talking to Toggl
therefore finds nothing pending and cannot apply the same delta twice.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime
from typing import TYPE_CHECKING

from togglflex.enums import EnumConfirmationState, EnumFlexOutcome
from togglflex.errors import ConfirmationMismatchError, FlexError
from togglflex.flex import apply_flex, compute_balance, compute_flex
from togglflex.models import (
    ModelConfirmationOutcome,
    ModelFlexBalance,
    ModelFlexResult,
    ModelPendingConfirmation,
)
from togglflex.period import resolve_flex_request

if TYPE_CHECKING:
    from togglflex.config import FlexSettings
    from togglflex.confirmation_store import ProtocolConfirmationStore
    from togglflex.protocols import ProtocolLedgerClient

logger = logging.getLogger(__name__)


class FlexService:
    """Query/confirm/apply workflow over an injected confirmation store.

    Every operation takes the calling user's id and a ledger bound to that
    user's Toggl token; token storage belongs to the front end.
    """

    def __init__(
        self,
        *,
        store: ProtocolConfirmationStore,
        settings: FlexSettings,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._settings = settings
        self._clock = clock or settings.now

    @property
    def settings(self) -> FlexSettings:
        return self._settings

    def state(self, user_id: str) -> EnumConfirmationState:
        """Return the user's current confirmation state."""
        if self._store.get(user_id) is None:
            return EnumConfirmationState.IDLE
        return EnumConfirmationState.AWAITING_CONFIRMATION

    def cancel(self, user_id: str) -> bool:
        """Drop the user's pending confirmation, if any.

        The front end calls this for every inbound interaction that is not
        an affirmative answer.

        Returns:
            True if something was pending.
        """
        cancelled = self._store.discard(user_id)
        if cancelled:
            logger.info("Pending flex cancelled. user_id=%s", user_id)
        return cancelled

    async def _compute(
        self, tokens: Sequence[str], ledger: ProtocolLedgerClient
    ) -> ModelFlexResult:
        request = resolve_flex_request(tokens, now=self._clock())
        return await compute_flex(
            request, ledger, flex_tag=self._settings.flex_tag_name
        )

    async def query(
        self,
        user_id: str,
        ledger: ProtocolLedgerClient,
        tokens: Sequence[str],
    ) -> ModelFlexResult:
        """Compute the flex delta and hold it for confirmation if non-zero.

        Raises:
            ValidationError: If the tokens are malformed.
            OpenTimerError: If a record in the window is still running.
            RemoteRequestError: If the ledger cannot be read.
        """
        self.cancel(user_id)
        result = await self._compute(tokens, ledger)

        if not result.is_balanced:
            self._store.put(
                ModelPendingConfirmation(
                    user_id=user_id,
                    request=result.request,
                    delta_seconds=result.delta_seconds,
                    created_at=self._clock(),
                )
            )
            logger.info(
                "Flex awaiting confirmation. user_id=%s delta=%ds",
                user_id,
                result.delta_seconds,
            )
        return result

    async def apply(
        self,
        user_id: str,
        ledger: ProtocolLedgerClient,
        tokens: Sequence[str],
    ) -> ModelConfirmationOutcome:
        """Compute and apply the flex delta without a confirmation step."""
        self.cancel(user_id)
        result = await self._compute(tokens, ledger)
        if result.is_balanced:
            return ModelConfirmationOutcome(status=EnumFlexOutcome.BALANCED, result=result)

        applied = await apply_flex(result, ledger, settings=self._settings)
        logger.info("Flex applied. user_id=%s applied=%ds", user_id, applied)
        return ModelConfirmationOutcome(
            status=EnumFlexOutcome.APPLIED, applied_seconds=applied, result=result
        )

    async def confirm(
        self,
        user_id: str,
        ledger: ProtocolLedgerClient,
    ) -> ModelConfirmationOutcome:
        """Apply the user's pending delta after revalidating it.

        The pending entry is cleared before anything else happens, whatever
        the outcome.

        Raises:
            ConfirmationMismatchError: If the recomputed delta differs.
            OpenTimerError: If a timer was started in the window meanwhile.
            NotFoundError: If the flex tag or absence task is missing.
            RemoteRequestError: If a ledger call fails.
        """
        pending = self._store.pop(user_id)
        if pending is None:
            return ModelConfirmationOutcome(status=EnumFlexOutcome.NOTHING_PENDING)

        try:
            result = await compute_flex(
                pending.request, ledger, flex_tag=self._settings.flex_tag_name
            )
        except FlexError as exc:
            logger.warning(
                "Flex confirmation aborted. user_id=%s reason=%s",
                user_id,
                exc.error_code.value,
            )
            raise

        if result.delta_seconds != pending.delta_seconds:
            logger.warning(
                "Flex confirmation rejected, ledger changed. user_id=%s "
                "expected=%ds actual=%ds",
                user_id,
                pending.delta_seconds,
                result.delta_seconds,
            )
            raise ConfirmationMismatchError(pending.delta_seconds, result.delta_seconds)

        applied = await apply_flex(result, ledger, settings=self._settings)
        logger.info("Flex confirmed and applied. user_id=%s applied=%ds", user_id, applied)
        return ModelConfirmationOutcome(
            status=EnumFlexOutcome.APPLIED, applied_seconds=applied, result=result
        )

    async def balance(
        self,
        user_id: str,
        ledger: ProtocolLedgerClient,
        *,
        today: date | None = None,
    ) -> ModelFlexBalance:
        """Return the user's year-to-date flex balance."""
        self.cancel(user_id)
        return await compute_balance(
            ledger,
            settings=self._settings,
            today=today or self._clock().date(),
        )


__all__ = ["FlexService"]
