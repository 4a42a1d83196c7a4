from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from lockerpay.core.entities.activation import ActivationProgress, LockerActivation
from lockerpay.core.entities.callback import PaymentCallback
from lockerpay.core.entities.payment import PaymentStatus
from lockerpay.core.errors import AuthenticationError, MalformedExternalIdError
from lockerpay.core.open_code import generate_open_code
from lockerpay.core.repositories.command_repository import CommandRepository
from lockerpay.core.repositories.locker_repository import LockerRepository
from lockerpay.core.repositories.payment_repository import PaymentRepository

logger = logging.getLogger(__name__)


class ActivationError(Exception):
    """
    Raise to map to HTTP 500 when a PAID callback was recorded but the locker
    activation did not complete. `progress` tells which writes went through.
    """

    def __init__(self, message: str, *, locker_id: str | None, progress: ActivationProgress) -> None:
        super().__init__(message)
        self.locker_id = locker_id
        self.progress = progress


class LockerNotFoundError(ActivationError):
    """PAID callback for a locker that was never registered."""


class UnresolvedLockerError(ActivationError):
    """PAID callback whose external_id and metadata name no locker and user."""


@dataclass(frozen=True, slots=True)
class CallbackResult:
    external_id: str
    status: str
    activation: LockerActivation | None = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProcessPaymentCallbackUseCase:
    """
    Handles one payment-result callback from the provider:

      1. authenticate the callback token
      2. validate the body into a PaymentCallback
      3. merge the status into the payment record
      4. on PAID, activate the locker and queue an open command

    Replaying a PAID callback re-runs step 4 and issues a new open code.
    """

    def __init__(
            self,
            *,
            callback_secret: str,
            payment_repo: PaymentRepository,
            locker_repo: LockerRepository,
            command_repo: CommandRepository,
            code_generator: Callable[[], str] | None = None,
            clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._callback_secret = callback_secret
        self._payment_repo = payment_repo
        self._locker_repo = locker_repo
        self._command_repo = command_repo
        self._code_generator = code_generator or generate_open_code
        self._clock = clock or _utcnow

    def execute(self, *, callback_token: str | None, payload: Any) -> CallbackResult:
        self._authenticate(callback_token)
        callback = PaymentCallback.from_payload(payload)

        self._record(callback)
        if callback.status != PaymentStatus.PAID.value:
            return CallbackResult(external_id=callback.external_id, status=callback.status)

        try:
            correlation = callback.correlation()
        except MalformedExternalIdError as e:
            raise UnresolvedLockerError(
                str(e),
                locker_id=None,
                progress=ActivationProgress(payment_recorded=True),
            ) from e

        activation = self._activate(
            LockerActivation(
                locker_id=correlation.locker_id,
                user_id=correlation.user_id,
                open_code=self._code_generator(),
                activated_at=self._clock(),
            )
        )
        return CallbackResult(external_id=callback.external_id, status=callback.status, activation=activation)

    def _authenticate(self, callback_token: str | None) -> None:
        if not callback_token or not self._callback_secret:
            raise AuthenticationError("Missing callback token")
        if not hmac.compare_digest(callback_token.encode("utf-8"), self._callback_secret.encode("utf-8")):
            raise AuthenticationError("Invalid callback token")

    def _record(self, callback: PaymentCallback) -> None:
        self._payment_repo.merge(
            callback.external_id,
            {
                "status": callback.status,
                "updated_at": self._clock(),
                "raw_event": dict(callback.raw),
            },
        )

    def _activate(self, activation: LockerActivation) -> LockerActivation:
        progress = ActivationProgress(payment_recorded=True)

        try:
            found = self._locker_repo.activate(activation)
        except Exception as e:
            raise ActivationError(
                f"Locker {activation.locker_id!r} update failed: {e}",
                locker_id=activation.locker_id,
                progress=progress,
            ) from e
        if not found:
            raise LockerNotFoundError(
                f"Locker {activation.locker_id!r} is not registered",
                locker_id=activation.locker_id,
                progress=progress,
            )
        progress = ActivationProgress(payment_recorded=True, locker_activated=True)

        try:
            self._command_repo.put(activation.to_command())
        except Exception as e:
            raise ActivationError(
                f"Open command for locker {activation.locker_id!r} was not issued: {e}",
                locker_id=activation.locker_id,
                progress=progress,
            ) from e

        logger.info(
            "Locker %s opened for user %s with code %s",
            activation.locker_id,
            activation.user_id,
            activation.open_code,
        )
        return activation
