from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from lockerpay.core.use_cases.create_payment import CreatePaymentUseCase, PaymentGateway
from lockerpay.core.use_cases.get_locker_command import GetLockerCommandUseCase
from lockerpay.core.use_cases.get_locker_summary import GetLockerSummaryUseCase
from lockerpay.core.use_cases.get_payment_status import GetPaymentStatusUseCase
from lockerpay.core.use_cases.process_payment_callback import ProcessPaymentCallbackUseCase
from lockerpay.core.use_cases.register_locker import RegisterLockerUseCase
from lockerpay.infrastructure.repositories.command_repository_impl import CommandRepositoryImpl
from lockerpay.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from lockerpay.infrastructure.repositories.payment_repository_impl import PaymentRepositoryImpl
from lockerpay.infrastructure.xendit_client import XenditQrClient
from lockerpay.schemas.models import (
    CreatePaymentRequest,
    LockerCommand,
    LockerRegistration,
    LockerSummary,
    PaymentStatus,
    QrisPayment,
)


def _callback_secret() -> str:
    from lockerpay.infrastructure.config import settings
    return settings.xendit_secret_api_key


def build_payment_gateway() -> PaymentGateway:
    from lockerpay.infrastructure.config import settings
    return XenditQrClient(
        secret_api_key=settings.xendit_secret_api_key,
        base_url=settings.xendit_api_base_url,
        callback_url=settings.xendit_callback_url,
        timeout=settings.xendit_timeout_seconds,
    )


def process_payment_callback_service(callback_token: str | None, payload: Any, db: Session) -> dict[str, Any]:
    """
    Returns:
      {"external_id": ..., "status": ..., "activated_locker": locker_id or None}
    """
    use_case = ProcessPaymentCallbackUseCase(
        callback_secret=_callback_secret(),
        payment_repo=PaymentRepositoryImpl(db),
        locker_repo=LockerRepositoryImpl(db),
        command_repo=CommandRepositoryImpl(db),
    )

    result = use_case.execute(callback_token=callback_token, payload=payload)
    return {
        "external_id": result.external_id,
        "status": result.status,
        "activated_locker": result.activation.locker_id if result.activation else None,
    }


def get_payment_status_service(external_id: str, db: Session) -> PaymentStatus:
    use_case = GetPaymentStatusUseCase(payment_repo=PaymentRepositoryImpl(db))

    dto = use_case.execute(external_id=external_id)

    return PaymentStatus(status=dto.status.value)


def create_payment_service(body: CreatePaymentRequest, gateway: PaymentGateway | None = None) -> QrisPayment:
    use_case = CreatePaymentUseCase(gateway=gateway or build_payment_gateway())

    payment = use_case.execute(
        amount=body.amount,
        external_id=body.external_id,
        payer_email=body.payer_email,
    )

    return QrisPayment(
        qr_string=payment.qr_string,
        qr_url=payment.qr_url,
        external_id=payment.external_id,
        status=payment.status,
    )


def register_locker_service(body: LockerRegistration, db: Session) -> LockerSummary:
    RegisterLockerUseCase(locker_repo=LockerRepositoryImpl(db)).execute(locker_id=body.locker_id)
    return get_locker_summary_service(body.locker_id, db)


def get_locker_summary_service(locker_id: str, db: Session) -> LockerSummary:
    use_case = GetLockerSummaryUseCase(locker_repo=LockerRepositoryImpl(db))

    dto = use_case.execute(locker_id=locker_id)

    return LockerSummary(
        locker_id=dto.locker_id,
        status=dto.status.value,
        user_id=dto.user_id,
        open_code=dto.open_code,
        start_time=dto.start_time,
    )


def get_locker_command_service(locker_id: str, db: Session) -> LockerCommand:
    use_case = GetLockerCommandUseCase(command_repo=CommandRepositoryImpl(db))

    dto = use_case.execute(locker_id=locker_id)

    return LockerCommand(
        locker_id=dto.locker_id,
        command=dto.command.value,
        open_code=dto.open_code,
        timestamp=dto.timestamp,
    )
