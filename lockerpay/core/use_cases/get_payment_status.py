from __future__ import annotations

from dataclasses import dataclass

from lockerpay.core.entities.payment import PaymentRecord, PaymentStatus
from lockerpay.core.errors import NotFoundError
from lockerpay.core.repositories.payment_repository import PaymentRepository


@dataclass(frozen=True, slots=True)
class PaymentStatusDTO:
    """
    Use-case return type for GET /checkPaymentStatus

    Note: only PAID and FAILED are reported as such, every other stored status reads as PENDING.
    """
    external_id: str
    status: PaymentStatus


class GetPaymentStatusUseCase:
    def __init__(self, *, payment_repo: PaymentRepository) -> None:
        self._payment_repo = payment_repo

    def execute(self, *, external_id: str) -> PaymentStatusDTO:
        payment: PaymentRecord | None = self._payment_repo.get(external_id)
        if payment is None:
            raise NotFoundError("Payment not found")

        return PaymentStatusDTO(
            external_id=payment.external_id,
            status=payment.public_status,
        )
