from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from lockerpay.core.errors import ValidationError


@dataclass(frozen=True, slots=True)
class QrPaymentRequest:
    amount: float
    external_id: str
    payer_email: str


@dataclass(frozen=True, slots=True)
class QrPayment:
    qr_string: str
    qr_url: str | None
    external_id: str
    status: str


class PaymentGateway(Protocol):
    """
    Outbound side of the payment provider.
    The Xendit client in infrastructure implements this via create_qr_payment().
    """

    def create_qr_payment(self, request: QrPaymentRequest) -> QrPayment:
        raise NotImplementedError


class CreatePaymentUseCase:
    """
    Ask the provider for a dynamic QR code. The provider later reports the
    outcome through the payment callback, keyed by the same external_id.
    """

    def __init__(self, *, gateway: PaymentGateway) -> None:
        self._gateway = gateway

    def execute(self, *, amount: float | None, external_id: str | None, payer_email: str | None) -> QrPayment:
        if not amount or not external_id or not payer_email:
            raise ValidationError("Missing required payment parameters.")
        if isinstance(amount, bool) or amount <= 0:
            raise ValidationError("amount must be a positive number")

        return self._gateway.create_qr_payment(
            QrPaymentRequest(amount=amount, external_id=external_id, payer_email=payer_email)
        )
