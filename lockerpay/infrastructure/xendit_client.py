from __future__ import annotations

import logging

import httpx

from lockerpay.core.errors import TransientInfrastructureError
from lockerpay.core.use_cases.create_payment import QrPayment, QrPaymentRequest

logger = logging.getLogger(__name__)


class XenditQrClient:
    """
    PaymentGateway backed by the Xendit QR code API.

    Authenticates with HTTP basic auth (secret key as user, empty password).
    No retries: the caller decides whether to try again.
    """

    def __init__(
        self,
        *,
        secret_api_key: str,
        base_url: str,
        callback_url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._secret_api_key = secret_api_key
        self._base_url = base_url.rstrip("/")
        self._callback_url = callback_url
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport

    def create_qr_payment(self, request: QrPaymentRequest) -> QrPayment:
        body = {
            "external_id": request.external_id,
            "type": "DYNAMIC",
            "callback_url": self._callback_url,
            "amount": request.amount,
            "payer_email": request.payer_email,
        }

        try:
            with httpx.Client(
                base_url=self._base_url,
                auth=(self._secret_api_key, ""),
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = client.post("/qr_codes", json=body)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Error creating QRIS payment: %s %s", e.response.status_code, e.response.text)
            raise TransientInfrastructureError("Failed to create QRIS payment.") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error creating QRIS payment: %s", e)
            raise TransientInfrastructureError("Failed to create QRIS payment.") from e

        return QrPayment(
            qr_string=data.get("qr_string", ""),
            qr_url=data.get("qr_url"),
            external_id=data.get("external_id", request.external_id),
            status=data.get("status", ""),
        )
