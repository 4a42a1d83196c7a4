from __future__ import annotations

import base64
import json

import httpx
import pytest
from starlette.testclient import TestClient

import lockerpay.presentation.routers as routers
from lockerpay.core.errors import TransientInfrastructureError, ValidationError
from lockerpay.core.use_cases.create_payment import CreatePaymentUseCase, QrPayment, QrPaymentRequest
from lockerpay.infrastructure.xendit_client import XenditQrClient
from lockerpay.main import app
from lockerpay.tests.config_tests import CLIENT_TOKEN


class _RecordingGateway:
    def __init__(self) -> None:
        self.requests: list[QrPaymentRequest] = []

    def create_qr_payment(self, request: QrPaymentRequest) -> QrPayment:
        self.requests.append(request)
        return QrPayment(
            qr_string="00020101021226...",
            qr_url="https://qr.example/abc.png",
            external_id=request.external_id,
            status="ACTIVE",
        )


@pytest.fixture()
def gateway() -> _RecordingGateway:
    gw = _RecordingGateway()
    app.dependency_overrides[routers.get_payment_gateway] = lambda: gw
    yield gw
    app.dependency_overrides.pop(routers.get_payment_gateway, None)


def _body(**overrides):
    base = {"amount": 5000, "external_id": "L1_U9_1700000000", "payer_email": "u9@example.com"}
    base.update(overrides)
    return base


def test_create_payment_returns_qr_fields(api: TestClient, gateway: _RecordingGateway) -> None:
    res = api.post("/createQrisPayment", json=_body(), headers={"Authorization": f"Bearer {CLIENT_TOKEN}"})

    assert res.status_code == 200
    assert res.json() == {
        "qr_string": "00020101021226...",
        "qr_url": "https://qr.example/abc.png",
        "external_id": "L1_U9_1700000000",
        "status": "ACTIVE",
    }
    assert gateway.requests == [
        QrPaymentRequest(amount=5000, external_id="L1_U9_1700000000", payer_email="u9@example.com")
    ]


@pytest.mark.parametrize("authorization", [None, "Bearer wrong", CLIENT_TOKEN, "Basic " + CLIENT_TOKEN])
def test_create_payment_requires_bearer_token(
    api: TestClient, gateway: _RecordingGateway, authorization: str | None
) -> None:
    headers = {"Authorization": authorization} if authorization else {}

    res = api.post("/createQrisPayment", json=_body(), headers=headers)

    assert res.status_code == 401
    assert gateway.requests == []


@pytest.mark.parametrize("missing", ["amount", "external_id", "payer_email"])
def test_create_payment_missing_field_returns_400(api: TestClient, gateway: _RecordingGateway, missing: str) -> None:
    body = _body()
    del body[missing]

    res = api.post("/createQrisPayment", json=body, headers={"Authorization": f"Bearer {CLIENT_TOKEN}"})

    assert res.status_code == 400
    assert res.json()["detail"] == "Missing required payment parameters."
    assert gateway.requests == []


def test_use_case_rejects_non_positive_amount() -> None:
    with pytest.raises(ValidationError):
        CreatePaymentUseCase(gateway=_RecordingGateway()).execute(
            amount=-10, external_id="L1_U9_1", payer_email="u9@example.com"
        )


def test_xendit_client_posts_dynamic_qr_code_with_basic_auth() -> None:
    captured = {}

    def _handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "qr_string": "qr-data",
                "external_id": "L1_U9_1",
                "status": "ACTIVE",
            },
        )

    client = XenditQrClient(
        secret_api_key="xnd_secret",
        base_url="https://api.xendit.co/",
        callback_url="https://example.com/xenditPaymentCallback",
        transport=httpx.MockTransport(_handler),
    )

    payment = client.create_qr_payment(
        QrPaymentRequest(amount=5000, external_id="L1_U9_1", payer_email="u9@example.com")
    )

    assert payment == QrPayment(qr_string="qr-data", qr_url=None, external_id="L1_U9_1", status="ACTIVE")
    assert captured["url"] == "https://api.xendit.co/qr_codes"
    assert captured["auth"] == "Basic " + base64.b64encode(b"xnd_secret:").decode("ascii")
    assert captured["body"] == {
        "external_id": "L1_U9_1",
        "type": "DYNAMIC",
        "callback_url": "https://example.com/xenditPaymentCallback",
        "amount": 5000,
        "payer_email": "u9@example.com",
    }


@pytest.mark.parametrize(
    "handler",
    [
        lambda request: httpx.Response(400, json={"error_code": "API_VALIDATION_ERROR"}),
        lambda request: httpx.Response(200, content=b"<html>"),
    ],
)
def test_xendit_client_wraps_provider_failures(handler) -> None:
    client = XenditQrClient(
        secret_api_key="xnd_secret",
        base_url="https://api.xendit.co",
        callback_url="",
        transport=httpx.MockTransport(handler),
    )

    with pytest.raises(TransientInfrastructureError):
        client.create_qr_payment(QrPaymentRequest(amount=1, external_id="L1_U9_1", payer_email="u9@example.com"))


def test_provider_failure_maps_to_502(api: TestClient) -> None:
    class _BrokenGateway:
        def create_qr_payment(self, request: QrPaymentRequest) -> QrPayment:
            raise TransientInfrastructureError("Failed to create QRIS payment.")

    app.dependency_overrides[routers.get_payment_gateway] = lambda: _BrokenGateway()
    try:
        res = api.post("/createQrisPayment", json=_body(), headers={"Authorization": f"Bearer {CLIENT_TOKEN}"})
    finally:
        app.dependency_overrides.pop(routers.get_payment_gateway, None)

    assert res.status_code == 502
    assert res.json()["detail"] == "Failed to create QRIS payment."
