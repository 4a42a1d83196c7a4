from __future__ import annotations

import hmac
import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.orm import Session

from lockerpay.core.errors import (
    AuthenticationError,
    DomainRuleViolation,
    NotFoundError,
    TransientInfrastructureError,
    ValidationError,
)
from lockerpay.core.use_cases.create_payment import PaymentGateway
from lockerpay.core.use_cases.process_payment_callback import ActivationError, UnresolvedLockerError
from lockerpay.infrastructure.database import SessionLocal
from lockerpay.schemas.models import (
    CreatePaymentRequest,
    LockerCommand,
    LockerRegistration,
    LockerSummary,
    QrisPayment,
)
from lockerpay.services.lockerpay_service import (
    build_payment_gateway,
    create_payment_service,
    get_locker_command_service,
    get_locker_summary_service,
    get_payment_status_service,
    process_payment_callback_service,
    register_locker_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_db() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_payment_gateway() -> PaymentGateway:
    return build_payment_gateway()


async def read_json_body(request: Request) -> Any:
    """Raw JSON body, or None when it is empty or not JSON (validated later, after auth)."""
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


def require_client(authorization: str | None = Header(default=None)) -> None:
    from lockerpay.infrastructure.config import settings

    expected = settings.client_api_token
    scheme, _, token = (authorization or "").partition(" ")
    if not expected or scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="User must be authenticated.")
    if not hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8")):
        raise HTTPException(status_code=401, detail="User must be authenticated.")


@router.post("/xenditPaymentCallback", response_class=PlainTextResponse)
def post_xendit_payment_callback(
    payload: Any = Depends(read_json_body),
    x_callback_token: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> Response:
    """
    Payment result callback from Xendit

    Returns:
      - 200 "OK" once the status is recorded (and the locker activated on PAID)
      - 401 on a missing or wrong x-callback-token
      - 400 on a body without external_id/status
      - 500 on store failures, a PAID external_id with no locker/user, or a partially
        applied activation (the payment itself stays recorded)
    """
    try:
        result = process_payment_callback_service(x_callback_token, payload, db)
    except AuthenticationError:
        logger.warning("Invalid Xendit callback token")
        return PlainTextResponse("Unauthorized", status_code=401)
    except ValidationError as e:
        logger.warning("Invalid event payload: %s", e)
        return PlainTextResponse("Bad Request", status_code=400)
    except UnresolvedLockerError as e:
        logger.error("Payment recorded as PAID but no locker could be resolved: %s", e)
        return PlainTextResponse("Internal Server Error", status_code=500)
    except ActivationError as e:
        logger.error(
            "Payment recorded but locker %s not fully activated (locker_activated=%s, command_issued=%s): %s",
            e.locker_id,
            e.progress.locker_activated,
            e.progress.command_issued,
            e,
        )
        return PlainTextResponse("Internal Server Error", status_code=500)
    except Exception:
        logger.exception("Error processing Xendit payment callback")
        return PlainTextResponse("Internal Server Error", status_code=500)

    logger.info(
        "Payment %s recorded as %s (activated locker: %s)",
        result["external_id"],
        result["status"],
        result["activated_locker"],
    )
    return PlainTextResponse("OK", status_code=200)


@router.get("/checkPaymentStatus")
def get_check_payment_status(request: Request, db: Session = Depends(get_db)) -> JSONResponse:
    """
    Get payment status by external_id

    `lockerId` is the legacy name of the same parameter; it has always carried the
    payment external_id. `external_id` wins when both are given.
    """
    values = request.query_params.getlist("external_id") or request.query_params.getlist("lockerId")
    if len(values) != 1 or not values[0]:
        return JSONResponse({"error": "Missing or invalid external_id"}, status_code=400)

    try:
        result = get_payment_status_service(values[0], db)
    except NotFoundError:
        return JSONResponse({"status": "PENDING"}, status_code=404)
    except Exception:
        logger.exception("Error checking payment status")
        return JSONResponse({"error": "Internal Server Error"}, status_code=500)

    return JSONResponse({"status": result.status.value}, status_code=200)


@router.post("/createQrisPayment", response_model=QrisPayment, dependencies=[Depends(require_client)])
def post_create_qris_payment(
    body: CreatePaymentRequest,
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> QrisPayment:
    """
    Create a dynamic QRIS code with the payment provider
    """
    try:
        return create_payment_service(body, gateway)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TransientInfrastructureError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/lockers", response_model=LockerSummary, status_code=201)
def post_lockers(body: LockerRegistration, db: Session = Depends(get_db)) -> LockerSummary:
    """
    Register an idle locker
    """
    try:
        return register_locker_service(body, db)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DomainRuleViolation as e:
        raise HTTPException(status_code=409, detail=str(e))
    except TransientInfrastructureError as e:
        logger.error("Locker registration failed: %s", e)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/lockers/{locker_id}", response_model=LockerSummary)
def get_lockers_locker_id(locker_id: str, db: Session = Depends(get_db)) -> LockerSummary:
    """
    Get locker state
    """
    try:
        return get_locker_summary_service(locker_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TransientInfrastructureError as e:
        logger.error("Locker lookup failed: %s", e)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/lockers/{locker_id}/command", response_model=LockerCommand)
def get_lockers_locker_id_command(locker_id: str, db: Session = Depends(get_db)) -> LockerCommand:
    """
    Get the pending hardware command for a locker
    """
    try:
        return get_locker_command_service(locker_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TransientInfrastructureError as e:
        logger.error("Command lookup failed: %s", e)
        raise HTTPException(status_code=500, detail="Internal Server Error")
