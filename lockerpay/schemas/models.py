from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class Status(Enum):
    PENDING = 'PENDING'
    PAID = 'PAID'
    FAILED = 'FAILED'


class PaymentStatus(BaseModel):
    status: Status


class Error(BaseModel):
    error: str


class CreatePaymentRequest(BaseModel):
    amount: float | None = None
    external_id: str | None = None
    payer_email: str | None = None


class QrisPayment(BaseModel):
    qr_string: str
    qr_url: str | None
    external_id: str
    status: str


class LockerRegistration(BaseModel):
    locker_id: str


class LockerSummary(BaseModel):
    locker_id: str
    status: str
    user_id: str | None
    open_code: str | None
    start_time: datetime | None


class Command(Enum):
    open = 'open'


class LockerCommand(BaseModel):
    locker_id: str
    command: Command
    open_code: str
    timestamp: datetime
