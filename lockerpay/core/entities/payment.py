from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"


@dataclass(slots=True)
class PaymentRecord:
    """
    Latest known state of one payment attempt, keyed by the provider external_id.

    `status` is kept as the raw provider string: the provider may send values
    outside PaymentStatus and those are stored verbatim.
    """
    external_id: str
    status: str
    updated_at: datetime | None = None
    raw_event: dict[str, Any] = field(default_factory=dict)

    @property
    def public_status(self) -> PaymentStatus:
        if self.status == PaymentStatus.PAID.value:
            return PaymentStatus.PAID
        if self.status == PaymentStatus.FAILED.value:
            return PaymentStatus.FAILED
        return PaymentStatus.PENDING
