from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lockerpay.core.entities.payment import PaymentRecord
from lockerpay.core.errors import TransientInfrastructureError
from lockerpay.core.repositories.payment_repository import PaymentRepository
from lockerpay.infrastructure.database import as_utc
from lockerpay.infrastructure.models.models import PaymentModel


class PaymentRepositoryImpl(PaymentRepository):
    """
    SQLAlchemy implementation of the payment record store.

    Responsibilities:
      - translate between PaymentRecord entities and `payments` rows
      - field-level merge writes (only the fields passed in are touched)

    SQLAlchemy errors surface as TransientInfrastructureError.
    """

    _MERGEABLE_FIELDS = frozenset({"status", "updated_at", "raw_event"})

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, external_id: str) -> PaymentRecord | None:
        try:
            row = self._db.get(PaymentModel, external_id)
        except SQLAlchemyError as e:
            raise TransientInfrastructureError("payments store unavailable") from e
        if row is None:
            return None

        return PaymentRecord(
            external_id=row.external_id,
            status=row.status or "",
            updated_at=as_utc(row.updated_at),
            raw_event=dict(row.raw_event or {}),
        )

    def merge(self, external_id: str, fields: Mapping[str, Any]) -> None:
        unknown = set(fields) - self._MERGEABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown payment fields: {sorted(unknown)}")

        try:
            row = self._db.get(PaymentModel, external_id)
            if row is None:
                row = PaymentModel(external_id=external_id)

            for name, value in fields.items():
                setattr(row, name, value)

            self._db.add(row)
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise TransientInfrastructureError("payments store unavailable") from e
