from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lockerpay.core.entities.activation import LockerActivation
from lockerpay.core.entities.locker import Locker
from lockerpay.core.errors import TransientInfrastructureError
from lockerpay.core.repositories.locker_repository import LockerRepository
from lockerpay.infrastructure.database import as_utc
from lockerpay.infrastructure.models.models import LockerModel


class LockerRepositoryImpl(LockerRepository):
    """
    Simple SQLAlchemy implementation for Locker.

    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, locker_id: str) -> Locker | None:
        try:
            row = self._db.get(LockerModel, locker_id)
        except SQLAlchemyError as e:
            raise TransientInfrastructureError("lockers store unavailable") from e
        if row is None:
            return None

        return Locker(
            locker_id=row.locker_id,
            status=row.status,
            user_id=row.user_id,
            open_code=row.open_code,
            start_time=as_utc(row.start_time),
        )

    def add_if_absent(self, locker: Locker) -> bool:
        try:
            if self._db.get(LockerModel, locker.locker_id) is not None:
                return False

            self._db.add(
                LockerModel(
                    locker_id=locker.locker_id,
                    status=locker.status,
                    user_id=locker.user_id,
                    open_code=locker.open_code,
                    start_time=locker.start_time,
                )
            )
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise TransientInfrastructureError("lockers store unavailable") from e
        return True

    def activate(self, activation: LockerActivation) -> bool:
        try:
            row = self._db.get(LockerModel, activation.locker_id)
            if row is None:
                return False

            locker = Locker(locker_id=row.locker_id)
            locker.activate(
                user_id=activation.user_id,
                open_code=activation.open_code,
                started_at=activation.activated_at,
            )
            row.status = locker.status
            row.user_id = locker.user_id
            row.open_code = locker.open_code
            row.start_time = locker.start_time

            self._db.add(row)
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise TransientInfrastructureError("lockers store unavailable") from e
        return True
