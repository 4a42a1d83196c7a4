from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lockerpay.core.entities.command import CommandType, LockerCommand
from lockerpay.core.errors import TransientInfrastructureError
from lockerpay.core.repositories.command_repository import CommandRepository
from lockerpay.infrastructure.database import as_utc
from lockerpay.infrastructure.models.models import CommandModel


class CommandRepositoryImpl(CommandRepository):
    """SQLAlchemy outbox holding the latest command per locker."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, locker_id: str) -> LockerCommand | None:
        try:
            row = self._db.get(CommandModel, locker_id)
        except SQLAlchemyError as e:
            raise TransientInfrastructureError("commands store unavailable") from e
        if row is None:
            return None

        return LockerCommand(
            locker_id=row.locker_id,
            command=CommandType(row.command) if not isinstance(row.command, CommandType) else row.command,
            open_code=row.open_code,
            timestamp=as_utc(row.timestamp),
        )

    def put(self, command: LockerCommand) -> None:
        try:
            row = self._db.get(CommandModel, command.locker_id)
            if row is None:
                row = CommandModel(locker_id=command.locker_id)

            row.command = command.command
            row.open_code = command.open_code
            row.timestamp = command.timestamp

            self._db.add(row)
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise TransientInfrastructureError("commands store unavailable") from e
