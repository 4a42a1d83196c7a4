from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from lockerpay.core.entities.command import CommandType, LockerCommand
from lockerpay.core.errors import NotFoundError
from lockerpay.core.repositories.command_repository import CommandRepository


@dataclass(frozen=True, slots=True)
class LockerCommandDTO:
    """
    Use-case return type for GET /lockers/{locker_id}/command
    """
    locker_id: str
    command: CommandType
    open_code: str
    timestamp: datetime


class GetLockerCommandUseCase:
    def __init__(self, *, command_repo: CommandRepository) -> None:
        self._command_repo = command_repo

    def execute(self, *, locker_id: str) -> LockerCommandDTO:
        command: LockerCommand | None = self._command_repo.get(locker_id)
        if command is None:
            raise NotFoundError("No pending command")

        return LockerCommandDTO(
            locker_id=command.locker_id,
            command=command.command,
            open_code=command.open_code,
            timestamp=command.timestamp,
        )
