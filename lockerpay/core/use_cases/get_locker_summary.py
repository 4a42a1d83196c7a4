from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from lockerpay.core.entities.locker import Locker, LockerStatus
from lockerpay.core.errors import NotFoundError
from lockerpay.core.repositories.locker_repository import LockerRepository


@dataclass(frozen=True, slots=True)
class LockerSummaryDTO:
    """
    Use-case return type for GET /lockers/{locker_id}
    """
    locker_id: str
    status: LockerStatus
    user_id: str | None
    open_code: str | None
    start_time: datetime | None


class GetLockerSummaryUseCase:
    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def execute(self, *, locker_id: str) -> LockerSummaryDTO:
        locker: Locker | None = self._locker_repo.get(locker_id)
        if locker is None:
            raise NotFoundError("Locker not found")

        return LockerSummaryDTO(
            locker_id=locker.locker_id,
            status=locker.status,
            user_id=locker.user_id,
            open_code=locker.open_code,
            start_time=locker.start_time,
        )
