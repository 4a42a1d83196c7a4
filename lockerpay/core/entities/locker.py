from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class LockerStatus(str, Enum):
    IDLE = "idle"
    ACTIVE = "aktif"


@dataclass(slots=True)
class Locker:
    locker_id: str
    status: LockerStatus = LockerStatus.IDLE
    user_id: str | None = None
    open_code: str | None = None
    start_time: datetime | None = None

    def activate(self, *, user_id: str, open_code: str, started_at: datetime) -> None:
        self.status = LockerStatus.ACTIVE
        self.user_id = user_id
        self.open_code = open_code
        self.start_time = started_at
