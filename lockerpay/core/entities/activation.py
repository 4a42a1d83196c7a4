from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from lockerpay.core.entities.command import CommandType, LockerCommand


@dataclass(frozen=True, slots=True)
class LockerActivation:
    """
    One logical transaction: hand a locker to a user and queue the matching open
    command. The store applies it as two independent writes (locker, then command).
    """
    locker_id: str
    user_id: str
    open_code: str
    activated_at: datetime

    def to_command(self) -> LockerCommand:
        return LockerCommand(
            locker_id=self.locker_id,
            command=CommandType.OPEN,
            open_code=self.open_code,
            timestamp=self.activated_at,
        )


@dataclass(frozen=True, slots=True)
class ActivationProgress:
    payment_recorded: bool = False
    locker_activated: bool = False
    command_issued: bool = False
