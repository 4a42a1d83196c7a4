from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class CommandType(str, Enum):
    OPEN = "open"


@dataclass(frozen=True, slots=True)
class LockerCommand:
    """
    Latest pending instruction for a locker's hardware. One per locker; a new
    command replaces the previous one.
    """
    locker_id: str
    command: CommandType
    open_code: str
    timestamp: datetime
