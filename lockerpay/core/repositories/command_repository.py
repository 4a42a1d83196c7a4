from __future__ import annotations

from abc import ABC, abstractmethod

from lockerpay.core.entities.command import LockerCommand


class CommandRepository(ABC):
    @abstractmethod
    def get(self, locker_id: str) -> LockerCommand | None:
        raise NotImplementedError

    @abstractmethod
    def put(self, command: LockerCommand) -> None:
        """Replace the pending command for command.locker_id."""
        raise NotImplementedError
