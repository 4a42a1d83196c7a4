from __future__ import annotations

from abc import ABC, abstractmethod

from lockerpay.core.entities.activation import LockerActivation
from lockerpay.core.entities.locker import Locker


class LockerRepository(ABC):
    @abstractmethod
    def get(self, locker_id: str) -> Locker | None:
        raise NotImplementedError

    @abstractmethod
    def add_if_absent(self, locker: Locker) -> bool:
        """Return True if inserted, False if a locker with the same id already exists."""
        raise NotImplementedError

    @abstractmethod
    def activate(self, activation: LockerActivation) -> bool:
        """
        Update an existing locker in place. Return False, without creating
        anything, when the locker is unknown.
        """
        raise NotImplementedError
