from __future__ import annotations

from dataclasses import dataclass

from lockerpay.core.entities.locker import Locker
from lockerpay.core.errors import DomainRuleViolation, ValidationError
from lockerpay.core.repositories.locker_repository import LockerRepository


@dataclass(frozen=True, slots=True)
class RegisterLockerResult:
    locker_id: str


class RegisterLockerUseCase:
    """Adds an idle locker so that paid callbacks can activate it."""

    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def execute(self, *, locker_id: str) -> RegisterLockerResult:
        if not locker_id or "_" in locker_id:
            # "_" separates locker and user inside payment external ids
            raise ValidationError("locker_id must be a non-empty string without '_'")

        if not self._locker_repo.add_if_absent(Locker(locker_id=locker_id)):
            raise DomainRuleViolation(f"Locker {locker_id!r} is already registered")

        return RegisterLockerResult(locker_id=locker_id)
