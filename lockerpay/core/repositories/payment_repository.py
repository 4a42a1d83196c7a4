from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from lockerpay.core.entities.payment import PaymentRecord


class PaymentRepository(ABC):
    @abstractmethod
    def get(self, external_id: str) -> PaymentRecord | None:
        raise NotImplementedError

    @abstractmethod
    def merge(self, external_id: str, fields: Mapping[str, Any]) -> None:
        """
        Create the record if missing, otherwise update only the given fields.
        Fields absent from `fields` keep their stored values.
        """
        raise NotImplementedError
