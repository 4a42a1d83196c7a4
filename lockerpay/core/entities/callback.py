from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from lockerpay.core.errors import MalformedExternalIdError, ValidationError

EXTERNAL_ID_SEPARATOR = "_"


@dataclass(frozen=True, slots=True)
class Correlation:
    """Which locker and which user a payment belongs to."""
    locker_id: str
    user_id: str


def parse_external_id(external_id: str) -> Correlation:
    """
    Split "<lockerId>_<userId>_<timestamp>" into its locker and user parts.

    Anything after the second segment is ignored. Raises MalformedExternalIdError
    when either of the first two segments is missing or empty.
    """
    parts = external_id.split(EXTERNAL_ID_SEPARATOR)
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise MalformedExternalIdError(
            f"external_id {external_id!r} does not match '<lockerId>_<userId>_<timestamp>'"
        )
    return Correlation(locker_id=parts[0], user_id=parts[1])


@dataclass(frozen=True, slots=True)
class PaymentCallback:
    """Validated, immutable view of one provider callback body."""
    external_id: str
    status: str
    raw: Mapping[str, Any]

    @classmethod
    def from_payload(cls, payload: Any) -> PaymentCallback:
        if not isinstance(payload, dict):
            raise ValidationError("callback body must be a JSON object")

        external_id = payload.get("external_id")
        status = payload.get("status")
        if not isinstance(external_id, str) or not external_id:
            raise ValidationError("callback body must carry a non-empty 'external_id'")
        if not isinstance(status, str) or not status:
            raise ValidationError("callback body must carry a non-empty 'status'")

        return cls(external_id=external_id, status=status, raw=MappingProxyType(dict(payload)))

    def correlation(self) -> Correlation:
        """
        Prefer explicit metadata.locker_id / metadata.user_id from the provider and
        fall back to decoding the external_id.
        """
        metadata = self.raw.get("metadata")
        if isinstance(metadata, dict):
            locker_id = metadata.get("locker_id")
            user_id = metadata.get("user_id")
            if isinstance(locker_id, str) and locker_id and isinstance(user_id, str) and user_id:
                return Correlation(locker_id=locker_id, user_id=user_id)
        return parse_external_id(self.external_id)
