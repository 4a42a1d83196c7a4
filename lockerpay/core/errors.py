from __future__ import annotations


class AuthenticationError(Exception):
    """Raise to map to HTTP 401."""


class ValidationError(Exception):
    """Raise to map to HTTP 400."""


class MalformedExternalIdError(ValidationError):
    """The external_id of a PAID callback does not resolve to a locker and a user."""


class NotFoundError(Exception):
    """Raise to map to HTTP 404."""


class DomainRuleViolation(Exception):
    """Raise to map to HTTP 409."""


class TransientInfrastructureError(Exception):
    """Store or network failure. Maps to HTTP 500 (502 for the payment gateway)."""
