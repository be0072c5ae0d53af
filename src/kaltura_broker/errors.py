"""Errors raised by broker operations."""

from typing import Any


class BrokerError(Exception):
    """Base error for broker operations.

    Carries the HTTP status code the broker API answers with.
    """

    status_code = 500
    error_code: str | None = None

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(BrokerError):
    """Provisioning parameters are missing or malformed."""

    status_code = 400
    error_code = "ValidationError"


class RegistrationError(BrokerError):
    """The Kaltura partner registration call failed."""

    status_code = 502
    error_code = "RegistrationError"


class NotFoundError(BrokerError):
    """No record exists for the referenced instance."""

    status_code = 404


class PersistenceError(BrokerError):
    """The instance store operation failed."""

    status_code = 500
