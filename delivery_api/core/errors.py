from typing import Any, Optional


class ServiceError(Exception):
    """Base class for errors raised by the order and driver services."""

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(ServiceError):
    """Input is missing, empty or too long."""


class NotFoundError(ServiceError):
    """A referenced order or driver does not exist."""


class ConflictError(ServiceError):
    """The operation is forbidden by the entity's current state."""
