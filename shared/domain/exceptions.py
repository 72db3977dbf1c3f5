"""
Domain Exceptions

Errors raised by domain and application code. Each carries the HTTP
status the API layer answers with, so views never branch on error types.
"""


class DomainError(Exception):
    """Base class for all errors raised by the booking core"""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Malformed or out-of-range input"""


class InvalidTransitionError(ValidationError):
    """Requested status change is not in the transition table"""


class AuthorizationError(DomainError):
    """Actor role or ownership does not permit the operation"""

    status_code = 403


class NotFoundError(DomainError):
    """Referenced record does not exist"""

    status_code = 404


class ConflictError(DomainError):
    """Uniqueness violation (e.g. second review on the same target)"""

    status_code = 409


class BookingCreationError(DomainError):
    """Persistence failed while creating a booking; nothing was stored"""

    status_code = 500


class NotificationPersistenceError(DomainError):
    """An in-app notification could not be stored"""

    status_code = 500
