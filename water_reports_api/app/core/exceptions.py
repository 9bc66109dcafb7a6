"""
Errors raised by the service layer.

Services raise these instead of returning sentinel values for failed
writes.  Each error carries the HTTP status code the API reports for
it; ``main.create_app`` registers a handler that turns any
``ServiceError`` into a ``{"message": ...}`` JSON response.
"""

from fastapi import status


class ServiceError(ValueError):
    """Base class for expected, recoverable service failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """A required field is missing or blank, or an email is malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
    """The referenced record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    """A unique value (the user email) is already taken."""

    # Registration conflicts are reported as 400, like other failed
    # registrations.
    status_code = status.HTTP_400_BAD_REQUEST
