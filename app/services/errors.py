"""Reservation domain errors"""


class ReserveError(Exception):
    """Base class for reservation failures, carries the HTTP status it maps to"""

    status_code = 400
    default_message = "reservation error"

    def __init__(self, message: str = "") -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ReserveError):
    status_code = 404
    default_message = "reserve not found"


class InvalidStateError(ReserveError):
    default_message = "invalid reservation state"


class CapacityExceededError(ReserveError):
    default_message = "not enough seats available"


class InternalError(ReserveError):
    default_message = "internal error"


class ConflictError(InternalError):
    """Concurrent transaction on the same rows, the request may be retried by the caller"""

    default_message = "reservation conflicts with a concurrent request"


def status_for(error: ReserveError) -> int:
    """Map a service error to its HTTP status"""
    return error.status_code
