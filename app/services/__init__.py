"""Reservation services"""

from app.services.errors import (
    ReserveError,
    NotFoundError,
    InvalidStateError,
    CapacityExceededError,
    InternalError,
    ConflictError,
)
from app.services.unit_of_work import AbstractReserveUnitOfWork, SqlAlchemyReserveUnitOfWork
from app.services.reservation_service import (
    ReserveService,
    ReserveTableCommand,
    CancelReservationCommand,
)

__all__ = [
    "ReserveError",
    "NotFoundError",
    "InvalidStateError",
    "CapacityExceededError",
    "InternalError",
    "ConflictError",
    "AbstractReserveUnitOfWork",
    "SqlAlchemyReserveUnitOfWork",
    "ReserveService",
    "ReserveTableCommand",
    "CancelReservationCommand",
]
