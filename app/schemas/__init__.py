"""Pydantic schemas for request/response validation"""

from app.schemas.auth import Session, TokenPayload
from app.schemas.restaurant import (
    RestaurantCreate,
    RestaurantResponse,
    TableCreate,
    TableResponse,
)
from app.schemas.reservation import (
    ReserveRequest,
    ReserveTablesItem,
    UserReservationResponse,
    UserReservationCanceledResponse,
    ErrorResponse,
)

__all__ = [
    "Session",
    "TokenPayload",
    "RestaurantCreate",
    "RestaurantResponse",
    "TableCreate",
    "TableResponse",
    "ReserveRequest",
    "ReserveTablesItem",
    "UserReservationResponse",
    "UserReservationCanceledResponse",
    "ErrorResponse",
]
