"""Database models"""

from app.models.restaurant import Restaurant, Table
from app.models.reservation import UserReservation, UserReservationCanceled

__all__ = [
    "Restaurant",
    "Table",
    "UserReservation",
    "UserReservationCanceled",
]
