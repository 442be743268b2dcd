"""Reservation schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field


class ReserveRequest(BaseModel):
    """Reserve seats at the table named in the path"""
    table_id: Optional[UUID] = None  # path value wins
    num_seats_reserved: int = Field(gt=0)


class ReserveTablesItem(BaseModel):
    """One element of a batch reservation"""
    table_id: UUID
    num_seats_reserved: int = Field(gt=0)


class UserReservationResponse(BaseModel):
    """Active reservation response"""
    id: UUID
    restaurant_id: UUID
    table_id: UUID
    profile_id: UUID
    num_seats: int
    start_date: datetime
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserReservationCanceledResponse(UserReservationResponse):
    """Cancelled reservation response, id is the original reservation id"""


class ErrorResponse(BaseModel):
    """Error body returned by the reservation endpoints"""
    code: str
    message: str
