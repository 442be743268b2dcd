"""Restaurant and table schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field


class RestaurantCreate(BaseModel):
    """Create restaurant request"""
    name: str = Field(min_length=1, max_length=255)


class RestaurantResponse(BaseModel):
    """Restaurant response"""
    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TableCreate(BaseModel):
    """Create table request"""
    name: str = Field(min_length=1, max_length=255)
    num_seats_available: int = Field(ge=1, le=4)
    start_date: datetime


class TableResponse(BaseModel):
    """Table response"""
    id: UUID
    restaurant_id: UUID
    name: Optional[str]
    num_seats_available: int
    num_seats_reserved: int
    start_date: datetime
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
