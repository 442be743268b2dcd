"""Authentication schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel


class Session(BaseModel):
    """Authenticated session carried by the bearer token"""
    account_id: UUID
    profile_id: UUID
    email: str
    restaurant_id: Optional[UUID] = None  # set for restaurant owners


class TokenPayload(BaseModel):
    """JWT token payload"""
    sub: str  # Account ID
    profile_id: str
    email: str
    restaurant_id: Optional[str] = None
    exp: datetime
