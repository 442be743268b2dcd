"""User reservation models"""

import uuid
from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base
from app.models.restaurant import utcnow


class UserReservation(Base):
    """Active reservation of seats at a table"""
    __tablename__ = "user_reservations"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(UUID(as_uuid=True), ForeignKey("restaurants.id"), nullable=False)
    table_id = Column(UUID(as_uuid=True), ForeignKey("tables.id"), nullable=False, index=True)
    profile_id = Column(UUID(as_uuid=True), nullable=False, index=True)

    num_seats = Column(Integer, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)  # copied from the table

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class UserReservationCanceled(Base):
    """Archive of a cancelled reservation, keyed by the original reservation id"""
    __tablename__ = "user_reservations_canceled"

    id = Column(UUID(as_uuid=True), primary_key=True)
    restaurant_id = Column(UUID(as_uuid=True), ForeignKey("restaurants.id"), nullable=False)
    table_id = Column(UUID(as_uuid=True), ForeignKey("tables.id"), nullable=False, index=True)
    profile_id = Column(UUID(as_uuid=True), nullable=False, index=True)

    num_seats = Column(Integer, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)

    # Cancellation timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
