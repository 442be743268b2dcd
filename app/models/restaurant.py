"""Restaurant and table catalog models"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Restaurant(Base):
    """Restaurant owning reservable tables"""
    __tablename__ = "restaurants"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class Table(Base):
    """A reservable table at a restaurant for one start date"""
    __tablename__ = "tables"
    __table_args__ = (
        CheckConstraint(
            "num_seats_reserved >= 0 AND num_seats_reserved <= num_seats_available",
            name="ck_tables_seats_reserved_range",
        ),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(UUID(as_uuid=True), ForeignKey("restaurants.id"), nullable=False, index=True)
    name = Column(String(255))

    # Seat counters
    num_seats_available = Column(Integer, nullable=False)  # capacity
    num_seats_reserved = Column(Integer, nullable=False, default=0)

    start_date = Column(DateTime(timezone=True), nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    @property
    def num_seats_open(self) -> int:
        """Seats still available for reservation"""
        return self.num_seats_available - self.num_seats_reserved
