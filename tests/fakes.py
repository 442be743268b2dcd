"""In-memory reservation store for service tests"""

import asyncio
from datetime import datetime
from typing import Dict, Optional, Tuple
from uuid import UUID, uuid4

from app.models.restaurant import Table
from app.models.reservation import UserReservation, UserReservationCanceled
from app.services.errors import InternalError
from app.services.unit_of_work import AbstractReserveUnitOfWork


def _copy(row):
    """Detached copy of a model instance, column values only"""
    return type(row)(**{column.key: getattr(row, column.key) for column in row.__table__.columns})


class InMemoryReserveStore:
    """
    Committed state shared by the units of work built on it.

    The lock is held for the whole unit of work, like the table row lock in
    the database implementation.
    """

    def __init__(self) -> None:
        self.tables: Dict[Tuple[UUID, UUID], Table] = {}
        self.user_reservations: Dict[UUID, UserReservation] = {}
        self.user_reservations_canceled: Dict[UUID, UserReservationCanceled] = {}
        self.lock = asyncio.Lock()

    def add_table(
        self,
        start_date: datetime,
        num_seats_available: int = 4,
        num_seats_reserved: int = 0,
        restaurant_id: Optional[UUID] = None,
    ) -> Table:
        table = Table(
            id=uuid4(),
            restaurant_id=restaurant_id or uuid4(),
            name="T1",
            num_seats_available=num_seats_available,
            num_seats_reserved=num_seats_reserved,
            start_date=start_date,
            created_at=start_date,
            updated_at=start_date,
        )
        self.tables[(table.restaurant_id, table.id)] = table
        return table

    def table(self, table: Table) -> Table:
        return self.tables[(table.restaurant_id, table.id)]

    def unit_of_work(self, fail_on: Optional[str] = None) -> "InMemoryReserveUnitOfWork":
        return InMemoryReserveUnitOfWork(self, fail_on=fail_on)


class InMemoryReserveUnitOfWork(AbstractReserveUnitOfWork):
    """Works on copies of the committed state, publishes them on commit"""

    def __init__(self, store: InMemoryReserveStore, fail_on: Optional[str] = None) -> None:
        self.store = store
        self.fail_on = fail_on
        self.committed = False
        self._locked = False

    async def __aenter__(self) -> "InMemoryReserveUnitOfWork":
        await self.store.lock.acquire()
        self._locked = True
        self.committed = False
        self._tables = {key: _copy(t) for key, t in self.store.tables.items()}
        self._reservations = {key: _copy(r) for key, r in self.store.user_reservations.items()}
        self._canceled = {key: _copy(c) for key, c in self.store.user_reservations_canceled.items()}
        return self

    def _fail_if_requested(self, operation: str) -> None:
        if self.fail_on == operation:
            raise InternalError(f"simulated {operation} failure")

    async def _commit(self) -> None:
        self._fail_if_requested("commit")
        self.store.tables = self._tables
        self.store.user_reservations = self._reservations
        self.store.user_reservations_canceled = self._canceled
        self.committed = True
        self._release()

    async def rollback(self) -> None:
        self._release()

    def _release(self) -> None:
        if self._locked:
            self._locked = False
            self.store.lock.release()

    async def fetch_table(self, restaurant_id: UUID, table_id: UUID) -> Optional[Table]:
        self._fail_if_requested("fetch_table")
        # let concurrent units of work run up to the lock
        await asyncio.sleep(0)
        return self._tables.get((restaurant_id, table_id))

    async def fetch_user_reservation(self, user_reservation_id: UUID) -> Optional[UserReservation]:
        self._fail_if_requested("fetch_user_reservation")
        return self._reservations.get(user_reservation_id)

    async def create_user_reservation(self, reservation: UserReservation) -> UserReservation:
        self._fail_if_requested("create_user_reservation")
        self._reservations[reservation.id] = reservation
        return reservation

    async def create_user_reservation_canceled(
        self, canceled: UserReservationCanceled
    ) -> UserReservationCanceled:
        self._fail_if_requested("create_user_reservation_canceled")
        self._canceled[canceled.id] = canceled
        return canceled

    async def delete_user_reservation(self, reservation: UserReservation) -> None:
        self._fail_if_requested("delete_user_reservation")
        if self._reservations.pop(reservation.id, None) is None:
            raise InternalError("0 rows affected by delete")

    async def update_table(self, table: Table) -> Table:
        self._fail_if_requested("update_table")
        self._tables[(table.restaurant_id, table.id)] = table
        return table
