"""
Unit of Work for the reservation service

The unit of work owns one database transaction and exposes the store
operations the reservation service composes inside it. Rows fetched through
it are locked until the unit of work ends, so concurrent reservations on the
same table are serialized.

Usage:
    async with uow:
        table = await uow.fetch_table(restaurant_id, table_id)
        ...
        await uow.commit()

Leaving the block without commit rolls the transaction back; the rollback is
a no-op once commit has succeeded.
"""

from __future__ import annotations

import abc
from contextlib import contextmanager
from typing import Iterator, Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy import Select, delete, select
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.restaurant import Table
from app.models.reservation import UserReservation, UserReservationCanceled
from app.services.errors import ConflictError, InternalError

# serialization_failure, deadlock_detected
SERIALIZATION_FAILURE_CODES = {"40001", "40P01"}


class AbstractReserveUnitOfWork(abc.ABC):
    """Transaction boundary and store operations for reservations"""

    async def __aenter__(self) -> AbstractReserveUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def fetch_table(self, restaurant_id: UUID, table_id: UUID) -> Optional[Table]:
        """Fetch and lock a table, None when the restaurant has no such table"""
        raise NotImplementedError

    @abc.abstractmethod
    async def fetch_user_reservation(self, user_reservation_id: UUID) -> Optional[UserReservation]:
        """Fetch and lock an active reservation, None when it is not active"""
        raise NotImplementedError

    @abc.abstractmethod
    async def create_user_reservation(self, reservation: UserReservation) -> UserReservation:
        raise NotImplementedError

    @abc.abstractmethod
    async def create_user_reservation_canceled(
        self, canceled: UserReservationCanceled
    ) -> UserReservationCanceled:
        raise NotImplementedError

    @abc.abstractmethod
    async def delete_user_reservation(self, reservation: UserReservation) -> None:
        """Delete an active reservation, InternalError when no row was deleted"""
        raise NotImplementedError

    @abc.abstractmethod
    async def update_table(self, table: Table) -> Table:
        raise NotImplementedError


@contextmanager
def translate_db_errors() -> Iterator[None]:
    """Turn SQLAlchemy failures into reservation errors"""
    try:
        yield
    except DBAPIError as exc:
        code = getattr(exc.orig, "pgcode", None) or getattr(exc.orig, "sqlstate", None)
        if code in SERIALIZATION_FAILURE_CODES:
            raise ConflictError() from exc
        raise InternalError(str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        raise InternalError(str(exc)) from exc


def select_table_for_update(restaurant_id: UUID, table_id: UUID) -> Select:
    """Table row of a restaurant, locked until the transaction ends"""
    return (
        select(Table)
        .where(Table.restaurant_id == restaurant_id, Table.id == table_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )


def select_user_reservation_for_update(user_reservation_id: UUID) -> Select:
    return (
        select(UserReservation)
        .where(UserReservation.id == user_reservation_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )


class SqlAlchemyReserveUnitOfWork(AbstractReserveUnitOfWork):
    """SQLAlchemy implementation using SELECT ... FOR UPDATE row locks"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _commit(self) -> None:
        with translate_db_errors():
            await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    async def fetch_table(self, restaurant_id: UUID, table_id: UUID) -> Optional[Table]:
        stmt = select_table_for_update(restaurant_id, table_id)
        with translate_db_errors():
            result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def fetch_user_reservation(self, user_reservation_id: UUID) -> Optional[UserReservation]:
        stmt = select_user_reservation_for_update(user_reservation_id)
        with translate_db_errors():
            result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_user_reservation(self, reservation: UserReservation) -> UserReservation:
        with translate_db_errors():
            self.session.add(reservation)
            await self.session.flush()
        return reservation

    async def create_user_reservation_canceled(
        self, canceled: UserReservationCanceled
    ) -> UserReservationCanceled:
        with translate_db_errors():
            self.session.add(canceled)
            await self.session.flush()
        return canceled

    async def delete_user_reservation(self, reservation: UserReservation) -> None:
        stmt = delete(UserReservation).where(UserReservation.id == reservation.id)
        with translate_db_errors():
            result = await self.session.execute(stmt)
        if result.rowcount <= 0:
            raise InternalError(f"{result.rowcount} rows affected by delete")

    async def update_table(self, table: Table) -> Table:
        with translate_db_errors():
            self.session.add(table)
            await self.session.flush()
        return table


def get_unit_of_work(db: AsyncSession = Depends(get_db)) -> AbstractReserveUnitOfWork:
    """FastAPI dependency for the reservation unit of work"""
    return SqlAlchemyReserveUnitOfWork(db)
