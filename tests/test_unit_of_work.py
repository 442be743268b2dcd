"""Tests for the SQLAlchemy reservation unit of work"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql
from uuid import uuid4

from app.models.restaurant import Table
from app.models.reservation import UserReservation, UserReservationCanceled
from app.services.errors import InternalError
from app.services.reservation_service import (
    CancelReservationCommand,
    ReserveService,
    ReserveTableCommand,
)
from app.services.unit_of_work import SqlAlchemyReserveUnitOfWork


class RecordingSession:
    """Session stand-in that keeps the executed statements"""

    def __init__(self):
        self.statements = []

    async def execute(self, stmt):
        self.statements.append(stmt)
        return self

    def scalar_one_or_none(self):
        return None


class FailingTableUpdateUnitOfWork(SqlAlchemyReserveUnitOfWork):
    """Flushes the table update, then fails before commit"""

    async def update_table(self, table: Table) -> Table:
        await super().update_table(table)
        raise InternalError("table update failed")


def postgres_sql(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


async def seats_reserved(db, table_id) -> int:
    result = await db.execute(select(Table.num_seats_reserved).where(Table.id == table_id))
    return result.scalar_one()


async def count_rows(db, model) -> int:
    result = await db.execute(select(func.count(model.id)))
    return result.scalar()


@pytest.mark.asyncio
async def test_fetch_table_locks_row():
    session = RecordingSession()

    assert await SqlAlchemyReserveUnitOfWork(session).fetch_table(uuid4(), uuid4()) is None

    sql = postgres_sql(session.statements[0])
    assert "FROM tables" in sql
    assert sql.endswith("FOR UPDATE")


@pytest.mark.asyncio
async def test_fetch_user_reservation_locks_row():
    session = RecordingSession()

    assert await SqlAlchemyReserveUnitOfWork(session).fetch_user_reservation(uuid4()) is None

    sql = postgres_sql(session.statements[0])
    assert "FROM user_reservations" in sql
    assert sql.endswith("FOR UPDATE")


@pytest.mark.asyncio
async def test_delete_missing_reservation_is_internal_error(test_db, test_table):
    restaurant_id, table_id = test_table.restaurant_id, test_table.id
    reservation = await ReserveService(SqlAlchemyReserveUnitOfWork(test_db)).reserve_table(
        ReserveTableCommand(
            restaurant_id=restaurant_id,
            table_id=table_id,
            profile_id=uuid4(),
            num_seats_reserved=1,
        )
    )

    uow = SqlAlchemyReserveUnitOfWork(test_db)
    async with uow:
        await uow.delete_user_reservation(reservation)
        await uow.commit()

    with pytest.raises(InternalError) as exc_info:
        async with uow:
            await uow.delete_user_reservation(reservation)

    assert exc_info.value.message == "0 rows affected by delete"
    assert await count_rows(test_db, UserReservation) == 0


@pytest.mark.asyncio
async def test_reserve_rolls_back_flushed_insert(test_db, test_table):
    """A failing table update discards the reservation already flushed"""
    restaurant_id, table_id = test_table.restaurant_id, test_table.id
    command = ReserveTableCommand(
        restaurant_id=restaurant_id,
        table_id=table_id,
        profile_id=uuid4(),
        num_seats_reserved=2,
    )

    with pytest.raises(InternalError):
        await ReserveService(FailingTableUpdateUnitOfWork(test_db)).reserve_table(command)

    assert await count_rows(test_db, UserReservation) == 0
    assert await seats_reserved(test_db, table_id) == 0


@pytest.mark.asyncio
async def test_cancel_rolls_back_flushed_changes(test_db, test_table):
    """A failing table update keeps the reservation active and unarchived"""
    restaurant_id, table_id = test_table.restaurant_id, test_table.id
    profile_id = uuid4()
    reservation = await ReserveService(SqlAlchemyReserveUnitOfWork(test_db)).reserve_table(
        ReserveTableCommand(
            restaurant_id=restaurant_id,
            table_id=table_id,
            profile_id=profile_id,
            num_seats_reserved=2,
        )
    )
    command = CancelReservationCommand(
        restaurant_id=restaurant_id,
        table_id=table_id,
        user_reservation_id=reservation.id,
        profile_id=profile_id,
    )

    with pytest.raises(InternalError):
        await ReserveService(FailingTableUpdateUnitOfWork(test_db)).cancel_reservation(command)

    assert await count_rows(test_db, UserReservation) == 1
    assert await count_rows(test_db, UserReservationCanceled) == 0
    assert await seats_reserved(test_db, table_id) == 2
