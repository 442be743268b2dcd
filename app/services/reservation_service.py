"""Table reservation service"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Sequence
from uuid import UUID

import structlog

from app.models.reservation import UserReservation, UserReservationCanceled
from app.models.restaurant import utcnow
from app.services.errors import CapacityExceededError, InvalidStateError, NotFoundError
from app.services.unit_of_work import AbstractReserveUnitOfWork

logger = structlog.get_logger()

Clock = Callable[[], datetime]


def as_utc(value: datetime) -> datetime:
    """Naive datetimes coming back from the database are UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class ReserveTableCommand:
    """Reserve seats at one table; profile_id comes from the session"""
    restaurant_id: UUID
    table_id: UUID
    profile_id: UUID
    num_seats_reserved: int


@dataclass(frozen=True)
class CancelReservationCommand:
    restaurant_id: UUID
    table_id: UUID
    user_reservation_id: UUID
    profile_id: UUID


class ReserveService:
    """
    Reserves and cancels table seats.

    Every operation runs in one unit of work: the table row is locked before
    availability is checked and the reservation record and the table's
    reserved-seat counter are written in the same transaction.
    """

    def __init__(self, uow: AbstractReserveUnitOfWork, clock: Clock = utcnow) -> None:
        self.uow = uow
        self.clock = clock

    async def reserve_table(self, command: ReserveTableCommand) -> UserReservation:
        async with self.uow:
            reservation = await self._reserve(command)
            await self.uow.commit()

        logger.info(
            "Table reserved",
            restaurant_id=str(command.restaurant_id),
            table_id=str(command.table_id),
            user_reservation_id=str(reservation.id),
            num_seats=reservation.num_seats,
        )
        return reservation

    async def reserve_tables(self, commands: Sequence[ReserveTableCommand]) -> List[UserReservation]:
        """
        Reserve several tables in input order.

        The batch shares one unit of work: the first failing element aborts
        the batch and nothing from it is committed.
        """
        reservations: List[UserReservation] = []
        async with self.uow:
            for command in commands:
                reservations.append(await self._reserve(command))
            await self.uow.commit()

        logger.info(
            "Tables reserved",
            count=len(reservations),
            user_reservation_ids=[str(r.id) for r in reservations],
        )
        return reservations

    async def cancel_reservation(self, command: CancelReservationCommand) -> UserReservationCanceled:
        async with self.uow:
            reservation = await self.uow.fetch_user_reservation(command.user_reservation_id)
            if reservation is None or (
                reservation.restaurant_id != command.restaurant_id
                or reservation.table_id != command.table_id
            ):
                raise NotFoundError("user reservation not found")

            table = await self.uow.fetch_table(command.restaurant_id, command.table_id)
            if table is None:
                raise NotFoundError("table not found")

            now = self.clock()
            canceled = UserReservationCanceled(
                id=reservation.id,
                restaurant_id=reservation.restaurant_id,
                table_id=reservation.table_id,
                profile_id=reservation.profile_id,
                num_seats=reservation.num_seats,
                start_date=reservation.start_date,
                created_at=now,
                updated_at=now,
            )

            await self.uow.delete_user_reservation(reservation)
            canceled = await self.uow.create_user_reservation_canceled(canceled)

            # release the seats held by the reservation
            table.num_seats_reserved = table.num_seats_reserved - canceled.num_seats
            table.updated_at = now
            await self.uow.update_table(table)

            await self.uow.commit()

        logger.info(
            "Reservation cancelled",
            restaurant_id=str(command.restaurant_id),
            table_id=str(command.table_id),
            user_reservation_id=str(canceled.id),
            num_seats=canceled.num_seats,
        )
        return canceled

    async def _reserve(self, command: ReserveTableCommand) -> UserReservation:
        table = await self.uow.fetch_table(command.restaurant_id, command.table_id)
        if table is None:
            raise NotFoundError("table not found")

        now = self.clock()
        if as_utc(table.start_date) < as_utc(now):
            raise InvalidStateError("cannot reserve a table in the past")

        if command.num_seats_reserved <= 0:
            raise InvalidStateError("number of seats must be positive")

        if command.num_seats_reserved > table.num_seats_open:
            raise CapacityExceededError("not enough seats available")

        reservation = await self.uow.create_user_reservation(
            UserReservation(
                id=uuid.uuid4(),
                restaurant_id=command.restaurant_id,
                table_id=command.table_id,
                profile_id=command.profile_id,
                num_seats=command.num_seats_reserved,
                start_date=table.start_date,
                created_at=now,
                updated_at=now,
            )
        )

        table.num_seats_reserved = table.num_seats_reserved + reservation.num_seats
        table.updated_at = now
        await self.uow.update_table(table)
        return reservation
