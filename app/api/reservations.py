"""Table reservation API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import structlog

from app.schemas.auth import Session
from app.schemas.reservation import (
    ReserveRequest,
    ReserveTablesItem,
    UserReservationResponse,
    UserReservationCanceledResponse,
    ErrorResponse,
)
from app.services.errors import ReserveError, status_for
from app.services.reservation_service import (
    ReserveService,
    ReserveTableCommand,
    CancelReservationCommand,
)
from app.services.unit_of_work import AbstractReserveUnitOfWork, get_unit_of_work
from app.api.auth import get_current_session

router = APIRouter()
logger = structlog.get_logger()

RESERVE_TABLE_ERR_CODE = "reservation.table.reserve.error"
RESERVE_TABLES_ERR_CODE = "reservation.tables.reserve.error"
CANCEL_RESERVATION_ERR_CODE = "reservation.table.cancel.error"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


def get_reserve_service(
    uow: AbstractReserveUnitOfWork = Depends(get_unit_of_work),
) -> ReserveService:
    return ReserveService(uow)


def error_response(code: str, error: ReserveError) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(error),
        content={"code": code, "message": error.message},
    )


@router.post(
    "/{table_id}/reserve/",
    response_model=UserReservationResponse,
    responses=ERROR_RESPONSES,
)
async def reserve_table(
    restaurant_id: UUID,
    table_id: UUID,
    request: ReserveRequest,
    current_session: Session = Depends(get_current_session),
    service: ReserveService = Depends(get_reserve_service),
):
    """Reserve seats at a table"""
    command = ReserveTableCommand(
        restaurant_id=restaurant_id,
        table_id=table_id,
        profile_id=current_session.profile_id,
        num_seats_reserved=request.num_seats_reserved,
    )

    try:
        return await service.reserve_table(command)
    except ReserveError as e:
        logger.warning(
            "Reserve table failed",
            code=RESERVE_TABLE_ERR_CODE,
            restaurant_id=str(restaurant_id),
            table_id=str(table_id),
            error=e.message,
        )
        return error_response(RESERVE_TABLE_ERR_CODE, e)


@router.post(
    "/reserve/",
    response_model=List[UserReservationResponse],
    responses=ERROR_RESPONSES,
)
async def reserve_tables(
    restaurant_id: UUID,
    requests: List[ReserveTablesItem],
    current_session: Session = Depends(get_current_session),
    service: ReserveService = Depends(get_reserve_service),
):
    """Reserve several tables at once, all or nothing"""
    commands = [
        ReserveTableCommand(
            restaurant_id=restaurant_id,
            table_id=item.table_id,
            profile_id=current_session.profile_id,
            num_seats_reserved=item.num_seats_reserved,
        )
        for item in requests
    ]

    try:
        return await service.reserve_tables(commands)
    except ReserveError as e:
        logger.warning(
            "Reserve tables failed",
            code=RESERVE_TABLES_ERR_CODE,
            restaurant_id=str(restaurant_id),
            error=e.message,
        )
        return error_response(RESERVE_TABLES_ERR_CODE, e)


@router.post(
    "/{table_id}/reservations/{user_reservation_id}/cancel/",
    response_model=UserReservationCanceledResponse,
    responses=ERROR_RESPONSES,
)
async def cancel_reservation(
    restaurant_id: UUID,
    table_id: UUID,
    user_reservation_id: UUID,
    current_session: Session = Depends(get_current_session),
    service: ReserveService = Depends(get_reserve_service),
):
    """Cancel an active reservation"""
    command = CancelReservationCommand(
        restaurant_id=restaurant_id,
        table_id=table_id,
        user_reservation_id=user_reservation_id,
        profile_id=current_session.profile_id,
    )

    try:
        return await service.cancel_reservation(command)
    except ReserveError as e:
        logger.warning(
            "Cancel reservation failed",
            code=CANCEL_RESERVATION_ERR_CODE,
            restaurant_id=str(restaurant_id),
            table_id=str(table_id),
            user_reservation_id=str(user_reservation_id),
            error=e.message,
        )
        return error_response(CANCEL_RESERVATION_ERR_CODE, e)
