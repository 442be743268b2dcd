"""Restaurant and table catalog API endpoints"""

from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.database import get_db
from app.models.restaurant import Restaurant, Table
from app.schemas.auth import Session
from app.schemas.restaurant import (
    RestaurantCreate,
    RestaurantResponse,
    TableCreate,
    TableResponse,
)
from app.api.auth import get_current_session

router = APIRouter()
logger = structlog.get_logger()


async def _get_restaurant(db: AsyncSession, restaurant_id: UUID) -> Restaurant:
    result = await db.execute(select(Restaurant).where(Restaurant.id == restaurant_id))
    restaurant = result.scalar_one_or_none()

    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant not found")

    return restaurant


@router.post("/", response_model=RestaurantResponse, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    restaurant_data: RestaurantCreate,
    current_session: Session = Depends(get_current_session),
    db: AsyncSession = Depends(get_db),
):
    """Create a new restaurant"""
    restaurant = Restaurant(name=restaurant_data.name)
    db.add(restaurant)
    await db.commit()
    await db.refresh(restaurant)

    logger.info("Created restaurant", restaurant_id=str(restaurant.id))
    return restaurant


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
async def get_restaurant(
    restaurant_id: UUID,
    current_session: Session = Depends(get_current_session),
    db: AsyncSession = Depends(get_db),
):
    """Get restaurant details"""
    return await _get_restaurant(db, restaurant_id)


@router.post(
    "/{restaurant_id}/tables/",
    response_model=TableResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_table(
    restaurant_id: UUID,
    table_data: TableCreate,
    current_session: Session = Depends(get_current_session),
    db: AsyncSession = Depends(get_db),
):
    """Create a table at a restaurant, no seats are reserved yet"""
    await _get_restaurant(db, restaurant_id)

    start_date = table_data.start_date
    if start_date.tzinfo is None:
        start_date = start_date.replace(tzinfo=timezone.utc)

    table = Table(
        restaurant_id=restaurant_id,
        name=table_data.name,
        num_seats_available=table_data.num_seats_available,
        num_seats_reserved=0,
        start_date=start_date.astimezone(timezone.utc),
    )
    db.add(table)
    await db.commit()
    await db.refresh(table)

    logger.info(
        "Created table",
        restaurant_id=str(restaurant_id),
        table_id=str(table.id),
        num_seats_available=table.num_seats_available,
    )
    return table


@router.get("/{restaurant_id}/tables/", response_model=List[TableResponse])
async def list_tables(
    restaurant_id: UUID,
    start_date: Optional[date] = None,
    current_session: Session = Depends(get_current_session),
    db: AsyncSession = Depends(get_db),
):
    """List tables of a restaurant, optionally those open on one calendar date"""
    await _get_restaurant(db, restaurant_id)

    query = select(Table).where(Table.restaurant_id == restaurant_id)

    if start_date:
        day_start = datetime.combine(start_date, time.min, tzinfo=timezone.utc)
        query = query.where(
            Table.start_date >= day_start,
            Table.start_date < day_start + timedelta(days=1),
        )

    result = await db.execute(query.order_by(Table.start_date, Table.name))
    return result.scalars().all()


@router.get("/{restaurant_id}/tables/{table_id}", response_model=TableResponse)
async def get_table(
    restaurant_id: UUID,
    table_id: UUID,
    current_session: Session = Depends(get_current_session),
    db: AsyncSession = Depends(get_db),
):
    """Get table details"""
    result = await db.execute(
        select(Table).where(
            Table.id == table_id,
            Table.restaurant_id == restaurant_id,
        )
    )
    table = result.scalar_one_or_none()

    if not table:
        raise HTTPException(status_code=404, detail="Table not found")

    return table
