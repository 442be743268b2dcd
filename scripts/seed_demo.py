#!/usr/bin/env python3
"""
Seed script to create a demo restaurant with tables for the coming week
"""

import asyncio
import uuid
from datetime import datetime, time, timedelta, timezone


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from app.database import SessionLocal, engine, Base
    from app.models.restaurant import Restaurant, Table
    from app.schemas.auth import Session
    from app.api.auth import create_session_token

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        # Check if demo restaurant already exists
        result = await db.execute(
            select(Restaurant).where(Restaurant.name == "Mario's Italian Kitchen")
        )
        existing = result.scalar_one_or_none()

        if existing:
            print("Demo data already exists. Skipping...")
            return

        print("Creating demo restaurant...")

        restaurant = Restaurant(id=uuid.uuid4(), name="Mario's Italian Kitchen")
        db.add(restaurant)
        await db.flush()

        print(f"Created restaurant: {restaurant.name} (ID: {restaurant.id})")

        # One evening seating per table for the next seven days
        tomorrow = datetime.now(timezone.utc).date() + timedelta(days=1)
        tables = []
        for day in range(7):
            start_date = datetime.combine(
                tomorrow + timedelta(days=day), time(19, 0), tzinfo=timezone.utc
            )
            for name, seats in [("Window", 2), ("Patio", 4), ("Booth", 4)]:
                tables.append(
                    Table(
                        restaurant_id=restaurant.id,
                        name=name,
                        num_seats_available=seats,
                        num_seats_reserved=0,
                        start_date=start_date,
                    )
                )

        db.add_all(tables)
        await db.commit()

    token = create_session_token(
        Session(
            account_id=uuid.uuid4(),
            profile_id=uuid.uuid4(),
            email="guest@example.com",
        )
    )

    print(f"""
Demo data created successfully!

Restaurant: Mario's Italian Kitchen
  ID: {restaurant.id}

Tables: {len(tables)} created

Guest session token:
  {token}
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
