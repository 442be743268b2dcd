"""
Async SQLAlchemy engine, session factory and FastAPI session dependency
"""

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.config import settings


def _engine_options() -> dict:
    options = {"echo": settings.db_echo}
    if not settings.is_sqlite:
        options["pool_pre_ping"] = True
        if settings.db_isolation_level:
            options["isolation_level"] = settings.db_isolation_level
    return options


engine = create_async_engine(settings.database_url, **_engine_options())

# Objects stay readable after commit so routers can serialize them
SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one session per request"""
    async with SessionLocal() as session:
        yield session
