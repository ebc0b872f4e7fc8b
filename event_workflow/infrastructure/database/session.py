# event_workflow/infrastructure/database/session.py

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from event_workflow.config.settings import get_settings

Base = declarative_base()


def create_engine(database_url: Optional[str] = None, **engine_kwargs) -> AsyncEngine:
    """Async engine for database_url (defaults to settings). SQLite URLs skip pool sizing."""
    url = database_url or get_settings().database_url
    options = {"echo": False, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        options.update(pool_size=10, max_overflow=20)
    options.update(engine_kwargs)
    return create_async_engine(url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
        class_=AsyncSession,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create the events and event_status_history tables if missing."""
    # Registers the ORM classes on Base.metadata.
    from event_workflow.infrastructure.database import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
