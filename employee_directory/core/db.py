import logging
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from employee_directory.core.config import get_settings

logger = logging.getLogger(__name__)

# Declarative base shared by all models
Base = declarative_base()

# Process-wide handle, created by init_db() and released by close_db()
engine: Optional[AsyncEngine] = None
AsyncSessionLocal: Optional[async_sessionmaker] = None


async def init_db(database_url: Optional[str] = None) -> None:
    """
    Create the engine and session factory once per process and make sure the
    employees table exists. Calling it again while initialized is a no-op.
    """
    global engine, AsyncSessionLocal

    if engine is not None:
        return

    # models must be registered on Base.metadata before create_all
    from employee_directory.models import employee  # noqa: F401

    settings = get_settings()
    url = database_url or settings.DATABASE_URL

    engine = create_async_engine(
        url,
        echo=settings.SQL_ECHO,
        future=True,
    )
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
        class_=AsyncSession,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database initialized: %s", engine.url.render_as_string(hide_password=True))


async def close_db() -> None:
    global engine, AsyncSessionLocal

    if engine is None:
        return

    await engine.dispose()
    engine = None
    AsyncSessionLocal = None
    logger.info("Database connection closed")


async def get_db() -> AsyncIterator[AsyncSession]:
    # One session per request (FastAPI dependency)
    if AsyncSessionLocal is None:
        raise RuntimeError("Database not initialized, call init_db() first")

    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def ping_db() -> bool:
    """Run ``SELECT 1`` for the readiness probe."""
    if AsyncSessionLocal is None:
        return False
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.exception("Database readiness check failed")
        return False
