"""
Async Database Configuration
SQLAlchemy 2.0 with async support
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from loguru import logger

from .config import Settings, settings as default_settings


# Base class for ORM models
Base = declarative_base()


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine with pool settings for the configured backend"""
    engine_args = {
        "echo": settings.DEBUG,
        "pool_pre_ping": True,
    }

    if settings.DATABASE_URL.startswith("sqlite"):
        # SQLite picks its own pool class
        pass
    elif settings.DEBUG:
        engine_args["poolclass"] = NullPool
    else:
        engine_args.update({
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "pool_recycle": settings.DB_POOL_RECYCLE,
        })

    return create_async_engine(settings.DATABASE_URL, **engine_args)


class Database:
    """Owns the engine and session factory for one application instance"""

    def __init__(self, settings: Optional[Settings] = None, engine: Optional[AsyncEngine] = None):
        self.settings = settings or default_settings
        self.engine: AsyncEngine = engine or build_engine(self.settings)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Async context manager for database sessions

        Usage:
            async with database.session() as session:
                result = await session.execute(query)
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def init_models(self) -> None:
        """Initialize database (create tables)"""
        # Register ORM models on Base.metadata
        import infrastructure.persistence.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close database connections"""
        await self.engine.dispose()

    async def health_check(self) -> bool:
        """Database health check"""
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return False
