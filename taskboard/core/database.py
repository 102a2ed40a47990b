"""
Database engine and session factory construction
Uses SQLAlchemy async engine (asyncpg for PostgreSQL, aiosqlite locally)
Reference: https://docs.sqlalchemy.org/en/20/orm/extensions/asyncio.html
"""
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from taskboard.core.config import Settings


# Base class for all database models
# Reference: https://docs.sqlalchemy.org/en/20/orm/declarative_styles.html
class Base(DeclarativeBase):
    """Base class for SQLAlchemy declarative models"""
    pass


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Build the async engine for the configured DATABASE_URL

    The engine is created once at process start and handed to the
    session factory; nothing in the application reaches for a global engine.

    Args:
        settings: Application settings

    Returns:
        AsyncEngine bound to DATABASE_URL

    Raises:
        ValueError: If DATABASE_URL is empty
    """
    if not settings.DATABASE_URL:
        raise ValueError(
            "DATABASE_URL environment variable is not set. "
            "Please set it in your .env file."
        )

    connect_args = {}
    if settings.DATABASE_URL.startswith("postgresql+asyncpg://"):
        # asyncpg-specific connection arguments
        # Reference: https://magicstack.github.io/asyncpg/current/api/index.html#connection
        connect_args = {
            "server_settings": {
                "application_name": "taskboard",
            },
        }

    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create the async session factory handed to the persistence gateway
    Reference: https://docs.sqlalchemy.org/en/20/orm/extensions/asyncio.html#session-basics
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Keep objects accessible after commit
        autoflush=False,
    )
