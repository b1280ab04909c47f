"""Database configuration and async session management."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from .config import settings


def create_engine(database_url: str = settings.database_url, echo: bool = False) -> AsyncEngine:
    """Create an async engine, using a single shared connection for SQLite."""
    is_sqlite = "sqlite" in database_url
    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=not is_sqlite,
        # Use StaticPool for SQLite so in-memory databases survive across sessions
        poolclass=StaticPool if is_sqlite else None,
        connect_args={"check_same_thread": False} if is_sqlite else {},
    )


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to ``bind``."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = create_engine(settings.database_url, echo=settings.debug and settings.log_level == "DEBUG")

async_session_factory = create_session_factory(engine)

# Create declarative base for models
Base = declarative_base()


async def init_db(bind: AsyncEngine = engine) -> None:
    """Initialize the database by creating all tables."""
    # Register the mapped classes on Base.metadata before create_all
    from .. import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db(bind: AsyncEngine = engine) -> None:
    """Close database connections."""
    await bind.dispose()
