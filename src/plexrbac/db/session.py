from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import MetaData
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from plexrbac.config import Settings, settings

# Naming conventions for database constraints.
# Without these, Alembic can't autogenerate consistent constraint names across migrations.
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",  # Index
    "uq": "uq_%(table_name)s_%(column_0_name)s",  # Unique constraint
    "ck": "ck_%(table_name)s_%(constraint_name)s",  # Check constraint
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",  # Foreign key
    "pk": "pk_%(table_name)s",  # Primary key
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    SQLAlchemy uses Base.metadata to track all registered models and their
    table schemas. The naming_convention keeps constraint names predictable
    for Alembic.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def engine_options(config: Settings) -> dict[str, Any]:
    """Engine keyword arguments for the configured backend.

    Pool sizing only applies to server databases; SQLite picks its own pool.
    Driver options go straight to the DBAPI connect() call.
    """
    options: dict[str, Any] = {"echo": config.db_echo}
    backend = make_url(config.database_url).get_backend_name()

    if backend == "sqlite":
        options["connect_args"] = {"timeout": config.db_statement_timeout}
        return options

    options.update(
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_timeout=config.db_pool_timeout,
        pool_recycle=config.db_pool_recycle,
        pool_pre_ping=config.db_pool_pre_ping,
        connect_args={"command_timeout": config.db_statement_timeout},  # asyncpg
    )
    return options


# Async engine; the pool is reused across requests.
engine = create_async_engine(settings.database_url, **engine_options(settings))

# expire_on_commit=False keeps objects usable after commit without re-querying,
# since accessing expired attributes would trigger sync I/O.
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides a database session per request.

    Commits on success, rolls back on exception. Repositories never call
    commit() or rollback() directly.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables() -> None:
    """Create missing tables. Development convenience; deployments use Alembic."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def shutdown() -> None:
    """Close all pooled database connections."""
    await engine.dispose()
