import logging
from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ledger.config import settings
from ledger.errors import MutationFailure

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    connect_args={"check_same_thread": False},
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields an async database session."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create all tables and enable WAL mode."""
    from sqlalchemy import text

    from ledger.models import Expense, FinanceEntry  # noqa: F401 - ensure models are registered
    from ledger.models.base import Base

    async with engine.begin() as conn:
        await conn.execute(text("PRAGMA journal_mode=WAL"))
        await conn.run_sync(Base.metadata.create_all)


async def commit_or_fail(db: AsyncSession, action: str, instance=None) -> None:
    """Commit, or roll back and raise MutationFailure.

    ``instance`` is refreshed after the commit so every column is loaded.
    """
    try:
        await db.commit()
        if instance is not None:
            await db.refresh(instance)
    except SQLAlchemyError as e:
        logger.exception("%s failed", action)
        await db.rollback()
        raise MutationFailure(f"Error {action.lower()}: {e}") from e
