"""
Ideabox – Async SQLAlchemy engine, session, and declarative base.

Transaction contract: ``ideabox.services`` only ever flush. A router
commits once the whole action succeeded; ``get_db`` commits whatever is
left on a clean exit and rolls back when the request raised.
"""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from ideabox.config import settings


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """Make SQLite honour ``ondelete="CASCADE"`` on ideas (off by default per connection)."""

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ── Engine ──
engine = create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

if settings.DATABASE_URL.startswith("sqlite"):
    enable_sqlite_foreign_keys(engine)

# ── Session factory ──
# Objects stay readable after commit so a handler can still build its
# redirect URL from the idea it just saved.
async_session = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Declarative base ──
class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


# ── Dependency for FastAPI routes ──
async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield one session per request; commit on success, roll back on error."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
