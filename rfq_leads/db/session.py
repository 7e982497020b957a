"""Database session and engine."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from rfq_leads.config import settings
from rfq_leads.db.models import Base

DATABASE_URL = settings.database_url

_engine_kwargs: dict = {"echo": settings.log_level.upper() == "DEBUG"}
if DATABASE_URL.startswith("sqlite"):
    # aiosqlite connections are bound to the loop that opened them
    _engine_kwargs["poolclass"] = NullPool

engine = create_async_engine(DATABASE_URL, **_engine_kwargs)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def init_db():
    """Create tables if they don't exist (safe to call on every startup)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
