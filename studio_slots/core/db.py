from collections.abc import AsyncGenerator
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from studio_slots.core.config import settings


def _async_database_url(url: str) -> str:
    """Map a plain postgresql:// URL to asyncpg and strip psycopg-only params."""
    parsed = urlparse(url)
    if parsed.scheme != "postgresql":
        return url
    query = parse_qs(parsed.query, keep_blank_values=True)
    query.pop("sslmode", None)
    query.pop("channel_binding", None)
    new_query = urlencode(query, doseq=True)
    return urlunparse(
        ("postgresql+asyncpg", parsed.netloc, parsed.path, parsed.params, new_query, parsed.fragment)
    )


async_database_url = _async_database_url(settings.database_url)

if settings.is_sqlite:
    # Local/test database: one shared connection so :memory: survives across sessions
    engine = create_async_engine(
        async_database_url,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_async_engine(
        async_database_url,
        echo=settings.env == "development",
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        connect_args={"ssl": True},  # hosted Postgres requires SSL; asyncpg uses this instead of sslmode
    )

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create tables if using create_all; prefer Alembic in production."""
    import studio_slots.models  # noqa: F401 - register tables

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
