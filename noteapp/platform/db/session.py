from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from noteapp.platform.config import settings


def _engine_options(database_url: str) -> dict:
    # SQLite connections are cheap and must not be shared across event loops.
    if database_url.startswith("sqlite"):
        return {"poolclass": NullPool}
    return {
        "pool_pre_ping": True,
        "pool_recycle": 1800,
        "pool_size": 20,
        "max_overflow": 30,  # (burst capacity)
        "pool_timeout": 30,
    }


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    future=True,
    **_engine_options(settings.DATABASE_URL),
)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, autoflush=False, autocommit=False)


async def get_db():
    async with SessionLocal() as session:
        yield session


async def init_models():
    """Create any missing tables for the registered models."""
    from noteapp.platform.db.base import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
