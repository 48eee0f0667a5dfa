from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from config import settings


def _get_engine_kwargs(url: str | None = None):
    """Return dialect-specific engine options for SQLite vs PostgreSQL."""
    kwargs = {"echo": settings.debug}
    if "sqlite" in (url or settings.database_url).split(":")[0].lower():
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    return kwargs


def make_engine(url: str | None = None):
    return create_async_engine(url or settings.database_url, **_get_engine_kwargs(url))


def make_sessionmaker(bind) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


engine = make_engine()

AsyncSessionLocal = make_sessionmaker(engine)


class Base(DeclarativeBase):
    pass


async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(bind=None):
    # Model modules must be imported so their tables are registered on Base.metadata
    import models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
