from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .config import Settings
from .models import Base


def build_engine(settings: Settings) -> AsyncEngine:
    options: dict[str, object] = {"echo": settings.echo_sql, "pool_pre_ping": True}
    if not settings.database_url.startswith("sqlite"):
        options["pool_recycle"] = 3600
    return create_async_engine(settings.database_url, **options)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
