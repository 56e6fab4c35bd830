from typing import Annotated, AsyncGenerator

from fastapi import Depends

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .config import settings

Base = declarative_base()


def _connect_args(url: str) -> dict:
    # asyncpg understands "ssl"; aiosqlite rejects unknown keyword arguments
    if url.startswith("postgresql+asyncpg"):
        return {"ssl": settings.DATABASE_SSL}
    return {}


engine = create_async_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    pool_recycle=1800,
    connect_args=_connect_args(settings.DATABASE_URL),
)

async_session_factory = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as sess:
        yield sess

# `db: SessionDep` in a route signature injects a request-scoped session.
SessionDep = Annotated[AsyncSession, Depends(get_db)]
