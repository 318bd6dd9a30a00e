from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from veranstalter.core.config import DATABASE_URL, SQLALCHEMY_ECHO
from veranstalter.models import Base

engine = create_async_engine(
    DATABASE_URL,
    echo=SQLALCHEMY_ECHO,
    future=True,
    pool_pre_ping=True,
)

async_session = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def get_db():
    async with async_session() as session:
        yield session


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Unit of work: commit on normal exit, rollback on any exception."""
    try:
        yield session
        await session.commit()
    except BaseException:
        await session.rollback()
        raise


async def init_models(bind=None) -> None:
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
