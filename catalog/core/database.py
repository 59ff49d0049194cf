from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base
from fastapi import Depends
from catalog.core.config import get_settings

settings = get_settings()
engine = create_async_engine(
    settings.database_url,
    echo=settings.echo_sql,
    future=True
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False
)

def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return AsyncSessionLocal

async def get_session(session_factory: async_sessionmaker[AsyncSession]=Depends(get_sessionmaker)):
    async with session_factory() as session:
        yield session

Base = declarative_base()
