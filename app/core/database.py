from sqlalchemy import text  # Import text for PRAGMA
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings

DATABASE_URI = str(settings.SQLALCHEMY_DATABASE_URI)
IS_SQLITE = "sqlite" in DATABASE_URI

engine_args = {"echo": False, "pool_pre_ping": True}

if not IS_SQLITE:
    engine_args.update({"pool_size": 5, "max_overflow": 5, "pool_recycle": 300})

engine = create_async_engine(DATABASE_URI, **engine_args)
AsyncSessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    async with AsyncSessionLocal() as session:
        # Enable WAL mode for SQLite to reduce locking
        if IS_SQLITE:
            await session.execute(text("PRAGMA journal_mode=WAL;"))
            await session.execute(text("PRAGMA synchronous=NORMAL;"))

        yield session
