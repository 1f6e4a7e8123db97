import datetime
import os

import pytest
import pytest_asyncio

# Set test environment variables BEFORE any app imports
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TESTING", "1")
os.environ.setdefault("SEED_CATEGORIES", "false")
os.environ.setdefault("SEED_TEMPLATES", "false")
os.environ.setdefault("APP_CONFIG_ADMIN_TOKEN", "admin_test")

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.models import Base, Habit, User
from domain.models.enums import CategoryKey, FrequencyType, TrackingMode

DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_session():
    engine = create_async_engine(DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def user(db_session):
    u = User(id="u_test", token_identifier="token_test", name="Tester", current_streak=0, best_streak=0)
    db_session.add(u)
    await db_session.commit()
    return u


@pytest.fixture
def make_habit(db_session):
    """Factory: await make_habit(user_id, **overrides)."""

    async def _make(user_id: str = "u_test", **overrides) -> Habit:
        data = {
            "user_id": user_id,
            "category_key": CategoryKey.HEALTH,
            "title": "Drink Water",
            "tracking_mode": TrackingMode.BINARY,
            "frequency_type": FrequencyType.DAILY,
            "is_active": True,
            "current_streak": 0,
            "best_streak": 0,
        }
        data.update(overrides)
        habit = Habit(**data)
        db_session.add(habit)
        await db_session.commit()
        return habit

    return _make


# 2025-06-01 is a Sunday
SUNDAY = datetime.date(2025, 6, 1)
MONDAY = datetime.date(2025, 6, 2)
WEDNESDAY = datetime.date(2025, 6, 4)
NEXT_MONDAY = datetime.date(2025, 6, 9)
