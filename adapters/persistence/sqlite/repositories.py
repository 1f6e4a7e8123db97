from datetime import date
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.persistence.sqlite.base_repository import SqlAlchemyRepository
from app.models.daily_log import DailyLog
from app.models.habit import Habit
from app.models.app_config import AppConfig
from app.models.stats import DailyCategoryStat, UserCategoryStat
from app.models.template import ResolutionTemplate
from app.models.user import User

# with_for_update() is a no-op on SQLite and a row lock on PostgreSQL.


class UserRepository(SqlAlchemyRepository[User]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, User)

    async def get_by_token(self, token_identifier: str) -> Optional[User]:
        stmt = select(User).where(User.token_identifier == token_identifier)
        return await self._first(stmt)

    async def get_for_update(self, user_id: str) -> Optional[User]:
        stmt = select(User).where(User.id == user_id).with_for_update()
        return await self._first(stmt)


class HabitRepository(SqlAlchemyRepository[Habit]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Habit)

    async def get_for_update(self, habit_id: str) -> Optional[Habit]:
        stmt = select(Habit).where(Habit.id == habit_id).with_for_update()
        return await self._first(stmt)

    async def list_active(self, user_id: str) -> List[Habit]:
        stmt = (
            select(Habit)
            .where(Habit.user_id == user_id, Habit.is_active.is_(True))
            .order_by(Habit.created_at, Habit.id)
        )
        return await self._all(stmt)

    async def list_active_by_category(self, user_id: str, category_key: str) -> List[Habit]:
        stmt = (
            select(Habit)
            .where(
                Habit.user_id == user_id,
                Habit.category_key == category_key,
                Habit.is_active.is_(True),
            )
            .order_by(Habit.created_at, Habit.id)
        )
        return await self._all(stmt)


class DailyLogRepository(SqlAlchemyRepository[DailyLog]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, DailyLog)

    async def get_for_habit(self, habit_id: str, day: date) -> Optional[DailyLog]:
        stmt = select(DailyLog).where(DailyLog.habit_id == habit_id, DailyLog.date == day)
        return await self._first(stmt)

    async def list_for_user(self, user_id: str, day: date) -> List[DailyLog]:
        stmt = select(DailyLog).where(DailyLog.user_id == user_id, DailyLog.date == day)
        return await self._all(stmt)

    async def list_for_habit_range(self, habit_id: str, start: date, end: date) -> List[DailyLog]:
        stmt = (
            select(DailyLog)
            .where(DailyLog.habit_id == habit_id, DailyLog.date >= start, DailyLog.date <= end)
            .order_by(DailyLog.date)
        )
        return await self._all(stmt)

    async def delete_for_habit(self, habit_id: str) -> int:
        result = await self.session.execute(delete(DailyLog).where(DailyLog.habit_id == habit_id))
        return result.rowcount or 0


class DailyCategoryStatRepository(SqlAlchemyRepository[DailyCategoryStat]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, DailyCategoryStat)

    async def get_for_day(self, user_id: str, category_key: str, day: date) -> Optional[DailyCategoryStat]:
        stmt = (
            select(DailyCategoryStat)
            .where(
                DailyCategoryStat.user_id == user_id,
                DailyCategoryStat.category_key == category_key,
                DailyCategoryStat.date == day,
            )
            .with_for_update()
        )
        return await self._first(stmt)

    async def list_for_user_day(self, user_id: str, day: date) -> List[DailyCategoryStat]:
        stmt = select(DailyCategoryStat).where(
            DailyCategoryStat.user_id == user_id, DailyCategoryStat.date == day
        )
        return await self._all(stmt)


class UserCategoryStatRepository(SqlAlchemyRepository[UserCategoryStat]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, UserCategoryStat)

    async def get_for_update(self, user_id: str, category_key: str) -> Optional[UserCategoryStat]:
        stmt = (
            select(UserCategoryStat)
            .where(UserCategoryStat.user_id == user_id, UserCategoryStat.category_key == category_key)
            .with_for_update()
        )
        return await self._first(stmt)

    async def list_for_user(self, user_id: str) -> List[UserCategoryStat]:
        stmt = select(UserCategoryStat).where(UserCategoryStat.user_id == user_id)
        return await self._all(stmt)


class ResolutionTemplateRepository(SqlAlchemyRepository[ResolutionTemplate]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ResolutionTemplate)

    async def list_by_category(self, category_key: str) -> List[ResolutionTemplate]:
        stmt = (
            select(ResolutionTemplate)
            .where(ResolutionTemplate.category_key == category_key)
            .order_by(ResolutionTemplate.order, ResolutionTemplate.title)
        )
        return await self._all(stmt)

    async def list_popular(self) -> List[ResolutionTemplate]:
        stmt = select(ResolutionTemplate).where(ResolutionTemplate.is_popular.is_(True))
        return await self._all(stmt)

    async def get_by_title(self, category_key: str, title: str) -> Optional[ResolutionTemplate]:
        stmt = select(ResolutionTemplate).where(
            ResolutionTemplate.category_key == category_key, ResolutionTemplate.title == title
        )
        return await self._first(stmt)


class AppConfigRepository(SqlAlchemyRepository[AppConfig]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, AppConfig)

    async def get_current(self) -> Optional[AppConfig]:
        stmt = select(AppConfig).order_by(AppConfig.id).limit(1)
        return await self._first(stmt)
