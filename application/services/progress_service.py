import asyncio
import datetime
import logging
import weakref
from dataclasses import dataclass
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from adapters.persistence.sqlite.unit_of_work import SqlAlchemyUnitOfWork
from app.models.daily_log import DailyLog
from application.services.daily_log_service import DailyLogService, daily_log_service
from application.services.streak_service import StreakService, streak_service
from application.services.xp_service import XpService, xp_service
from domain.errors import NotFound

logger = logging.getLogger(__name__)


@dataclass
class ProgressResult:
    new_daily_xp: int
    total_category_xp: int
    is_completed: bool = False
    habit_streak: int = 0
    global_streak_updated: bool = False


class ProgressService:
    """
    Single entry point for check-ins.

    One call = one transaction: log upsert, optional streak patches and the
    category XP recompute are committed together or not at all.
    """

    def __init__(
        self,
        logs: DailyLogService = daily_log_service,
        streaks: StreakService = streak_service,
        xp: XpService = xp_service,
    ):
        self.logs = logs
        self.streaks = streaks
        self.xp = xp
        # Entries vanish once no check-in holds or awaits the lock
        self._user_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def _get_lock(self, user_id: str) -> asyncio.Lock:
        """
        Serializes check-ins of one user inside this process.
        Covers both the (habit, date) prior-flag read and the shared
        lifetime XP counter of the habit's category.
        """
        lock = self._user_locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._user_locks[user_id] = lock
        return lock

    async def log_progress(
        self,
        session: AsyncSession,
        user_id: str,
        habit_id: str,
        day: datetime.date,
        raw_value: float,
    ) -> ProgressResult:
        lock = self._get_lock(user_id)
        async with lock:
            async with SqlAlchemyUnitOfWork(session) as uow:
                # 1. Habit, row locked for the rest of the transaction
                habit = await uow.habits.get_for_update(habit_id)
                if not habit or habit.user_id != user_id:
                    raise NotFound(f"Habit {habit_id} not found")

                # 2-3. Classify and upsert
                upsert = await self.logs.upsert_log(uow, habit, day, raw_value)

                # 4. Streaks, only on a fresh completion
                global_updated = False
                if upsert.newly_completed:
                    await self.streaks.apply_habit_completion(uow, habit, day)
                    global_updated = await self.streaks.apply_global_completion(uow, user_id, day)

                # 5. XP
                recompute = await self.xp.recompute_daily_category_xp(uow, user_id, habit.category_key, day)

                result = ProgressResult(
                    new_daily_xp=recompute.daily_xp,
                    total_category_xp=recompute.lifetime_xp,
                    is_completed=upsert.is_completed,
                    habit_streak=habit.current_streak or 0,
                    global_streak_updated=global_updated,
                )

        logger.info(
            "Progress logged",
            extra={
                "user_id": user_id,
                "habit_id": habit_id,
                "date": day.isoformat(),
                "value": raw_value,
                "is_completed": result.is_completed,
                "daily_xp": result.new_daily_xp,
                "lifetime_xp": result.total_category_xp,
            },
        )
        return result

    async def get_today_logs(self, session: AsyncSession, user_id: str, day: datetime.date) -> List[DailyLog]:
        """Read-only; scoped to the caller."""
        async with SqlAlchemyUnitOfWork(session) as uow:
            return await uow.daily_logs.list_for_user(user_id, day)


progress_service = ProgressService()
