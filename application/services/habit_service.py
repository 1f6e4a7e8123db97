"""
Habit CRUD and read models.

Streak and XP fields are never written here; they belong to the progress
engine. Read paths report lapsed streaks as 0 without touching storage.
"""

import datetime
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from adapters.persistence.sqlite.unit_of_work import SqlAlchemyUnitOfWork
from app.models.habit import Habit
from app.models.user import User
from app.schemas.habit_schemas import HabitAnalyticsRead, HabitCreate, HabitRead, HabitUpdate, HistoryPoint
from domain.errors import InvalidState, NotFound
from domain.models.enums import TrackingMode
from domain.rules.completion_rules import CompletionRules
from domain.rules.streak_rules import StreakRules

logger = logging.getLogger(__name__)


class HabitService:
    async def create(self, session: AsyncSession, user: User, data: HabitCreate) -> Habit:
        async with SqlAlchemyUnitOfWork(session) as uow:
            if data.template_id and not await uow.templates.get(data.template_id):
                raise NotFound(f"Template {data.template_id} not found")

            habit = Habit(
                user_id=user.id,
                category_key=data.category_key,
                title=data.title,
                description=data.description,
                tracking_mode=data.tracking_mode,
                target_value=data.target_value,
                count_unit=data.count_unit,
                frequency_type=data.frequency_type,
                custom_days=data.custom_days,
                days_per_week=data.days_per_week,
                is_active=data.is_active,
                template_id=data.template_id,
                current_streak=0,
                best_streak=0,
            )
            await uow.habits.add(habit)

            # First habit completes onboarding
            if not user.is_onboarded:
                user.is_onboarded = True

        await session.refresh(habit)
        logger.info("Habit created", extra={"user_id": user.id, "habit_id": habit.id})
        return habit

    async def _owned(self, uow: SqlAlchemyUnitOfWork, user_id: str, habit_id: str) -> Habit:
        habit = await uow.habits.get(habit_id)
        if not habit or habit.user_id != user_id:
            raise NotFound(f"Habit {habit_id} not found")
        return habit

    async def edit(self, session: AsyncSession, user_id: str, habit_id: str, data: HabitUpdate) -> Habit:
        async with SqlAlchemyUnitOfWork(session) as uow:
            habit = await self._owned(uow, user_id, habit_id)
            for key, value in data.model_dump(exclude_unset=True).items():
                setattr(habit, key, value)
            if TrackingMode(habit.tracking_mode) != TrackingMode.BINARY and not habit.target_value:
                raise InvalidState(f"{TrackingMode(habit.tracking_mode).value} habits need a target value")

        await session.refresh(habit)
        return habit

    async def delete(self, session: AsyncSession, user_id: str, habit_id: str) -> int:
        """
        Removes the habit and its logs. Daily and lifetime category stats are
        kept as the user's XP history. Returns the number of logs deleted.
        """
        async with SqlAlchemyUnitOfWork(session) as uow:
            habit = await self._owned(uow, user_id, habit_id)
            removed = await uow.daily_logs.delete_for_habit(habit.id)
            await uow.habits.delete(habit.id)

        logger.info("Habit deleted", extra={"user_id": user_id, "habit_id": habit_id, "logs_removed": removed})
        return removed

    def to_read(self, habit: Habit, today: datetime.date) -> HabitRead:
        read = HabitRead.model_validate(habit)
        read.current_streak = StreakRules.displayed_habit_streak(habit.streak_state, habit.recurrence, today)
        return read

    async def list_active(
        self,
        session: AsyncSession,
        user_id: str,
        today: datetime.date,
        category_key: Optional[str] = None,
    ) -> List[HabitRead]:
        async with SqlAlchemyUnitOfWork(session) as uow:
            if category_key:
                habits = await uow.habits.list_active_by_category(user_id, category_key)
            else:
                habits = await uow.habits.list_active(user_id)
            return [self.to_read(h, today) for h in habits]

    async def analytics(
        self, session: AsyncSession, user_id: str, today: datetime.date, window_days: int = 30
    ) -> List[HabitAnalyticsRead]:
        """Active habits with their last `window_days` days as 0-100 progress values."""
        start = today - datetime.timedelta(days=window_days - 1)
        days = [start + datetime.timedelta(days=i) for i in range(window_days)]

        results = []
        async with SqlAlchemyUnitOfWork(session) as uow:
            for habit in await uow.habits.list_active(user_id):
                logs = {log.date: log for log in await uow.daily_logs.list_for_habit_range(habit.id, start, today)}
                history = []
                for day in days:
                    log = logs.get(day)
                    value = 0.0
                    if log:
                        value = CompletionRules.progress_percent(
                            habit.tracking_mode, habit.target_value, log.current_value, log.is_completed
                        )
                    history.append(HistoryPoint(date=day, day=str(day.day), value=value))

                read = self.to_read(habit, today)
                results.append(HabitAnalyticsRead(**read.model_dump(), history=history))
        return results


habit_service = HabitService()
