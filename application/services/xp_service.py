import datetime
import logging
from dataclasses import dataclass

from app.models.stats import DailyCategoryStat, UserCategoryStat
from domain.ports.unit_of_work import UnitOfWork
from domain.rules.schedule_rules import ScheduleRules
from domain.rules.xp_rules import XpRules

logger = logging.getLogger(__name__)


@dataclass
class XpRecompute:
    daily_xp: int
    delta: int
    lifetime_xp: int
    completed_count: int
    total_count: int


class XpService:
    """
    Category XP ledger.

    Daily stats are a materialized view of the day's logs; lifetime XP moves
    only by the difference between the new and the previously stored daily
    value. Nothing else may write either table.
    """

    async def recompute_daily_category_xp(
        self, uow: UnitOfWork, user_id: str, category_key: str, day: datetime.date
    ) -> XpRecompute:
        category_key = getattr(category_key, "value", category_key)

        # 1-3. Due habits and their completion on `day`
        habits = await uow.habits.list_active_by_category(user_id, category_key)
        due = [h for h in habits if ScheduleRules.is_due(h.recurrence, day)]

        completed = 0
        for habit in due:
            log = await uow.daily_logs.get_for_habit(habit.id, day)
            if log and log.is_completed:
                completed += 1

        # 4. Percentage of the day's due habits
        daily_xp = XpRules.daily_xp(completed, len(due))

        # 5-6. Daily stat row
        daily = await uow.daily_stats.get_for_day(user_id, category_key, day)
        previous_xp = daily.xp_earned if daily else 0
        delta = daily_xp - previous_xp
        if daily:
            daily.xp_earned = daily_xp
            daily.completed_count = completed
            daily.total_count = len(due)
        else:
            await uow.daily_stats.add(
                DailyCategoryStat(
                    user_id=user_id,
                    category_key=category_key,
                    date=day,
                    xp_earned=daily_xp,
                    completed_count=completed,
                    total_count=len(due),
                )
            )

        # 7. Lifetime XP
        lifetime = await uow.category_stats.get_for_update(user_id, category_key)
        if lifetime:
            lifetime.total_xp = (lifetime.total_xp or 0) + delta
        else:
            lifetime = UserCategoryStat(
                user_id=user_id,
                category_key=category_key,
                total_xp=daily_xp,
                current_streak=0,
            )
            await uow.category_stats.add(lifetime)

        logger.info(
            "Category XP recomputed",
            extra={
                "user_id": user_id,
                "category": category_key,
                "date": day.isoformat(),
                "daily_xp": daily_xp,
                "delta": delta,
                "lifetime_xp": lifetime.total_xp,
            },
        )
        return XpRecompute(
            daily_xp=daily_xp,
            delta=delta,
            lifetime_xp=lifetime.total_xp,
            completed_count=completed,
            total_count=len(due),
        )


xp_service = XpService()
