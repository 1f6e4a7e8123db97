import datetime
import logging
from dataclasses import dataclass

from app.models.daily_log import DailyLog
from app.models.habit import Habit
from domain.ports.unit_of_work import UnitOfWork
from domain.rules.completion_rules import CompletionRules

logger = logging.getLogger(__name__)


@dataclass
class LogUpsert:
    is_completed: bool
    was_already_completed: bool
    log: DailyLog

    @property
    def newly_completed(self) -> bool:
        return self.is_completed and not self.was_already_completed


class DailyLogService:
    async def upsert_log(
        self, uow: UnitOfWork, habit: Habit, day: datetime.date, raw_value: float
    ) -> LogUpsert:
        """
        Writes the single (habit, day) log.
        The prior completion flag is read before the overwrite; it is the only
        signal that gates streak transitions.
        """
        is_completed = CompletionRules.is_completed(habit.tracking_mode, habit.target_value, raw_value)

        log = await uow.daily_logs.get_for_habit(habit.id, day)
        if log:
            was_already_completed = bool(log.is_completed)
            log.current_value = raw_value
            log.is_completed = is_completed
        else:
            was_already_completed = False
            log = DailyLog(
                habit_id=habit.id,
                user_id=habit.user_id,
                date=day,
                current_value=raw_value,
                is_completed=is_completed,
            )
            await uow.daily_logs.add(log)

        logger.debug(
            "Daily log upserted",
            extra={
                "habit_id": habit.id,
                "date": day.isoformat(),
                "is_completed": is_completed,
                "was_already_completed": was_already_completed,
            },
        )
        return LogUpsert(is_completed=is_completed, was_already_completed=was_already_completed, log=log)


daily_log_service = DailyLogService()
