import datetime
import logging

from app.models.habit import Habit
from domain.errors import NotFound
from domain.ports.unit_of_work import UnitOfWork
from domain.rules.streak_rules import StreakRules, StreakState

logger = logging.getLogger(__name__)


class StreakService:
    """Applies streak transitions to stored rows. Callers gate on a new completion."""

    async def apply_habit_completion(self, uow: UnitOfWork, habit: Habit, day: datetime.date) -> bool:
        """Returns True when the habit row was patched."""
        before = habit.streak_state
        after = StreakRules.advance_habit_streak(before, habit.recurrence, day)
        if after == before:
            return False

        habit.current_streak = after.current
        habit.best_streak = after.best
        habit.last_completed_date = after.last_completed
        logger.info(
            "Habit streak updated",
            extra={"habit_id": habit.id, "from": before.current, "to": after.current, "best": after.best},
        )
        return True

    async def apply_global_completion(self, uow: UnitOfWork, user_id: str, day: datetime.date) -> bool:
        """Returns True when the user row was patched."""
        user = await uow.users.get_for_update(user_id)
        if not user:
            raise NotFound(f"User {user_id} not found")

        before = StreakState(
            current=user.current_streak or 0,
            best=user.best_streak or 0,
            last_completed=user.last_completed_date,
        )
        after = StreakRules.advance_global_streak(before, day)
        if after == before:
            return False

        user.current_streak = after.current
        user.best_streak = after.best
        user.last_completed_date = after.last_completed
        logger.info(
            "Global streak updated",
            extra={"user_id": user_id, "from": before.current, "to": after.current},
        )
        return True


streak_service = StreakService()
