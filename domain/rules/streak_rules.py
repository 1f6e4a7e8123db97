from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from domain.models.recurrence import Recurrence
from domain.rules.schedule_rules import ScheduleRules


@dataclass(frozen=True)
class StreakState:
    current: int = 0
    best: int = 0
    last_completed: Optional[date] = None


class StreakRules:
    """
    Streak transitions.
    Only call the advance_* functions when a day flips into completed;
    re-logging an already completed day must not reach them.
    """

    @staticmethod
    def _advance(state: StreakState, today: date, continues_from: Optional[date]) -> StreakState:
        if state.last_completed == today:
            return state

        # continues_from None means "no previous due day"; never matches a missing date
        if continues_from is not None and state.last_completed == continues_from:
            current = (state.current or 0) + 1
        else:
            current = 1

        return StreakState(
            current=current,
            best=max(state.best or 0, current),
            last_completed=today,
        )

    @staticmethod
    def advance_habit_streak(state: StreakState, recurrence: Recurrence, today: date) -> StreakState:
        previous = ScheduleRules.previous_due_date(recurrence, today)
        return StreakRules._advance(state, today, previous)

    @staticmethod
    def advance_global_streak(state: StreakState, today: date) -> StreakState:
        # Schedule agnostic: literal yesterday
        return StreakRules._advance(state, today, today - timedelta(days=1))

    @staticmethod
    def _is_live(state: StreakState, today: date, continues_from: Optional[date]) -> bool:
        if state.last_completed is None:
            return False
        # Completions dated ahead of `today` come from clients east of the server clock
        if state.last_completed >= today:
            return True
        return continues_from is not None and state.last_completed == continues_from

    @staticmethod
    def displayed_global_streak(state: StreakState, today: date) -> int:
        """Stored streak, or 0 when it has lapsed. Never writes."""
        current = state.current or 0
        if current > 0 and not StreakRules._is_live(state, today, today - timedelta(days=1)):
            return 0
        return current

    @staticmethod
    def displayed_habit_streak(state: StreakState, recurrence: Recurrence, today: date) -> int:
        current = state.current or 0
        if current > 0 and state.last_completed != today:
            previous = ScheduleRules.previous_due_date(recurrence, today)
            if not StreakRules._is_live(state, today, previous):
                return 0
        return current
