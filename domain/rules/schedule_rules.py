from datetime import date, timedelta
from typing import Optional

from domain.models.recurrence import (
    FRIDAY,
    MONDAY,
    SATURDAY,
    SUNDAY,
    Custom,
    Daily,
    Recurrence,
    Weekdays,
    Weekends,
    XPerWeek,
)


def weekday_index(day: date) -> int:
    """0=Sunday .. 6=Saturday."""
    return day.isoweekday() % 7


class ScheduleRules:
    # Upper bound of the backward search in previous_due_date.
    # Sparser schedules than this read as a broken streak.
    SCAN_WINDOW_DAYS = 14

    @staticmethod
    def is_due(recurrence: Recurrence, day: date) -> bool:
        """
        Whether a habit with this recurrence requires action on `day`.
        Pure logic: No DB.
        """
        if isinstance(recurrence, Daily):
            return True
        if isinstance(recurrence, Weekdays):
            return MONDAY <= weekday_index(day) <= FRIDAY
        if isinstance(recurrence, Weekends):
            return weekday_index(day) in (SATURDAY, SUNDAY)
        if isinstance(recurrence, Custom):
            return weekday_index(day) in recurrence.days
        if isinstance(recurrence, XPerWeek):
            # Weekly quota is not enforced for scheduling
            return True
        raise TypeError(f"Unknown recurrence: {recurrence!r}")

    @staticmethod
    def previous_due_date(recurrence: Recurrence, as_of: date) -> Optional[date]:
        """
        The most recent due day strictly before `as_of`.

        Returns None when nothing is due within SCAN_WINDOW_DAYS,
        e.g. a Custom rule with no days.
        """
        if isinstance(recurrence, (Daily, XPerWeek)):
            return as_of - timedelta(days=1)

        for offset in range(1, ScheduleRules.SCAN_WINDOW_DAYS + 1):
            candidate = as_of - timedelta(days=offset)
            if ScheduleRules.is_due(recurrence, candidate):
                return candidate
        return None
