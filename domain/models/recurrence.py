from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Union

from domain.models.enums import FrequencyType

# Weekday indices follow the client convention: 0=Sunday .. 6=Saturday
SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)


@dataclass(frozen=True)
class Daily:
    kind: FrequencyType = field(default=FrequencyType.DAILY, init=False)


@dataclass(frozen=True)
class Weekdays:
    kind: FrequencyType = field(default=FrequencyType.WEEKDAYS, init=False)


@dataclass(frozen=True)
class Weekends:
    kind: FrequencyType = field(default=FrequencyType.WEEKENDS, init=False)


@dataclass(frozen=True)
class Custom:
    days: FrozenSet[int] = frozenset()
    kind: FrequencyType = field(default=FrequencyType.CUSTOM, init=False)


@dataclass(frozen=True)
class XPerWeek:
    count: int = 7
    kind: FrequencyType = field(default=FrequencyType.X_PER_WEEK, init=False)


Recurrence = Union[Daily, Weekdays, Weekends, Custom, XPerWeek]


def recurrence_from_fields(
    frequency_type: Union[FrequencyType, str],
    custom_days: Optional[Iterable[int]] = None,
    days_per_week: Optional[int] = None,
) -> Recurrence:
    """Builds the recurrence variant from its flat storage columns."""
    kind = FrequencyType(frequency_type)
    if kind is FrequencyType.DAILY:
        return Daily()
    if kind is FrequencyType.WEEKDAYS:
        return Weekdays()
    if kind is FrequencyType.WEEKENDS:
        return Weekends()
    if kind is FrequencyType.CUSTOM:
        return Custom(frozenset(int(d) for d in (custom_days or [])))
    if kind is FrequencyType.X_PER_WEEK:
        return XPerWeek(days_per_week if days_per_week is not None else 7)
    raise ValueError(f"Unhandled frequency type: {frequency_type!r}")


def recurrence_to_fields(recurrence: Recurrence) -> dict:
    """Inverse of recurrence_from_fields."""
    fields = {"frequency_type": recurrence.kind, "custom_days": None, "days_per_week": None}
    if isinstance(recurrence, Custom):
        fields["custom_days"] = sorted(recurrence.days)
    elif isinstance(recurrence, XPerWeek):
        fields["days_per_week"] = recurrence.count
    return fields
