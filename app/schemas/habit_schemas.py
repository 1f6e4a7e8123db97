import datetime
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from app.schemas.base import ApiModel
from domain.models.enums import CategoryKey, FrequencyType, TrackingMode


def _check_days(days: Optional[List[int]]) -> Optional[List[int]]:
    if days is None:
        return None
    if any(d < 0 or d > 6 for d in days):
        raise ValueError("customDays entries must be weekday indices 0 (Sunday) to 6 (Saturday)")
    return sorted(set(days))


class HabitCreate(ApiModel):
    category_key: CategoryKey
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    tracking_mode: TrackingMode = TrackingMode.BINARY
    target_value: Optional[int] = Field(None, gt=0)
    count_unit: Optional[str] = None
    frequency_type: FrequencyType = FrequencyType.DAILY
    custom_days: Optional[List[int]] = None
    days_per_week: Optional[int] = Field(None, ge=1, le=7)
    is_active: bool = True
    template_id: Optional[str] = None

    @field_validator("custom_days")
    @classmethod
    def check_days(cls, v):
        return _check_days(v)

    @model_validator(mode="after")
    def check_target(self):
        if self.tracking_mode != TrackingMode.BINARY and self.target_value is None:
            raise ValueError(f"targetValue is required for {self.tracking_mode.value} habits")
        return self


class HabitUpdate(ApiModel):
    """Partial edit; unset fields are left untouched."""

    category_key: Optional[CategoryKey] = None
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    tracking_mode: Optional[TrackingMode] = None
    target_value: Optional[int] = Field(None, gt=0)
    count_unit: Optional[str] = None
    frequency_type: Optional[FrequencyType] = None
    custom_days: Optional[List[int]] = None
    days_per_week: Optional[int] = Field(None, ge=1, le=7)
    is_active: Optional[bool] = None

    @field_validator("custom_days")
    @classmethod
    def check_days(cls, v):
        return _check_days(v)


class HabitRead(ApiModel):
    id: str
    category_key: CategoryKey
    title: str
    description: Optional[str] = None
    tracking_mode: TrackingMode
    target_value: Optional[int] = None
    count_unit: Optional[str] = None
    frequency_type: FrequencyType
    custom_days: Optional[List[int]] = None
    days_per_week: Optional[int] = None
    is_active: bool
    template_id: Optional[str] = None
    current_streak: int = 0
    best_streak: int = 0
    last_completed_date: Optional[datetime.date] = None


class HistoryPoint(ApiModel):
    date: datetime.date
    day: str
    value: float


class HabitAnalyticsRead(HabitRead):
    history: List[HistoryPoint] = Field(default_factory=list)
