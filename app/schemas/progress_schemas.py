import datetime

from pydantic import Field

from app.schemas.base import ApiModel


class LogProgressRequest(ApiModel):
    habit_id: str
    date: datetime.date = Field(..., description="Client calendar day, YYYY-MM-DD")
    value: float = Field(..., ge=0, description="1/0 for binary, seconds for duration, count otherwise")


class LogProgressResponse(ApiModel):
    new_daily_xp: int
    total_category_xp: int


class DailyLogRead(ApiModel):
    habit_id: str
    date: datetime.date
    current_value: float
    is_completed: bool
