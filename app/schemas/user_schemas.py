import datetime
from typing import Optional

from app.schemas.base import ApiModel
from domain.models.enums import CategoryKey


class StoreUserResponse(ApiModel):
    user_id: str
    is_onboarded: bool


class CurrentUserRead(ApiModel):
    id: str
    name: str
    email: Optional[str] = None
    goal: Optional[str] = None
    experience: Optional[str] = None
    is_onboarded: bool
    is_agreed_terms: bool
    # Displayed value: 0 once the streak has lapsed
    current_streak: int
    best_streak: int
    last_completed_date: Optional[datetime.date] = None


class OnboardingRequest(ApiModel):
    goal: str
    experience: str
    is_onboarded: bool = True


class CategoryRead(ApiModel):
    key: CategoryKey
    name: str
    icon: Optional[str] = None
    description: Optional[str] = None
    order: int
    character_name: Optional[str] = None
    character_theme: Optional[str] = None


class CategoryStatsRead(ApiModel):
    category_key: CategoryKey
    total_xp: int = 0
    today_xp: int = 0
    current_streak: int = 0
    stage: int = 1
    stage_name: str = ""


class StageCardRead(ApiModel):
    category_key: CategoryKey
    stage: int
    stage_name: str
    min_xp: int
    max_xp: int
    is_unlocked: bool
    current_xp: int = 0
    message: str
