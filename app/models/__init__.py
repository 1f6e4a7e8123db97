from app.models.app_config import AppConfig
from app.models.base import Base
from app.models.category import Category
from app.models.daily_log import DailyLog
from app.models.habit import Habit
from app.models.stats import DailyCategoryStat, UserCategoryStat
from app.models.template import ResolutionTemplate
from app.models.user import User

# Export all
__all__ = [
    "Base",
    "User",
    "Category",
    "ResolutionTemplate",
    "Habit",
    "DailyLog",
    "DailyCategoryStat",
    "UserCategoryStat",
    "AppConfig",
]
