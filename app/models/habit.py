import uuid

from sqlalchemy import JSON, Boolean, Column, Date, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.sql import func

from app.models.base import Base, enum_type
from domain.models.enums import CategoryKey, FrequencyType, TrackingMode
from domain.models.recurrence import Recurrence, recurrence_from_fields, recurrence_to_fields
from domain.rules.streak_rules import StreakState


class Habit(Base):
    __tablename__ = "habits"
    __table_args__ = (Index("ix_habits_user_category", "user_id", "category_key"),)

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    category_key = Column(enum_type(CategoryKey), nullable=False)

    title = Column(String, nullable=False)
    description = Column(String, nullable=True)

    tracking_mode = Column(enum_type(TrackingMode), nullable=False, default=TrackingMode.BINARY)
    # Minutes for DURATION, count for COUNT, unused for BINARY
    target_value = Column(Integer, nullable=True)
    count_unit = Column(String, nullable=True)  # "glasses", "pages", "reps"

    # Recurrence, flattened
    frequency_type = Column(enum_type(FrequencyType), nullable=False, default=FrequencyType.DAILY)
    custom_days = Column(JSON, nullable=True)  # [0..6], 0=Sunday
    days_per_week = Column(Integer, nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)
    template_id = Column(String, ForeignKey("resolution_templates.id"), nullable=True)

    current_streak = Column(Integer, default=0, nullable=False)
    best_streak = Column(Integer, default=0, nullable=False)
    last_completed_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    @property
    def recurrence(self) -> Recurrence:
        return recurrence_from_fields(self.frequency_type, self.custom_days, self.days_per_week)

    @recurrence.setter
    def recurrence(self, value: Recurrence) -> None:
        for key, field_value in recurrence_to_fields(value).items():
            setattr(self, key, field_value)

    @property
    def streak_state(self) -> StreakState:
        return StreakState(
            current=self.current_streak or 0,
            best=self.best_streak or 0,
            last_completed=self.last_completed_date,
        )
