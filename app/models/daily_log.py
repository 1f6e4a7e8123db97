import uuid

from sqlalchemy import Boolean, Column, Date, Float, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.sql import text

from app.models.base import Base


class DailyLog(Base):
    """One check-in value per habit per calendar day."""

    __tablename__ = "daily_logs"
    __table_args__ = (
        UniqueConstraint("habit_id", "date", name="uq_daily_logs_habit_date"),
        Index("ix_daily_logs_user_date", "user_id", "date"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    habit_id = Column(String, ForeignKey("habits.id"), nullable=False)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    date = Column(Date, nullable=False)

    # 0/1 for binary, seconds for duration, count otherwise
    current_value = Column(Float, nullable=False, default=0)
    is_completed = Column(Boolean, server_default=text("FALSE"), default=False, nullable=False)
