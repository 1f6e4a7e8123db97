import uuid

from sqlalchemy import Column, Date, ForeignKey, Integer, String, UniqueConstraint

from app.models.base import Base


class DailyCategoryStat(Base):
    __tablename__ = "daily_category_stats"
    __table_args__ = (
        UniqueConstraint("user_id", "category_key", "date", name="uq_daily_category_stats_key"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    category_key = Column(String, nullable=False)
    date = Column(Date, nullable=False)

    xp_earned = Column(Integer, default=0, nullable=False)  # 0..100
    total_count = Column(Integer, default=0, nullable=False)
    completed_count = Column(Integer, default=0, nullable=False)


class UserCategoryStat(Base):
    __tablename__ = "user_category_stats"
    __table_args__ = (UniqueConstraint("user_id", "category_key", name="uq_user_category_stats_key"),)

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    category_key = Column(String, nullable=False)

    total_xp = Column(Integer, default=0, nullable=False)
    # Placeholder, not the global streak
    current_streak = Column(Integer, default=0, nullable=False)
