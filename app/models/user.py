import uuid

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String
from sqlalchemy.sql import func

from app.models.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    # Stable identifier from the identity provider
    token_identifier = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=True)
    name = Column(String, nullable=False, default="user")

    # Onboarding
    goal = Column(String, nullable=True)
    experience = Column(String, nullable=True)
    is_onboarded = Column(Boolean, default=False, nullable=False)
    is_agreed_terms = Column(Boolean, default=True, nullable=False)

    # Global streak: any due habit completed, day after day
    current_streak = Column(Integer, default=0, nullable=False)
    best_streak = Column(Integer, default=0, nullable=False)
    last_completed_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
