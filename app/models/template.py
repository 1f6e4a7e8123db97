import uuid

from sqlalchemy import Boolean, Column, Index, Integer, String

from app.models.base import Base, enum_type
from domain.models.enums import CategoryKey, FrequencyType, TrackingMode


class ResolutionTemplate(Base):
    """Suggested habit a user can start from. Users may change every field."""

    __tablename__ = "resolution_templates"
    __table_args__ = (Index("ix_resolution_templates_category_popular", "category_key", "is_popular"),)

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    category_key = Column(enum_type(CategoryKey), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")

    tracking_mode = Column(enum_type(TrackingMode), nullable=False, default=TrackingMode.BINARY)
    suggested_target_value = Column(Integer, nullable=True)  # minutes or count
    suggested_count_unit = Column(String, nullable=True)

    suggested_frequency = Column(enum_type(FrequencyType), nullable=False, default=FrequencyType.DAILY)
    suggested_days_per_week = Column(Integer, nullable=True)

    is_popular = Column(Boolean, default=False, nullable=False)
    order = Column(Integer, nullable=False, default=0)  # within category
