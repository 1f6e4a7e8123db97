from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from app.models.base import Base


class AppConfig(Base):
    """Single row of client release settings."""

    __tablename__ = "app_config"

    id = Column(Integer, primary_key=True, autoincrement=True)
    min_supported_app_version = Column(String, nullable=False)
    latest_app_version = Column(String, nullable=False)
    is_maintenance_mode = Column(Boolean, nullable=True)
    store_url = Column(String, nullable=True)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
