import datetime
from typing import Optional

from pydantic import Field

from app.schemas.base import ApiModel
from domain.models.enums import CategoryKey, FrequencyType, TrackingMode


class ResolutionTemplateRead(ApiModel):
    id: str
    category_key: CategoryKey
    title: str
    description: str
    tracking_mode: TrackingMode
    suggested_target_value: Optional[int] = None
    suggested_count_unit: Optional[str] = None
    suggested_frequency: FrequencyType
    suggested_days_per_week: Optional[int] = None
    is_popular: bool
    order: int


class AppConfigWrite(ApiModel):
    min_supported_app_version: str = Field(..., min_length=1)
    latest_app_version: str = Field(..., min_length=1)
    is_maintenance_mode: Optional[bool] = None
    store_url: Optional[str] = None


class AppConfigRead(AppConfigWrite):
    updated_at: Optional[datetime.datetime] = None
