from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db, require_admin_token
from app.schemas.template_schemas import AppConfigRead, AppConfigWrite
from application.services.app_config_service import app_config_service

router = APIRouter()


@router.get("", response_model=Optional[AppConfigRead])
async def get_app_config(db: AsyncSession = Depends(get_db)):
    """Null until the first write."""
    config = await app_config_service.get(db)
    return AppConfigRead.model_validate(config) if config else None


@router.put("", response_model=AppConfigRead, dependencies=[Depends(require_admin_token)])
async def set_app_config(payload: AppConfigWrite, db: AsyncSession = Depends(get_db)):
    return AppConfigRead.model_validate(await app_config_service.set(db, payload))
