from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.schemas.template_schemas import ResolutionTemplateRead
from application.services.template_service import template_service
from domain.models.enums import CategoryKey

router = APIRouter()


@router.get("", response_model=List[ResolutionTemplateRead])
async def list_templates(category: CategoryKey = Query(...), db: AsyncSession = Depends(get_db)):
    return [ResolutionTemplateRead.model_validate(t) for t in await template_service.list_by_category(db, category)]


@router.get("/popular", response_model=List[ResolutionTemplateRead])
async def list_popular_templates(db: AsyncSession = Depends(get_db)):
    return [ResolutionTemplateRead.model_validate(t) for t in await template_service.list_popular(db)]
