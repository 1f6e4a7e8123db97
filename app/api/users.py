import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_caller_token, get_current_user, get_db
from app.core.clock import resolve_today
from app.core.seeding import list_categories
from app.models.user import User
from app.schemas.user_schemas import (
    CategoryRead,
    CategoryStatsRead,
    CurrentUserRead,
    OnboardingRequest,
    StageCardRead,
    StoreUserResponse,
)
from application.services.stats_service import stats_service
from application.services.user_service import user_service

router = APIRouter()
categories_router = APIRouter()


@router.post("/me", response_model=StoreUserResponse)
async def store_user(
    token: str = Depends(get_caller_token),
    x_user_email: Optional[str] = Header(None),
    x_user_name: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    user, _created = await user_service.store_user(db, token, email=x_user_email, name=x_user_name)
    return StoreUserResponse(user_id=user.id, is_onboarded=bool(user.is_onboarded))


@router.get("/me", response_model=CurrentUserRead)
async def current_user(
    day: Optional[datetime.date] = Query(None, alias="date", description="Client calendar day, YYYY-MM-DD"),
    user: User = Depends(get_current_user),
):
    return user_service.current_user_view(user, resolve_today(day))


@router.post("/me/onboarding", response_model=CurrentUserRead)
async def complete_onboarding(
    payload: OnboardingRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user = await user_service.complete_onboarding(db, user, payload.goal, payload.experience, payload.is_onboarded)
    return user_service.current_user_view(user, resolve_today())


@router.get("/me/stats", response_model=List[CategoryStatsRead])
async def my_stats(
    day: Optional[datetime.date] = Query(None, alias="date", description="Client calendar day, YYYY-MM-DD"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await stats_service.get_my_stats(db, user.id, resolve_today(day))


@router.get("/me/cards", response_model=List[StageCardRead])
async def my_cards(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await stats_service.get_all_cards(db, user.id)


@categories_router.get("", response_model=List[CategoryRead])
async def get_categories(db: AsyncSession = Depends(get_db)):
    return [CategoryRead.model_validate(c) for c in await list_categories(db)]
