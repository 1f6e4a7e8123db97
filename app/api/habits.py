import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_db
from app.core.clock import resolve_today
from app.core.config import settings
from app.models.user import User
from app.schemas.habit_schemas import HabitAnalyticsRead, HabitCreate, HabitRead, HabitUpdate
from application.services.habit_service import habit_service
from domain.models.enums import CategoryKey

router = APIRouter()


@router.post("", response_model=HabitRead, status_code=status.HTTP_201_CREATED)
async def create_habit(
    payload: HabitCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    habit = await habit_service.create(db, user, payload)
    return habit_service.to_read(habit, resolve_today())


@router.get("", response_model=List[HabitRead])
async def list_active_habits(
    category: Optional[CategoryKey] = Query(None),
    day: Optional[datetime.date] = Query(None, alias="date", description="Client calendar day, YYYY-MM-DD"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await habit_service.list_active(
        db, user.id, resolve_today(day), category_key=category.value if category else None
    )


@router.get("/analytics", response_model=List[HabitAnalyticsRead])
async def habit_analytics(
    day: Optional[datetime.date] = Query(None, alias="date", description="Client calendar day, YYYY-MM-DD"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await habit_service.analytics(db, user.id, resolve_today(day), settings.ANALYTICS_WINDOW_DAYS)


@router.patch("/{habit_id}", response_model=HabitRead)
async def edit_habit(
    habit_id: str,
    payload: HabitUpdate,
    day: Optional[datetime.date] = Query(None, alias="date", description="Client calendar day, YYYY-MM-DD"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    habit = await habit_service.edit(db, user.id, habit_id, payload)
    return habit_service.to_read(habit, resolve_today(day))


@router.delete("/{habit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_habit(habit_id: str, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    await habit_service.delete(db, user.id, habit_id)
