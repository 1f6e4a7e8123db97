import datetime
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_db
from app.models.user import User
from app.schemas.progress_schemas import DailyLogRead, LogProgressRequest, LogProgressResponse
from application.services.progress_service import progress_service

router = APIRouter()


@router.post("", response_model=LogProgressResponse)
async def log_progress(
    payload: LogProgressRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await progress_service.log_progress(db, user.id, payload.habit_id, payload.date, payload.value)
    return LogProgressResponse(new_daily_xp=result.new_daily_xp, total_category_xp=result.total_category_xp)


@router.get("/logs", response_model=List[DailyLogRead])
async def get_today_logs(
    date: datetime.date = Query(..., description="YYYY-MM-DD"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    logs = await progress_service.get_today_logs(db, user.id, date)
    return [DailyLogRead.model_validate(log) for log in logs]
