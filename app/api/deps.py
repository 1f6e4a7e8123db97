from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.models.user import User
from application.services.user_service import user_service
from domain.errors import Unauthenticated

__all__ = ["get_db", "get_caller_token", "get_current_user", "require_admin_token"]


async def get_caller_token(x_user_token: Optional[str] = Header(None)) -> str:
    """Token identifier issued by the identity provider."""
    if not x_user_token or not x_user_token.strip():
        raise Unauthenticated("Not authenticated")
    return x_user_token.strip()


async def get_current_user(
    token: str = Depends(get_caller_token), db: AsyncSession = Depends(get_db)
) -> User:
    return await user_service.require_user(db, token)


async def require_admin_token(x_admin_token: Optional[str] = Header(None)) -> None:
    """Guards writes to client release settings."""
    expected = settings.APP_CONFIG_ADMIN_TOKEN
    if not expected or x_admin_token != expected:
        raise Unauthenticated("Admin token required")
