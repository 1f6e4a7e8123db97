import datetime
import logging
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from adapters.persistence.sqlite.repositories import UserRepository
from app.models.user import User
from app.schemas.user_schemas import CurrentUserRead
from domain.errors import NotFound
from domain.rules.streak_rules import StreakRules, StreakState

logger = logging.getLogger(__name__)


class UserService:
    async def get_by_token(self, session: AsyncSession, token_identifier: str) -> Optional[User]:
        return await UserRepository(session).get_by_token(token_identifier)

    async def require_user(self, session: AsyncSession, token_identifier: str) -> User:
        user = await self.get_by_token(session, token_identifier)
        if not user:
            raise NotFound("User not found")
        return user

    async def store_user(
        self,
        session: AsyncSession,
        token_identifier: str,
        email: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Tuple[User, bool]:
        """Returns (user, created). Existing users are returned untouched."""
        user = await self.get_by_token(session, token_identifier)
        if user:
            return user, False

        user = User(
            token_identifier=token_identifier,
            email=email,
            name=name or "user",
            is_onboarded=False,
            is_agreed_terms=True,
            current_streak=0,
            best_streak=0,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        logger.info("User created", extra={"user_id": user.id})
        return user, True

    async def complete_onboarding(
        self, session: AsyncSession, user: User, goal: str, experience: str, is_onboarded: bool = True
    ) -> User:
        user.goal = goal
        user.experience = experience
        user.is_onboarded = is_onboarded
        await session.commit()
        await session.refresh(user)
        return user

    def current_user_view(self, user: User, today: datetime.date) -> CurrentUserRead:
        """
        Read model for the current user. A lapsed global streak shows as 0;
        the stored value is left as is until the next completion.
        """
        state = StreakState(
            current=user.current_streak or 0,
            best=user.best_streak or 0,
            last_completed=user.last_completed_date,
        )
        return CurrentUserRead(
            id=user.id,
            name=user.name,
            email=user.email,
            goal=user.goal,
            experience=user.experience,
            is_onboarded=bool(user.is_onboarded),
            is_agreed_terms=bool(user.is_agreed_terms),
            current_streak=StreakRules.displayed_global_streak(state, today),
            best_streak=state.best,
            last_completed_date=user.last_completed_date,
        )


user_service = UserService()
