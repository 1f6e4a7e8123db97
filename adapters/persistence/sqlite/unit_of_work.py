from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from adapters.persistence.sqlite.repositories import (
    AppConfigRepository,
    DailyCategoryStatRepository,
    DailyLogRepository,
    HabitRepository,
    ResolutionTemplateRepository,
    UserCategoryStatRepository,
    UserRepository,
)
from domain.ports.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Transaction boundary over one AsyncSession.

    Pass `session` to join a session owned by the caller (e.g. the request
    scoped one from get_db); it is committed or rolled back but not closed.
    Pass `session_factory` to open and close a private session.
    """

    def __init__(self, session: Optional[AsyncSession] = None, session_factory=None):
        if session is None and session_factory is None:
            raise ValueError("SqlAlchemyUnitOfWork needs a session or a session_factory")
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = session
        self._owns_session = session is None

    async def __aenter__(self):
        if self._owns_session:
            self.session = self.session_factory()
        self.users = UserRepository(self.session)
        self.habits = HabitRepository(self.session)
        self.daily_logs = DailyLogRepository(self.session)
        self.daily_stats = DailyCategoryStatRepository(self.session)
        self.category_stats = UserCategoryStatRepository(self.session)
        self.templates = ResolutionTemplateRepository(self.session)
        self.app_config = AppConfigRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        try:
            if exc_type:
                await self.rollback()
            else:
                await self.commit()
        finally:
            if self._owns_session:
                await self.session.close()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
