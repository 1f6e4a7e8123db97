from typing import Protocol

from domain.ports.repository import (
    AppConfigRepository,
    DailyCategoryStatRepository,
    DailyLogRepository,
    HabitRepository,
    ResolutionTemplateRepository,
    UserCategoryStatRepository,
    UserRepository,
)


class UnitOfWork(Protocol):
    """
    Unit of Work Interface.
    One transaction; exposes the repositories bound to it.
    """

    users: UserRepository
    habits: HabitRepository
    daily_logs: DailyLogRepository
    daily_stats: DailyCategoryStatRepository
    category_stats: UserCategoryStatRepository
    templates: ResolutionTemplateRepository
    app_config: AppConfigRepository

    async def __aenter__(self) -> "UnitOfWork": ...

    async def __aexit__(self, exc_type, exc_value, traceback) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
