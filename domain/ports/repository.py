from datetime import date
from typing import Any, List, Optional, Protocol, TypeVar

T = TypeVar("T")


class Repository(Protocol[T]):
    """
    Generic Repository Interface.
    Decouples Domain from ORM/SQL usage.
    """

    async def get(self, id: Any) -> Optional[T]:
        """Fetch entity by ID."""
        ...

    async def add(self, entity: T) -> T:
        """Add new entity."""
        ...

    async def save(self, entity: T) -> T:
        """Update existing entity."""
        ...

    async def delete(self, id: Any) -> bool:
        """Delete entity by ID."""
        ...

    async def list(self, limit: int = 100, offset: int = 0) -> List[T]:
        """List entities."""
        ...


class UserRepository(Repository[Any], Protocol):
    async def get_by_token(self, token_identifier: str) -> Optional[Any]: ...

    async def get_for_update(self, user_id: str) -> Optional[Any]: ...


class HabitRepository(Repository[Any], Protocol):
    async def get_for_update(self, habit_id: str) -> Optional[Any]: ...

    async def list_active(self, user_id: str) -> List[Any]: ...

    async def list_active_by_category(self, user_id: str, category_key: str) -> List[Any]: ...


class DailyLogRepository(Repository[Any], Protocol):
    async def get_for_habit(self, habit_id: str, day: date) -> Optional[Any]: ...

    async def list_for_user(self, user_id: str, day: date) -> List[Any]: ...

    async def list_for_habit_range(self, habit_id: str, start: date, end: date) -> List[Any]: ...

    async def delete_for_habit(self, habit_id: str) -> int: ...


class DailyCategoryStatRepository(Repository[Any], Protocol):
    async def get_for_day(self, user_id: str, category_key: str, day: date) -> Optional[Any]: ...

    async def list_for_user_day(self, user_id: str, day: date) -> List[Any]: ...


class UserCategoryStatRepository(Repository[Any], Protocol):
    async def get_for_update(self, user_id: str, category_key: str) -> Optional[Any]: ...

    async def list_for_user(self, user_id: str) -> List[Any]: ...


class ResolutionTemplateRepository(Repository[Any], Protocol):
    async def list_by_category(self, category_key: str) -> List[Any]: ...

    async def list_popular(self) -> List[Any]: ...

    async def get_by_title(self, category_key: str, title: str) -> Optional[Any]: ...


class AppConfigRepository(Repository[Any], Protocol):
    async def get_current(self) -> Optional[Any]: ...
