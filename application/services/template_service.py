from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from adapters.persistence.sqlite.unit_of_work import SqlAlchemyUnitOfWork
from app.models.template import ResolutionTemplate


class TemplateService:
    async def list_by_category(self, session: AsyncSession, category_key: str) -> List[ResolutionTemplate]:
        async with SqlAlchemyUnitOfWork(session) as uow:
            return await uow.templates.list_by_category(getattr(category_key, "value", category_key))

    async def list_popular(self, session: AsyncSession) -> List[ResolutionTemplate]:
        """Featured templates, grouped by category name then display order."""
        async with SqlAlchemyUnitOfWork(session) as uow:
            templates = await uow.templates.list_popular()
        return sorted(templates, key=lambda t: (t.category_key.value, t.order))


template_service = TemplateService()
