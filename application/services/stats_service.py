import datetime
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from adapters.persistence.sqlite.unit_of_work import SqlAlchemyUnitOfWork
from app.schemas.user_schemas import CategoryStatsRead, StageCardRead
from domain.models.enums import CATEGORY_ORDER
from domain.rules.xp_rules import STAGES, StageRules


class StatsService:
    """Read-only views over the XP ledger tables."""

    async def get_my_stats(self, session: AsyncSession, user_id: str, today: datetime.date) -> List[CategoryStatsRead]:
        async with SqlAlchemyUnitOfWork(session) as uow:
            totals = {s.category_key: s for s in await uow.category_stats.list_for_user(user_id)}
            dailies = {s.category_key: s for s in await uow.daily_stats.list_for_user_day(user_id, today)}

        stats = []
        for category in CATEGORY_ORDER:
            total = totals.get(category.value)
            daily = dailies.get(category.value)
            total_xp = total.total_xp if total else 0
            stage = StageRules.current_stage(total_xp)
            stats.append(
                CategoryStatsRead(
                    category_key=category,
                    total_xp=total_xp,
                    today_xp=daily.xp_earned if daily else 0,
                    current_streak=total.current_streak if total else 0,
                    stage=stage.stage,
                    stage_name=stage.name,
                )
            )
        return stats

    async def get_all_cards(self, session: AsyncSession, user_id: str) -> List[StageCardRead]:
        async with SqlAlchemyUnitOfWork(session) as uow:
            totals = {s.category_key: s.total_xp for s in await uow.category_stats.list_for_user(user_id)}

        cards = []
        for category in CATEGORY_ORDER:
            current_xp = totals.get(category.value, 0)
            for stage in STAGES:
                cards.append(
                    StageCardRead(
                        category_key=category,
                        stage=stage.stage,
                        stage_name=stage.name,
                        min_xp=stage.min_xp,
                        max_xp=StageRules.max_xp(stage),
                        is_unlocked=current_xp >= stage.min_xp,
                        current_xp=current_xp,
                        message=stage.message,
                    )
                )
        return cards


stats_service = StatsService()
