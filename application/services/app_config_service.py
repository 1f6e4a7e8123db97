import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from adapters.persistence.sqlite.unit_of_work import SqlAlchemyUnitOfWork
from app.models.app_config import AppConfig
from app.schemas.template_schemas import AppConfigWrite

logger = logging.getLogger(__name__)


class AppConfigService:
    """Client release settings: supported versions, maintenance flag, store link."""

    async def get(self, session: AsyncSession) -> Optional[AppConfig]:
        async with SqlAlchemyUnitOfWork(session) as uow:
            return await uow.app_config.get_current()

    async def set(self, session: AsyncSession, data: AppConfigWrite) -> AppConfig:
        """Overwrites every field of the single config row, creating it on first write."""
        async with SqlAlchemyUnitOfWork(session) as uow:
            config = await uow.app_config.get_current()
            if config is None:
                config = AppConfig()
                await uow.app_config.add(config)
            for key, value in data.model_dump().items():
                setattr(config, key, value)

        await session.refresh(config)
        logger.info(
            "App config updated",
            extra={
                "min_supported_app_version": config.min_supported_app_version,
                "latest_app_version": config.latest_app_version,
                "is_maintenance_mode": config.is_maintenance_mode,
            },
        )
        return config


app_config_service = AppConfigService()
