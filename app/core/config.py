from typing import Any, Optional, Union

from pydantic import AliasChoices, Field, PostgresDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Resolution Quest"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"

    # Database
    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "changethis"
    POSTGRES_DB: str = "resolutions"
    POSTGRES_PORT: int = 5432
    SQLALCHEMY_DATABASE_URI: Optional[Union[PostgresDsn, str]] = Field(default=None, validate_default=True)

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info) -> Any:
        if isinstance(v, str):
            return v
        data = info.data if hasattr(info, "data") else {}
        if not data.get("POSTGRES_SERVER"):
            return "sqlite+aiosqlite:///./data/resolutions.db"

        return f"postgresql+asyncpg://{data.get('POSTGRES_USER')}:{data.get('POSTGRES_PASSWORD')}@{data.get('POSTGRES_SERVER')}:{data.get('POSTGRES_PORT')}/{data.get('POSTGRES_DB') or ''}"

    # Logging
    LOG_LEVEL: str = "INFO"
    ENABLE_LATENCY_LOGS: bool = Field(
        default=False,
        validation_alias=AliasChoices("ENABLE_LATENCY_LOGS", "LOG_LATENCY_ENABLED"),
    )

    # Startup
    AUTO_MIGRATE: bool = False
    SEED_CATEGORIES: bool = True
    SEED_TEMPLATES: bool = True

    # Shared secret for writes to the client release settings; writes are refused when unset
    APP_CONFIG_ADMIN_TOKEN: Optional[str] = None

    # Trailing window for habit history charts
    ANALYTICS_WINDOW_DAYS: int = 30

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
