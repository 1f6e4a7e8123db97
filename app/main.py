import asyncio
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api import app_config, habits, health, progress, templates, users
from app.core.config import settings
from app.core.context import get_request_id
from app.core.database import AsyncSessionLocal
from app.core.logging_config import setup_logging
from app.core.logging_middleware import LoggingMiddleware
from app.core.migrations import run_migrations
from app.core.seeding import seed_categories, seed_templates
from domain.errors import DomainError, InvalidState, NotFound, Unauthenticated

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    if settings.AUTO_MIGRATE:
        try:
            logging.info("AUTO_MIGRATE enabled; running migrations.")
            os.makedirs("./data", exist_ok=True)
            await asyncio.to_thread(run_migrations)
        except Exception:
            logging.exception("Auto migration failed.")
            # Keep /health reachable
    if settings.SEED_CATEGORIES:
        try:
            async with AsyncSessionLocal() as session:
                await seed_categories(session)
        except Exception:
            logging.exception("Category seeding failed.")
    if settings.SEED_TEMPLATES:
        try:
            async with AsyncSessionLocal() as session:
                await seed_templates(session)
        except Exception:
            logging.exception("Template seeding failed.")

    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)

DOMAIN_ERROR_STATUS = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Unauthenticated: status.HTTP_401_UNAUTHORIZED,
    InvalidState: status.HTTP_409_CONFLICT,
}


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    status_code = DOMAIN_ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.warning(
        f"{type(exc).__name__}: {exc.message}",
        extra={"path": request.url.path, "status_code": status_code},
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "message": exc.message, "request_id": get_request_id()},
    )


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = get_request_id()
    logger.error(f"Global Exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error", "request_id": req_id},
    )


app.include_router(health.router, tags=["health"])
app.include_router(progress.router, prefix=f"{settings.API_V1_STR}/progress", tags=["progress"])
app.include_router(habits.router, prefix=f"{settings.API_V1_STR}/habits", tags=["habits"])
app.include_router(users.router, prefix=f"{settings.API_V1_STR}/users", tags=["users"])
app.include_router(users.categories_router, prefix=f"{settings.API_V1_STR}/categories", tags=["categories"])
app.include_router(templates.router, prefix=f"{settings.API_V1_STR}/templates", tags=["templates"])
app.include_router(app_config.router, prefix=f"{settings.API_V1_STR}/app-config", tags=["app-config"])
