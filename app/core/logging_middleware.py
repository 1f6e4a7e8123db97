import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings
from app.core.context import set_request_id

logger = logging.getLogger("app.middleware")


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Honour an upstream request id, otherwise mint one
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        set_request_id(request_id)

        start_time = time.time()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-ID"] = request_id
        except Exception as e:
            logger.error(f"Uncaught exception in middleware: {e}", exc_info=True)
            raise
        finally:
            if settings.ENABLE_LATENCY_LOGS:
                process_time = (time.time() - start_time) * 1000
                logger.info(
                    "Request finished",
                    extra={
                        "method": request.method,
                        "path": request.url.path,
                        "status_code": status_code,
                        "duration_ms": round(process_time, 2),
                        "client_ip": request.client.host if request.client else None,
                    },
                )

        return response
