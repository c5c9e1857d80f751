import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from prompt_keeper.core.config import settings
from prompt_keeper.storage.base import StorageError

logger = logging.getLogger("prompt_keeper.middleware")


def _is_api_request(request: Request) -> bool:
    return request.url.path.startswith(settings.API_PREFIX)


class ApiRequestMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)

        duration_ms = (time.perf_counter() - start) * 1000
        if _is_api_request(request):
            response.headers["X-Request-Duration-ms"] = f"{duration_ms:.2f}"
            logger.info(
                "API request completed",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": duration_ms,
                    "status_code": response.status_code,
                },
            )

        return response


def register_error_handlers(app: FastAPI) -> None:
    app.add_middleware(ApiRequestMiddleware)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.exception(
            "Library storage failure",
            extra={"path": request.url.path, "method": request.method},
            exc_info=exc,
        )
        return JSONResponse(
            status_code=503,
            content={"error": "storage_error", "detail": str(exc), "path": request.url.path},
        )
