"""
Global error handling middleware.

Catches anything a route lets escape, logs it with the callback context and
returns a structured JSON error instead of crashing the worker.
"""

import time
import traceback
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from groupbot.core.config.settings import settings
from groupbot.core.logging.logger import get_logger


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware with context-aware logging.

    Internal details are only included in responses in development.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)

        except HTTPException as http_exc:
            get_logger(__name__).warning(
                f"HTTP {http_exc.status_code} - {request.method} {request.url.path} - "
                f"Detail: {http_exc.detail}"
            )
            raise

        except Exception as exc:
            return self._handle_unexpected_exception(request, exc)

    def _handle_unexpected_exception(
        self, request: Request, exc: Exception
    ) -> JSONResponse:
        logger = get_logger(__name__)
        logger.error(
            f"Unhandled exception in {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )

        if request.url.path.startswith("/webhook/"):
            content: dict[str, Any] = {
                "status": "error",
                "message": "Callback processing failed",
                "type": "webhook_error",
            }
        else:
            content = {
                "detail": "Internal server error",
                "type": "internal_error",
                "timestamp": time.time(),
            }

        if settings.is_development:
            content["debug"] = {
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
                "traceback": traceback.format_exc().split("\n"),
            }

        return JSONResponse(status_code=500, content=content)
