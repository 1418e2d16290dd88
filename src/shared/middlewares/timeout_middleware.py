"""Middleware bounding the total time spent on a request."""

import asyncio
import logging
from collections.abc import Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from src.shared.errors.codes import ErrorCode
from src.shared.errors.handlers import error_body

logger = logging.getLogger(__name__)


class TimeoutMiddleware(BaseHTTPMiddleware):
    """Abort requests that exceed ``timeout`` seconds with a 500 error envelope."""

    def __init__(self, app: ASGIApp, timeout: float):
        super().__init__(app)
        self.timeout = timeout

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout)
        except TimeoutError:
            logger.error(f"Request timed out after {self.timeout}s: {request.method} {request.url.path}")
            return JSONResponse(
                status_code=500,
                content=error_body(ErrorCode.INTERNAL_SERVER_ERROR, "Request timed out"),
            )
