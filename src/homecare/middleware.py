"""FastAPI middleware for request tracing."""

import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from homecare.config import settings


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind request_id, method and path to the structlog context.

    - Reuses the incoming request id header, or generates a UUID4
    - Every log line emitted while handling the request (including the
      exception handlers) carries the bound fields
    - Echoes the request id on the response
    """

    def __init__(self, app: ASGIApp, header: str | None = None) -> None:
        super().__init__(app)
        self.header = header or settings.request_id_header

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(self.header) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        response = await call_next(request)
        response.headers[self.header] = request_id
        return response
