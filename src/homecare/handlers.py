"""FastAPI exception handlers.

Every error leaves the app through ``translate()`` so that clients always get
the same envelope. Handlers attach the request path and log; the full
exception (with its cause) only goes to the logs.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from homecare.exceptions import DomainError
from homecare.logging import get_logger
from homecare.translation import translate

logger = get_logger(__name__)


def _envelope_response(request: Request, exc: Exception) -> JSONResponse:
    """Translate ``exc`` and render it with the request path attached."""
    status_code, body = translate(exc)
    body = body.with_path(request.url.path)
    return JSONResponse(status_code=status_code, content=body.to_json())


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Return the status and category fixed by the DomainError subclass."""
    logger.warning(
        "domain_error",
        error=exc.message,
        category=exc.category.value,
        status=exc.status_code,
        path=request.url.path,
        exc_info=exc if exc.cause is not None else False,
    )
    return _envelope_response(request, exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with one entry per invalid field instead of FastAPI's 422."""
    logger.warning(
        "request_validation_failed", path=request.url.path, error_count=len(exc.errors())
    )
    return _envelope_response(request, exc)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return routing and framework HTTP errors (404, 405, ...) in envelope form."""
    logger.warning(
        "http_error", status=exc.status_code, path=request.url.path, method=request.method
    )
    response = _envelope_response(request, exc)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Return 409 for database constraint violations the services didn't catch."""
    logger.warning("integrity_error", path=request.url.path, exc_info=exc)
    return _envelope_response(request, exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and return a safe error response.

    - Logs full exception with traceback (includes request_id from context)
    - Returns the generic SYSTEM envelope (no exception text or stack leaked)
    """
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return _envelope_response(request, exc)


def install_exception_handlers(app: FastAPI) -> None:
    """Register the envelope handlers on ``app``.

    Starlette picks the handler of the closest class in the MRO, so the
    catch-all Exception handler only sees faults none of the others claim.
    """
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
