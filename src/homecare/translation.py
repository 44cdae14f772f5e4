"""Exception → (status code, envelope) translation.

Pure mapping used by the FastAPI handlers in handlers.py. Every exception
gets a status and an envelope; nothing here logs or touches the request.
Internal error text (tracebacks, driver messages, ``str(exc)`` of unexpected
faults) never ends up in the envelope.
"""

from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from homecare.exceptions import SYSTEM_ERROR_MESSAGE, DomainError, ErrorCategory
from homecare.schemas import envelope
from homecare.schemas.envelope import ResponseEnvelope

ENDPOINT_NOT_FOUND_MESSAGE = "The requested endpoint was not found"
DUPLICATE_RECORD_MESSAGE = "A record with the same unique identifier already exists."
CONSTRAINT_VIOLATION_MESSAGE = (
    "Database constraint violation. The operation could not be completed."
)
METHOD_NOT_ALLOWED_MESSAGE = "HTTP method is not supported for this endpoint"

# Request-body/query location prefixes FastAPI puts in front of the field name
_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})


def category_for_status(status_code: int) -> ErrorCategory:
    """Classify a bare HTTP status (from HTTPException) into an ErrorCategory."""
    match status_code:
        case 401:
            return ErrorCategory.AUTHENTICATION
        case 403:
            return ErrorCategory.PERMISSION
        case 404:
            return ErrorCategory.NOT_FOUND
        case 409:
            return ErrorCategory.CONFLICT
        case _ if 400 <= status_code < 500:
            return ErrorCategory.VALIDATION
        case _:
            return ErrorCategory.SYSTEM


def format_validation_errors(exc: RequestValidationError) -> list[str]:
    """One ``"<field>: <message>"`` entry per violation, in detection order."""
    messages: list[str] = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = ".".join(loc)
        messages.append(f"{field}: {err['msg']}" if field else err["msg"])
    return messages


def _system_error() -> tuple[int, ResponseEnvelope[None]]:
    return 500, envelope.error(SYSTEM_ERROR_MESSAGE, 500, path=None, category=ErrorCategory.SYSTEM)


def translate(exc: BaseException) -> tuple[int, ResponseEnvelope[None]]:
    """Map any exception to the status code and envelope sent to the client.

    The returned envelope has no path; the caller attaches it with
    ``with_path()`` once the request path is known.
    """
    match exc:
        case DomainError():
            if exc.category is ErrorCategory.SYSTEM:
                return _system_error()
            return exc.status_code, envelope.error(
                exc.message, exc.status_code, path=None, category=exc.category
            )

        case RequestValidationError():
            messages = format_validation_errors(exc) or ["Invalid request"]
            return 400, envelope.error(messages, 400, path=None, category=ErrorCategory.VALIDATION)

        case StarletteHTTPException(status_code=405):
            return 405, envelope.error(
                METHOD_NOT_ALLOWED_MESSAGE, 405, path=None, category=ErrorCategory.VALIDATION
            )

        case StarletteHTTPException(status_code=404, detail="Not Found"):
            return 404, envelope.error(
                ENDPOINT_NOT_FOUND_MESSAGE, 404, path=None, category=ErrorCategory.NOT_FOUND
            )

        case StarletteHTTPException():
            category = category_for_status(exc.status_code)
            if category is ErrorCategory.SYSTEM:
                return exc.status_code, envelope.error(
                    SYSTEM_ERROR_MESSAGE, exc.status_code, path=None, category=category
                )
            return exc.status_code, envelope.error(
                str(exc.detail), exc.status_code, path=None, category=category
            )

        case IntegrityError():
            # Driver text is only inspected, never echoed
            driver_message = str(exc.orig).lower() if exc.orig is not None else ""
            if "unique" in driver_message or "duplicate" in driver_message:
                message = DUPLICATE_RECORD_MESSAGE
            else:
                message = CONSTRAINT_VIOLATION_MESSAGE
            return 409, envelope.error(message, 409, path=None, category=ErrorCategory.CONFLICT)

        case _:
            return _system_error()
