"""Response envelope schema.

Every response, success or failure, uses the same envelope:
{"success", "message", "data", "errors", "timestamp", "path", "status", "errorCategory"}.
Fields that are None are left out of the serialized body.

Build envelopes with ``success()`` and ``error()``, never by calling the model
directly. The model is frozen; ``with_path()`` is the only way to fill in the
request path after construction, and it can be used once.
"""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from homecare.exceptions import SYSTEM_ERROR_MESSAGE, ErrorCategory

DEFAULT_SUCCESS_MESSAGE = "Operation completed successfully"
MULTIPLE_ERRORS_MESSAGE = "Multiple validation errors"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ResponseEnvelope[T](BaseModel):
    """Uniform payload returned for every request.

    ``[T]`` is the type of ``data`` on success; failures always use ``None``.
    ``error_category`` goes over the wire as ``errorCategory``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool
    message: str
    data: T | None = None
    errors: tuple[str, ...] | None = None
    timestamp: datetime = Field(default_factory=_utcnow)
    path: str | None = None
    status: int
    error_category: ErrorCategory | None = Field(default=None, alias="errorCategory")

    @model_validator(mode="after")
    def _check_outcome_shape(self) -> Self:
        if self.success:
            if self.errors is not None or self.error_category is not None:
                raise ValueError("success envelope cannot carry errors or an error category")
            if self.status != 200:
                raise ValueError(f"success envelope must have status 200, got {self.status}")
        else:
            if self.data is not None:
                raise ValueError("error envelope cannot carry data")
            if not self.errors:
                raise ValueError("error envelope needs at least one error message")
            if self.error_category is None:
                raise ValueError("error envelope needs an error category")
            if self.error_category is ErrorCategory.SYSTEM and (
                self.message != SYSTEM_ERROR_MESSAGE or self.errors != (SYSTEM_ERROR_MESSAGE,)
            ):
                raise ValueError("SYSTEM envelope must carry only the generic message")
        return self

    def with_path(self, path: str) -> Self:
        """Return a copy with the request path set. The path can be set only once."""
        if self.path is not None:
            raise ValueError(f"envelope path already set to {self.path!r}")
        return self.model_copy(update={"path": path})

    def to_json(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict for JSONResponse."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def success[T](
    data: T | None = None,
    *,
    message: str = DEFAULT_SUCCESS_MESSAGE,
) -> ResponseEnvelope[T]:
    """Build a success envelope, with or without a data payload.

    ``message`` is keyword-only: ``success(message="Patient deleted")`` for a
    message without data. A lone positional argument is always the data.
    """
    return ResponseEnvelope(success=True, message=message, data=data, status=200)


def error(
    errors: str | Sequence[str],
    status: int,
    path: str | None,
    category: ErrorCategory,
) -> ResponseEnvelope[None]:
    """Build a failure envelope from one message or an ordered list of messages.

    With more than one message the top-level ``message`` is
    MULTIPLE_ERRORS_MESSAGE and every entry is kept, in order, in ``errors``.
    An empty list is a caller bug and fails validation. SYSTEM envelopes always
    carry SYSTEM_ERROR_MESSAGE in place of the given text, which may hold
    internal detail. Pass ``path=None`` when the request path is not known yet.
    """
    messages = (errors,) if isinstance(errors, str) else tuple(errors)
    if category is ErrorCategory.SYSTEM and messages:
        messages = (SYSTEM_ERROR_MESSAGE,)
    message = messages[0] if len(messages) == 1 else MULTIPLE_ERRORS_MESSAGE
    return ResponseEnvelope(
        success=False,
        message=message,
        errors=messages,
        status=status,
        path=path,
        error_category=category,
    )
