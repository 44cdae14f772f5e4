"""Domain exceptions raised by services and caught by the translation boundary.

Services raise these to signal failures the caller can act on. Each exception
type carries a fixed ErrorCategory and HTTP status; they are class constants,
never constructor arguments, so a caught error always maps to the same pair.
Exception handlers in handlers.py translate them into the response envelope.
"""

from collections.abc import Iterable
from enum import StrEnum
from typing import ClassVar, final

SYSTEM_ERROR_MESSAGE = "An unexpected error occurred. Please try again later"


class ErrorCategory(StrEnum):
    """Client-facing classification of a failure.

    Clients show ``message``/``errors`` verbatim for every category except
    SYSTEM, which always carries SYSTEM_ERROR_MESSAGE.
    """

    VALIDATION = "VALIDATION"
    BUSINESS_RULE = "BUSINESS_RULE"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    AUTHENTICATION = "AUTHENTICATION"
    PERMISSION = "PERMISSION"
    SYSTEM = "SYSTEM"


class DomainError(Exception):
    """Base class for all domain exceptions.

    Not raised directly: subclasses set ``_category`` and ``_status_code``, and
    constructing a class without both is a TypeError. The public attributes
    are read-only properties; the error is not modified after it is raised.
    """

    _category: ClassVar[ErrorCategory]
    _status_code: ClassVar[int]

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        cls = type(self)
        if not hasattr(cls, "_category") or not hasattr(cls, "_status_code"):
            raise TypeError(f"{cls.__name__} does not declare a category and status code")
        self._message = message
        self._cause = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    @property
    def message(self) -> str:
        return self._message

    @property
    def category(self) -> ErrorCategory:
        return self._category

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def cause(self) -> BaseException | None:
        if self._cause is not None:
            return self._cause
        return self.__cause__

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._message!r})"


@final
class ValidationError(DomainError):
    """Raised when input fails a validation rule."""

    _category = ErrorCategory.VALIDATION
    _status_code = 400


@final
class InvalidSortFieldError(DomainError):
    """Raised when a requested sort field is not in the endpoint's allow-list.

    Only documents the rejection: the caller checks membership before raising.
    Sets are rendered sorted so the message is stable across runs; ordered
    sequences keep the caller's order.
    """

    _category = ErrorCategory.VALIDATION
    _status_code = 400

    def __init__(
        self,
        field: str,
        allowed_fields: Iterable[str],
        *,
        cause: BaseException | None = None,
    ) -> None:
        if isinstance(allowed_fields, (set, frozenset)):
            allowed = tuple(sorted(allowed_fields))
        else:
            allowed = tuple(allowed_fields)
        self.field = field
        self.allowed_fields = allowed
        super().__init__(
            f"Invalid sort field: '{field}'. Allowed fields: [{', '.join(allowed)}]",
            cause=cause,
        )


@final
class AuthenticationError(DomainError):
    """Raised when the caller's identity cannot be established."""

    _category = ErrorCategory.AUTHENTICATION
    _status_code = 401

    def __init__(
        self, message: str = "Authentication failed", *, cause: BaseException | None = None
    ) -> None:
        super().__init__(message, cause=cause)


@final
class UnauthorizedError(DomainError):
    """Raised when an authenticated caller lacks permission for the resource."""

    _category = ErrorCategory.PERMISSION
    _status_code = 403

    def __init__(
        self,
        message: str = "Access denied. You don't have permission to access this resource",
        *,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause=cause)


@final
class ResourceNotFoundError(DomainError):
    """Raised when a requested entity does not exist.

    ``ResourceNotFoundError("User", 42)`` formats the standard message;
    ``ResourceNotFoundError("Patient main address not found")`` uses it as is.
    """

    _category = ErrorCategory.NOT_FOUND
    _status_code = 404

    def __init__(
        self,
        resource_type: str,
        identifier: object | None = None,
        *,
        cause: BaseException | None = None,
    ) -> None:
        self.resource_type = resource_type if identifier is not None else None
        self.identifier = identifier
        if identifier is None:
            message = resource_type
        else:
            message = f"{resource_type} with id '{identifier}' not found"
        super().__init__(message, cause=cause)


@final
class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state (e.g. duplicate)."""

    _category = ErrorCategory.CONFLICT
    _status_code = 409


@final
class BusinessRuleError(DomainError):
    """Raised when a well-formed request violates a business rule.

    The message is shown to the caller, so it must not embed internal detail.
    """

    _category = ErrorCategory.BUSINESS_RULE
    _status_code = 422


DOMAIN_ERROR_TYPES: tuple[type[DomainError], ...] = (
    ValidationError,
    InvalidSortFieldError,
    AuthenticationError,
    UnauthorizedError,
    ResourceNotFoundError,
    ConflictError,
    BusinessRuleError,
)
