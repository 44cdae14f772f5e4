"""Sort-parameter validation for list endpoints.

Sort fields end up in ORDER BY clauses, so only names from the endpoint's
allow-list get through. Services call ``resolve_sort`` with the raw query
parameters and pass the returned ``Sort`` to their repository.
"""

from collections.abc import Collection
from dataclasses import dataclass
from enum import StrEnum

from homecare.exceptions import InvalidSortFieldError, ValidationError


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Sort:
    """A validated sort request: a field from the allow-list plus a direction."""

    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


def resolve_sort(
    sort_by: str | None,
    sort_dir: str | None,
    allowed_fields: Collection[str],
) -> Sort | None:
    """Validate raw sort parameters against ``allowed_fields``.

    Returns None when no sort field was requested. A missing direction means
    ascending; the direction is matched case-insensitively.

    Raises:
        InvalidSortFieldError: ``sort_by`` is not in ``allowed_fields``.
        ValidationError: ``sort_dir`` is neither ``asc`` nor ``desc``.
    """
    if sort_by and sort_by not in allowed_fields:
        raise InvalidSortFieldError(sort_by, allowed_fields)

    direction = SortDirection.ASC
    if sort_dir is not None:
        try:
            direction = SortDirection(sort_dir.lower())
        except ValueError as exc:
            raise ValidationError(
                f"Invalid sort direction: '{sort_dir}'. Use 'asc' or 'desc'", cause=exc
            ) from exc

    if not sort_by:
        return None
    return Sort(field=sort_by, direction=direction)
