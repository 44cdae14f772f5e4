"""Routes that raise each kind of failure, for HTTP-level tests."""

from fastapi import APIRouter, HTTPException, Query
from sqlalchemy.exc import IntegrityError

from homecare.exceptions import (
    AuthenticationError,
    BusinessRuleError,
    ConflictError,
    ResourceNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from homecare.schemas import envelope
from homecare.schemas.envelope import ResponseEnvelope
from homecare.sorting import resolve_sort

PATIENT_SORT_FIELDS = frozenset({"firstName", "lastName", "medicaidId", "status"})

# Distinctive text that must never appear in a response body
LEAKED_SECRET = "password=hunter2 host=db-primary.internal"

router = APIRouter(prefix="/samples")


@router.get("/patients")
async def list_patients(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    sort_by: str | None = None,
    sort_dir: str | None = None,
) -> dict[str, object]:
    sort = resolve_sort(sort_by, sort_dir, PATIENT_SORT_FIELDS)
    body = envelope.success(
        {
            "items": [],
            "limit": limit,
            "offset": offset,
            "sort": None if sort is None else f"{sort.field} {sort.direction}",
        }
    )
    return body.to_json()


@router.get("/patients/{patient_id}")
async def get_patient(patient_id: int) -> ResponseEnvelope[None]:
    raise ResourceNotFoundError("Patient", patient_id)


@router.post("/check-in")
async def check_in() -> ResponseEnvelope[None]:
    raise ValidationError("Invalid GPS coordinates")


@router.post("/check-out")
async def check_out() -> ResponseEnvelope[None]:
    raise BusinessRuleError("Must check in before checking out")


@router.post("/duplicate")
async def duplicate() -> ResponseEnvelope[None]:
    raise ConflictError(
        "Already checked in for this service delivery",
        cause=KeyError(LEAKED_SECRET),
    )


@router.get("/admin")
async def admin() -> ResponseEnvelope[None]:
    raise UnauthorizedError()


@router.get("/me")
async def me() -> ResponseEnvelope[None]:
    raise AuthenticationError()


@router.get("/staff-only")
async def staff_only() -> ResponseEnvelope[None]:
    raise HTTPException(status_code=403, detail="Staff only")


@router.post("/integrity")
async def integrity() -> ResponseEnvelope[None]:
    raise IntegrityError(
        "INSERT INTO patients (medicaid_id) VALUES (%(medicaid_id)s)",
        {"medicaid_id": "M-1"},
        Exception(f'duplicate key value violates unique constraint "uq_patients" {LEAKED_SECRET}'),
    )


@router.get("/crash")
async def crash() -> ResponseEnvelope[None]:
    raise RuntimeError(f"connection refused: {LEAKED_SECRET}")
