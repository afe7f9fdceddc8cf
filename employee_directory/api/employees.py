import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from employee_directory.core.deps import get_employee_store
from employee_directory.core.errors import (
    ConflictError,
    ConstraintViolation,
    NotFoundError,
    StoreError,
    ValidationError,
)
from employee_directory.schemas.employee import (
    Employee as EmployeeSchema,
    EmployeeDeleted,
    EmployeeInput,
    ErrorResponse,
    validate_employee,
)
from employee_directory.store.employees import EmployeeStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/employees",
    tags=["employees"],
)

EMAIL_EXISTS = "Employee with this email already exists"
EMAIL_TAKEN = "Email is already taken by another employee"


def _validated(payload: EmployeeInput) -> dict:
    errors = validate_employee(payload)
    if errors:
        raise ValidationError(errors)
    return payload.cleaned()


async def _get_or_404(store: EmployeeStore, employee_id: str):
    employee = await store.find_by_id(employee_id)
    if employee is None:
        raise NotFoundError()
    return employee


@router.get(
    "",
    response_model=List[EmployeeSchema],
)
async def list_employees(
    search: Optional[str] = None,
    store: EmployeeStore = Depends(get_employee_store),
):
    if search and search.strip():
        return await store.search(search)
    return await store.list_all()


@router.get(
    "/{employee_id}",
    response_model=EmployeeSchema,
    responses={404: {"model": ErrorResponse}},
)
async def get_employee(
    employee_id: str,
    store: EmployeeStore = Depends(get_employee_store),
):
    return await _get_or_404(store, employee_id)


@router.post(
    "",
    response_model=EmployeeSchema,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_employee(
    payload: EmployeeInput,
    store: EmployeeStore = Depends(get_employee_store),
):
    fields = _validated(payload)

    # advisory: the unique constraint on email has the final word
    if await store.find_by_email(fields["email"]) is not None:
        raise ConflictError(EMAIL_EXISTS)

    try:
        employee = await store.insert(**fields)
    except ConstraintViolation as exc:
        raise ConflictError(EMAIL_EXISTS) from exc

    logger.info("Created employee %s", employee.id)
    return employee


@router.put(
    "/{employee_id}",
    response_model=EmployeeSchema,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_employee(
    employee_id: str,
    payload: EmployeeInput,
    store: EmployeeStore = Depends(get_employee_store),
):
    fields = _validated(payload)
    await _get_or_404(store, employee_id)

    owner = await store.find_by_email(fields["email"])
    if owner is not None and owner.id != employee_id:
        raise ConflictError(EMAIL_TAKEN)

    try:
        employee = await store.update(employee_id, **fields)
    except ConstraintViolation as exc:
        raise ConflictError(EMAIL_TAKEN) from exc

    # deleted between the existence check and the write
    if employee is None:
        raise NotFoundError()

    logger.info("Updated employee %s", employee_id)
    return employee


@router.delete(
    "/{employee_id}",
    response_model=EmployeeDeleted,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def delete_employee(
    employee_id: str,
    store: EmployeeStore = Depends(get_employee_store),
):
    await _get_or_404(store, employee_id)

    if not await store.delete_by_id(employee_id):
        logger.error("Employee %s existed but no row was removed", employee_id)
        raise StoreError("Failed to delete employee")

    logger.info("Deleted employee %s", employee_id)
    return EmployeeDeleted()
