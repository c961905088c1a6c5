"""Resolvers for employee queries and mutations."""

from __future__ import annotations

import dataclasses
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...database.connection import get_async_session
from ...dbmodels import GENDERS, MIN_SALARY, Employees
from ...logging import get_logger
from ...media.base import MediaUploadError
from ...media.upload import discard_photo, upload_photo
from ..access_control import get_identity_from_info
from ..types.employee import Employee
from ..types.responses import EmployeeResponse, EmployeesResponse, FieldError, GenericResponse
from ..validators import validate, validate_supplied

if TYPE_CHECKING:
    from strawberry.file_uploads import Upload

    from ..mutations.root import AddEmployeeInput, UpdateEmployeeInput

logger = get_logger(__name__)

NOT_FOUND = "Employee not found"
UPLOAD_FAILED = "Photo upload failed"
EMAIL_EXISTS = "Employee email already exists"
EMAIL_IN_USE = "Email already in use"
INVALID_DATE = FieldError(
    field="date_of_joining", message="date_of_joining must be a valid date (YYYY-MM-DD)"
)


def parse_date(value: str) -> date | None:
    """Parse a YYYY-MM-DD (or full ISO timestamp) string into a calendar date."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


async def _find_employee(session: AsyncSession, eid: str) -> Employees | None:
    try:
        employee_id = UUID(str(eid))
    except ValueError:
        return None
    return await session.get(Employees, employee_id)


async def _email_taken(session: AsyncSession, email: str) -> bool:
    stmt = select(Employees.id).where(Employees.email == email).limit(1)
    return (await session.execute(stmt)).first() is not None


def _acting_user(info: strawberry.Info) -> str | None:
    identity = get_identity_from_info(info)
    return str(identity.user_id) if identity else None


# Query resolvers
async def resolve_all_employees(info: strawberry.Info) -> EmployeesResponse:
    async with get_async_session() as session:
        stmt = select(Employees).order_by(Employees.created_at.desc())
        employees = (await session.execute(stmt)).scalars().all()

    return EmployeesResponse(
        success=True,
        message="Employees fetched",
        employees=[Employee.from_model(e) for e in employees],
    )


async def resolve_employee_by_eid(info: strawberry.Info, eid: str) -> EmployeeResponse:
    async with get_async_session() as session:
        employee = await _find_employee(session, eid)

    if employee is None:
        return EmployeeResponse(success=False, message=NOT_FOUND)
    return EmployeeResponse(
        success=True, message="Employee fetched", employee=Employee.from_model(employee)
    )


async def resolve_employees_by_designation_or_department(
    info: strawberry.Info,
    designation: str | None = None,
    department: str | None = None,
) -> EmployeesResponse:
    """Exact-match filter on designation and/or department; both must match when given."""
    if not designation and not department:
        return EmployeesResponse(
            success=False, message="Provide designation or department", employees=[]
        )

    stmt = select(Employees)
    if designation:
        stmt = stmt.where(Employees.designation == designation)
    if department:
        stmt = stmt.where(Employees.department == department)

    async with get_async_session() as session:
        employees = (
            (await session.execute(stmt.order_by(Employees.created_at.desc()))).scalars().all()
        )

    return EmployeesResponse(
        success=True,
        message="Employees filtered",
        employees=[Employee.from_model(e) for e in employees],
    )


# Mutation resolvers
async def add_employee(
    info: strawberry.Info, input: AddEmployeeInput, photo: Upload | None = None
) -> EmployeeResponse:
    """
    Create an employee record.

    The photo, when given, is uploaded before anything is persisted; a failed
    upload leaves no record behind. No database connection is held while the
    upload runs.
    """
    violations = validate("employee", dataclasses.asdict(input))
    if violations:
        return EmployeeResponse(
            success=False,
            message="Validation failed",
            errors=FieldError.from_violations(violations),
        )

    date_of_joining = parse_date(input.date_of_joining)
    if date_of_joining is None:
        return EmployeeResponse(success=False, message="Validation failed", errors=[INVALID_DATE])

    async with get_async_session() as session:
        email_taken = await _email_taken(session, input.email)
    if email_taken:
        return EmployeeResponse(success=False, message=EMAIL_EXISTS)

    try:
        photo_url = await upload_photo(photo)
    except MediaUploadError as e:
        logger.warning("Employee photo upload failed", error=str(e))
        return EmployeeResponse(success=False, message=UPLOAD_FAILED)

    created = False
    async with get_async_session() as session:
        employee = Employees(
            first_name=input.first_name,
            last_name=input.last_name,
            email=input.email,
            gender=input.gender,
            designation=input.designation,
            salary=float(input.salary),
            date_of_joining=date_of_joining,
            department=input.department,
            employee_photo=photo_url,
        )
        session.add(employee)
        try:
            await session.flush()
            created = True
        except IntegrityError:
            # Another request took the email while the photo was uploading
            await session.rollback()

    if not created:
        await discard_photo(photo_url)
        return EmployeeResponse(success=False, message=EMAIL_EXISTS)

    logger.info(
        "Employee created",
        employee_id=str(employee.id),
        has_photo=photo_url is not None,
        created_by=_acting_user(info),
    )
    return EmployeeResponse(
        success=True, message="Employee created", employee=Employee.from_model(employee)
    )


async def update_employee_by_eid(
    info: strawberry.Info,
    eid: str,
    input: UpdateEmployeeInput,
    photo: Upload | None = None,
) -> EmployeeResponse:
    """
    Partially update an employee.

    Fields left out of the input (or sent as null) keep their stored value,
    including the photo URL when no new photo is uploaded. Supplied fields
    must pass the same rules as on creation. A replaced photo is deleted from
    the media store once the new URL is committed.
    """
    async with get_async_session() as session:
        employee = await _find_employee(session, eid)
        email_taken = (
            employee is not None
            and input.email is not None
            and input.email != employee.email
            and await _email_taken(session, input.email)
        )

    if employee is None:
        return EmployeeResponse(success=False, message=NOT_FOUND)
    if email_taken:
        return EmployeeResponse(success=False, message=EMAIL_IN_USE)

    if input.salary is not None and input.salary < MIN_SALARY:
        return EmployeeResponse(success=False, message=f"salary must be >= {MIN_SALARY}")

    if input.gender is not None and input.gender not in GENDERS:
        return EmployeeResponse(success=False, message="gender must be Male/Female/Other")

    violations = validate_supplied("employee", dataclasses.asdict(input))
    if violations:
        return EmployeeResponse(
            success=False,
            message="Validation failed",
            errors=FieldError.from_violations(violations),
        )

    changes = {
        name: value for name, value in dataclasses.asdict(input).items() if value is not None
    }
    if "date_of_joining" in changes:
        changes["date_of_joining"] = parse_date(changes["date_of_joining"])
        if changes["date_of_joining"] is None:
            return EmployeeResponse(
                success=False, message="Validation failed", errors=[INVALID_DATE]
            )

    new_photo_url = None
    if photo is not None:
        try:
            new_photo_url = await upload_photo(photo)
        except MediaUploadError as e:
            logger.warning("Employee photo upload failed", employee_id=eid, error=str(e))
            return EmployeeResponse(success=False, message=UPLOAD_FAILED)
        changes["employee_photo"] = new_photo_url

    failure = None
    previous_photo_url = None
    async with get_async_session() as session:
        employee = await _find_employee(session, eid)
        if employee is None:
            failure = NOT_FOUND
        else:
            previous_photo_url = employee.employee_photo
            for name, value in changes.items():
                setattr(employee, name, value)
            employee.updated_at = datetime.now(UTC)
            try:
                await session.flush()
            except IntegrityError:
                await session.rollback()
                failure = EMAIL_IN_USE

    if failure is not None:
        await discard_photo(new_photo_url)
        return EmployeeResponse(success=False, message=failure)

    if new_photo_url is not None and previous_photo_url != new_photo_url:
        await discard_photo(previous_photo_url)

    logger.info(
        "Employee updated",
        employee_id=str(employee.id),
        fields=sorted(changes),
        updated_by=_acting_user(info),
    )
    return EmployeeResponse(
        success=True, message="Employee updated", employee=Employee.from_model(employee)
    )


async def delete_employee_by_eid(info: strawberry.Info, eid: str) -> GenericResponse:
    """Delete an employee, then remove their photo from the media store."""
    async with get_async_session() as session:
        employee = await _find_employee(session, eid)
        if employee is None:
            return GenericResponse(success=False, message=NOT_FOUND)

        photo_url = employee.employee_photo
        await session.delete(employee)

    await discard_photo(photo_url)

    logger.info("Employee deleted", employee_id=eid, deleted_by=_acting_user(info))
    return GenericResponse(success=True, message="Employee deleted")
