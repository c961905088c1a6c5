"""
Per-operation response payloads.

Every payload carries `success` and `message`; domain failures are reported
here rather than raised.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import strawberry

from .employee import Employee
from .user import User

if TYPE_CHECKING:
    from ..validators import FieldViolation


@strawberry.type
class FieldError:
    field: str
    message: str

    @classmethod
    def from_violations(cls, violations: Iterable[FieldViolation]) -> list[FieldError]:
        return [cls(field=v.field, message=v.message) for v in violations]


@strawberry.type
class AuthPayload:
    success: bool
    message: str
    token: str | None = None
    user: User | None = None
    errors: list[FieldError] | None = None


@strawberry.type
class EmployeeResponse:
    success: bool
    message: str
    employee: Employee | None = None
    errors: list[FieldError] | None = None


@strawberry.type
class EmployeesResponse:
    success: bool
    message: str
    employees: list[Employee] = strawberry.field(default_factory=list)


@strawberry.type
class GenericResponse:
    success: bool
    message: str
