"""
Employee GraphQL type definitions
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Employees


@strawberry.type
class Employee:
    """Employee record for GraphQL API."""

    id: strawberry.ID = strawberry.field(name="_id")
    first_name: str
    last_name: str
    email: str
    gender: str
    designation: str
    salary: float
    date_of_joining: date
    department: str
    employee_photo: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, employee: Employees) -> Employee:
        return cls(
            id=strawberry.ID(str(employee.id)),
            first_name=employee.first_name,
            last_name=employee.last_name,
            email=employee.email,
            gender=employee.gender,
            designation=employee.designation,
            salary=employee.salary,
            date_of_joining=employee.date_of_joining,
            department=employee.department,
            employee_photo=employee.employee_photo,
            created_at=employee.created_at,
            updated_at=employee.updated_at,
        )
