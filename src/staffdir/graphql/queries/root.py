"""
Root GraphQL query definitions
"""

import strawberry

from ..access_control import IsAuthenticated
from ..types.responses import AuthPayload, EmployeeResponse, EmployeesResponse


@strawberry.input
class LoginInput:
    """Credentials for login; the identifier may be a username or an email."""

    username_or_email: str = strawberry.field(name="usernameOrEmail")
    password: str


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def login(self, info: strawberry.Info, input: LoginInput) -> AuthPayload:
        """Exchange credentials for a token."""
        from ..resolvers.auth import login

        return await login(info, input)

    @strawberry.field(name="getAllEmployees", permission_classes=[IsAuthenticated])
    async def get_all_employees(self, info: strawberry.Info) -> EmployeesResponse:
        """List every employee, newest first."""
        from ..resolvers.employee import resolve_all_employees

        return await resolve_all_employees(info)

    @strawberry.field(name="searchEmployeeByEid", permission_classes=[IsAuthenticated])
    async def search_employee_by_eid(
        self, info: strawberry.Info, eid: strawberry.ID
    ) -> EmployeeResponse:
        """Get one employee by identifier."""
        from ..resolvers.employee import resolve_employee_by_eid

        return await resolve_employee_by_eid(info, eid)

    @strawberry.field(
        name="searchEmployeesByDesignationOrDepartment",
        permission_classes=[IsAuthenticated],
    )
    async def search_employees_by_designation_or_department(
        self,
        info: strawberry.Info,
        designation: str | None = None,
        department: str | None = None,
    ) -> EmployeesResponse:
        """Filter employees by designation and/or department."""
        from ..resolvers.employee import resolve_employees_by_designation_or_department

        return await resolve_employees_by_designation_or_department(
            info, designation, department
        )
