"""
Root GraphQL mutation definitions
"""

import strawberry
from strawberry.file_uploads import Upload

from ..access_control import IsAuthenticated
from ..types.responses import AuthPayload, EmployeeResponse, GenericResponse


# Input types for mutations
@strawberry.input
class SignupInput:
    """Input for creating an account."""

    username: str
    email: str
    password: str


@strawberry.input
class AddEmployeeInput:
    """Input for creating an employee."""

    first_name: str
    last_name: str
    email: str
    gender: str
    designation: str
    salary: float
    date_of_joining: str
    department: str


@strawberry.input
class UpdateEmployeeInput:
    """Input for updating an employee; omitted fields are left unchanged."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    gender: str | None = None
    designation: str | None = None
    salary: float | None = None
    date_of_joining: str | None = None
    department: str | None = None


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation
    async def signup(self, info: strawberry.Info, input: SignupInput) -> AuthPayload:
        """Create an account and return a token."""
        from ..resolvers.auth import signup

        return await signup(info, input)

    # Employee mutations
    @strawberry.mutation(name="addEmployee", permission_classes=[IsAuthenticated])
    async def add_employee(
        self, info: strawberry.Info, input: AddEmployeeInput, photo: Upload | None = None
    ) -> EmployeeResponse:
        """Create an employee, optionally with a photo."""
        from ..resolvers.employee import add_employee

        return await add_employee(info, input, photo)

    @strawberry.mutation(name="updateEmployeeByEid", permission_classes=[IsAuthenticated])
    async def update_employee_by_eid(
        self,
        info: strawberry.Info,
        eid: strawberry.ID,
        input: UpdateEmployeeInput,
        photo: Upload | None = None,
    ) -> EmployeeResponse:
        """Partially update an employee."""
        from ..resolvers.employee import update_employee_by_eid

        return await update_employee_by_eid(info, eid, input, photo)

    @strawberry.mutation(name="deleteEmployeeByEid", permission_classes=[IsAuthenticated])
    async def delete_employee_by_eid(
        self, info: strawberry.Info, eid: strawberry.ID
    ) -> GenericResponse:
        """Delete an employee."""
        from ..resolvers.employee import delete_employee_by_eid

        return await delete_employee_by_eid(info, eid)
