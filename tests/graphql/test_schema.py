"""
Tests for the schema surface: naming, the auth guard and error formatting.
"""

import pytest
from graphql import GraphQLError

from staffdir.auth.exceptions import UnauthorizedError
from staffdir.config import settings
from staffdir.graphql.errors import DEFAULT_ERROR_CODE, error_code, format_error
from staffdir.graphql.schema import schema, validate_schema

GUARDED_OPERATIONS = [
    "query { getAllEmployees { success } }",
    'query { searchEmployeeByEid(eid: "abc") { success } }',
    'query { searchEmployeesByDesignationOrDepartment(designation: "x") { success } }',
    'mutation { deleteEmployeeByEid(eid: "abc") { success } }',
    'mutation { updateEmployeeByEid(eid: "abc", input: {}) { success } }',
    """mutation { addEmployee(input: {
        first_name: "a", last_name: "b", email: "a@x.com", gender: "Male",
        designation: "d", salary: 1000, date_of_joining: "2023-01-10", department: "e"
    }) { success } }""",
]


def test_schema_is_valid():
    validate_schema()


def test_field_names_are_exposed_as_declared():
    sdl = schema.as_str()

    assert "_id: ID!" in sdl
    assert "first_name: String!" in sdl
    assert "date_of_joining: Date!" in sdl
    assert "usernameOrEmail: String!" in sdl
    assert "searchEmployeesByDesignationOrDepartment(" in sdl
    assert "updateEmployeeByEid(eid: ID!, input: UpdateEmployeeInput!, photo: Upload" in sdl


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", GUARDED_OPERATIONS)
async def test_employee_operations_require_identity(operation, anonymous_context):
    result = await schema.execute(operation, context_value=anonymous_context)

    assert result.data is None
    assert len(result.errors) == 1
    error = result.errors[0]
    assert isinstance(error.original_error, UnauthorizedError)
    assert format_error(error) == {
        "message": "Unauthorized: missing/invalid token",
        "code": "UNAUTHORIZED",
    }


@pytest.mark.asyncio
async def test_guard_can_be_disabled(db, anonymous_context, monkeypatch):
    monkeypatch.setattr(settings, "auth_enforced", False)

    result = await schema.execute(
        "query { getAllEmployees { success message } }", context_value=anonymous_context
    )

    assert result.errors is None
    assert result.data["getAllEmployees"]["success"] is True


@pytest.mark.asyncio
async def test_identity_resolved_from_request_when_missing_from_context(db):
    from types import SimpleNamespace
    from uuid import uuid4

    from staffdir.auth.tokens import get_token_service

    user = SimpleNamespace(id=uuid4(), username="alice", email="a@x.com")
    token = get_token_service().issue_token(user)
    request = SimpleNamespace(headers={"authorization": f"Bearer {token}"})

    result = await schema.execute(
        "query { getAllEmployees { success } }", context_value={"request": request}
    )

    assert result.errors is None
    assert result.data["getAllEmployees"]["success"] is True


@pytest.mark.asyncio
async def test_syntax_errors_use_default_code(auth_context):
    result = await schema.execute("query { getAllEmployees {", context_value=auth_context)

    assert result.errors
    assert format_error(result.errors[0])["code"] == DEFAULT_ERROR_CODE


class TestErrorCode:
    def test_code_from_original_error(self):
        error = GraphQLError("nope", original_error=UnauthorizedError())

        assert error_code(error) == "UNAUTHORIZED"

    def test_code_from_extensions(self):
        error = GraphQLError("bad input", extensions={"code": "BAD_USER_INPUT"})

        assert error_code(error) == "BAD_USER_INPUT"

    def test_default_code(self):
        error = GraphQLError("boom", original_error=RuntimeError("boom"))

        assert error_code(error) == DEFAULT_ERROR_CODE

    def test_non_string_code_ignored(self):
        class StatusError(Exception):
            code = 500

        error = GraphQLError("boom", original_error=StatusError("boom"))

        assert error_code(error) == DEFAULT_ERROR_CODE
