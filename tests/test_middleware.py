"""Tests for request logging helpers."""

import json
from types import SimpleNamespace

import pytest

from staffdir.middleware import (
    extract_graphql_operation_name,
    operation_name_from_document,
    sanitize_query_params,
)


def test_sanitize_query_params():
    sanitized = sanitize_query_params({"page": "2", "access_token": "abc", "Password": "x"})

    assert sanitized == {"page": "2", "access_token": "[REDACTED]", "Password": "[REDACTED]"}


@pytest.mark.parametrize(
    ("operation_name", "query", "expected"),
    [
        ("Explicit", "query Other { x }", "Explicit"),
        (None, "query GetAll { getAllEmployees { success } }", "GetAll"),
        (None, "mutation Add($i: AddEmployeeInput!) { addEmployee(input: $i) { success } }", "mutation:Add"),
        (None, "{ getAllEmployees { success } }", "unnamed_operation"),
        (None, "query IntrospectionQuery { __schema { types { name } } }", "__introspection"),
        (None, "", None),
        (None, None, None),
    ],
)
def test_operation_name_from_document(operation_name, query, expected):
    assert operation_name_from_document(operation_name, query) == expected


def _request(path="/graphql", method="POST", content_type="application/json", body=b"", params=None):
    async def read_body():
        return body

    return SimpleNamespace(
        url=SimpleNamespace(path=path),
        method=method,
        headers={"content-type": content_type},
        query_params=params or {},
        body=read_body,
    )


@pytest.mark.asyncio
async def test_extract_from_json_post():
    body = json.dumps({"query": "query Search { searchEmployeeByEid(eid: 1) { success } }"})

    assert await extract_graphql_operation_name(_request(body=body.encode())) == "Search"


@pytest.mark.asyncio
async def test_extract_from_get():
    request = _request(method="GET", params={"query": "query ListAll { getAllEmployees { success } }"})

    assert await extract_graphql_operation_name(request) == "ListAll"


@pytest.mark.asyncio
async def test_multipart_body_is_not_read():
    async def fail():
        raise AssertionError("body must not be read")

    request = _request(content_type="multipart/form-data; boundary=x")
    request.body = fail

    assert await extract_graphql_operation_name(request) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [b"not json", b"[1, 2]", b""])
async def test_unparseable_body(body):
    assert await extract_graphql_operation_name(_request(body=body)) is None


@pytest.mark.asyncio
async def test_other_paths_ignored():
    assert await extract_graphql_operation_name(_request(path="/health", method="GET")) is None
