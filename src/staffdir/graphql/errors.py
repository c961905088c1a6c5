"""
Client-facing formatting of transport-level GraphQL errors
"""

from typing import Any

from graphql import GraphQLError

DEFAULT_ERROR_CODE = "GRAPHQL_ERROR"


def error_code(error: GraphQLError) -> str:
    """Pick the code carried by the underlying exception, if any."""
    code = getattr(error.original_error, "code", None)
    if isinstance(code, str) and code:
        return code

    extension_code = (error.extensions or {}).get("code")
    if isinstance(extension_code, str) and extension_code:
        return extension_code

    return DEFAULT_ERROR_CODE


def format_error(error: GraphQLError) -> dict[str, Any]:
    return {"message": error.message, "code": error_code(error)}
