"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import Request
from graphql import GraphQLError
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter
from strawberry.http import GraphQLHTTPResponse
from strawberry.schema.config import StrawberryConfig
from strawberry.types import ExecutionContext, ExecutionResult

from ..auth.exceptions import UnauthorizedError
from ..auth.middleware import resolve_identity
from ..config import settings
from ..logging import get_logger
from .errors import format_error
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)


class DirectorySchema(strawberry.Schema):
    """Schema that reports resolver errors through structlog."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        for error in errors:
            if isinstance(error.original_error, UnauthorizedError):
                logger.info("Rejected unauthenticated operation", path=error.path)
            else:
                logger.error(
                    "GraphQL error",
                    message=error.message,
                    path=error.path,
                    exc_info=error.original_error,
                )


# Field names are exposed exactly as declared (first_name, usernameOrEmail, ...)
schema = DirectorySchema(
    query=Query,
    mutation=Mutation,
    config=StrawberryConfig(auto_camel_case=False),
)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Raises:
        Exception: If the schema is invalid or introspection fails
    """
    from graphql import get_introspection_query, graphql_sync

    graphql_schema = schema._schema

    errors = gql_validate_schema(graphql_schema)
    if errors:
        error_messages = [str(e) for e in errors]
        raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

    result = graphql_sync(graphql_schema, get_introspection_query())
    if result.errors:
        error_messages = [str(e) for e in result.errors]
        raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

    logger.info("GraphQL schema validation successful")


async def enforce_upload_limits(request: Request) -> None:
    """Reject multipart requests carrying more files than allowed.

    Starlette answers 400 once `max_files` is exceeded and caches the parsed
    form on the request, so the GraphQL view reuses it.
    """
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith("multipart/form-data"):
        return

    await request.form(max_files=settings.max_upload_files)


class DirectoryGraphQLRouter(GraphQLRouter[dict[str, Any], None]):
    """GraphQL router that reduces transport errors to `{message, code}`."""

    async def process_result(
        self, request: Request, result: ExecutionResult
    ) -> GraphQLHTTPResponse:
        data: GraphQLHTTPResponse = {"data": result.data}

        if result.errors:
            data["errors"] = [format_error(err) for err in result.errors]  # type: ignore[typeddict-item]

        return data


def create_graphql_router() -> DirectoryGraphQLRouter:
    """Create a GraphQL router for FastAPI."""

    async def get_context(request: Request) -> dict[str, Any]:
        """Get the context for GraphQL resolvers."""
        await enforce_upload_limits(request)
        return {
            "request": request,
            "identity": resolve_identity(request),
        }

    return DirectoryGraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql",
        context_getter=get_context,
        multipart_uploads_enabled=True,
    )
