"""GraphQL API: Strawberry schema served through a FastAPI router."""

from strawberry.fastapi import GraphQLRouter

from app.core.config import settings
from app.graphql.context import get_context
from app.graphql.schema import schema

graphql_router = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide="graphiql" if settings.APP_ENV == "dev" else None,
)

__all__ = ["graphql_router", "schema"]
