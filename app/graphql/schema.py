"""GraphQL schema: one resolver per query/mutation, each delegating to a single service call."""

import logging

import strawberry
from graphql import GraphQLError
from strawberry.extensions import MaskErrors
from strawberry.types import ExecutionContext, Info
from strawberry.utils.logging import StrawberryLogger

from app.core.errors import AppError, InternalError
from app.graphql.context import GraphQLContext
from app.graphql.inputs import (
    BookFilterInput,
    BookInput,
    BookUpdateInput,
    ChangePasswordInput,
    LoginInput,
    RegisterInput,
    UpdateUserInput,
    supplied_fields,
)
from app.graphql.types import AuthPayload, BookType, UserRole, UserType
from app.schemas.common import DEFAULT_PAGE_SIZE
from app.services import auth as auth_service
from app.services import books as book_service
from app.services import users as user_service

logger = logging.getLogger(__name__)

ContextInfo = Info[GraphQLContext, None]


@strawberry.type
class Query:
    @strawberry.field(description="Current user profile")
    def me(self, info: ContextInfo) -> UserType:
        return UserType.from_model(user_service.get_me(info.context.user))

    @strawberry.field(description="User by id (own profile, or any profile for admins)")
    def user(self, info: ContextInfo, id: strawberry.ID) -> UserType:
        ctx = info.context
        return UserType.from_model(user_service.get_user(ctx.db, ctx.user, id))

    @strawberry.field(description="All users (admin only)")
    def users(
        self,
        info: ContextInfo,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
        role: UserRole | None = None,
        is_active: bool | None = None,
    ) -> list[UserType]:
        ctx = info.context
        filters = {"role": role.value if role else None, "is_active": is_active}
        rows = user_service.list_users(ctx.db, ctx.user, filters, limit=limit, offset=offset)
        return [UserType.from_model(u) for u in rows]

    @strawberry.field(description="Search users by username, email or name (admin only)")
    def search_users(
        self,
        info: ContextInfo,
        query: str,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[UserType]:
        ctx = info.context
        rows = user_service.search_users(ctx.db, ctx.user, query, limit=limit, offset=offset)
        return [UserType.from_model(u) for u in rows]

    @strawberry.field
    def books(
        self,
        info: ContextInfo,
        filter: BookFilterInput | None = None,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[BookType]:
        ctx = info.context
        rows = book_service.list_books(
            ctx.db, ctx.user, supplied_fields(filter), limit=limit, offset=offset
        )
        return [BookType.from_model(b) for b in rows]

    @strawberry.field
    def book(self, info: ContextInfo, id: strawberry.ID) -> BookType:
        ctx = info.context
        return BookType.from_model(book_service.get_book(ctx.db, ctx.user, id))

    @strawberry.field(description="Case-insensitive match on title, author or genre")
    def search_books(
        self,
        info: ContextInfo,
        query: str,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[BookType]:
        ctx = info.context
        rows = book_service.search_books(ctx.db, ctx.user, query, limit=limit, offset=offset)
        return [BookType.from_model(b) for b in rows]

    @strawberry.field
    def books_by_genre(
        self,
        info: ContextInfo,
        genre: str,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[BookType]:
        ctx = info.context
        rows = book_service.books_by_genre(ctx.db, ctx.user, genre, limit=limit, offset=offset)
        return [BookType.from_model(b) for b in rows]

    @strawberry.field
    def books_by_author(
        self,
        info: ContextInfo,
        author: str,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[BookType]:
        ctx = info.context
        rows = book_service.books_by_author(ctx.db, ctx.user, author, limit=limit, offset=offset)
        return [BookType.from_model(b) for b in rows]


@strawberry.type
class Mutation:
    @strawberry.mutation
    def register(self, info: ContextInfo, input: RegisterInput) -> AuthPayload:
        result = auth_service.register(info.context.db, supplied_fields(input))
        return AuthPayload(token=result.token, user=UserType.from_model(result.user))

    @strawberry.mutation
    def login(self, info: ContextInfo, input: LoginInput) -> AuthPayload:
        result = auth_service.login(info.context.db, supplied_fields(input))
        return AuthPayload(token=result.token, user=UserType.from_model(result.user))

    @strawberry.mutation
    def logout(self, info: ContextInfo) -> str:
        return auth_service.logout(info.context.user)

    @strawberry.mutation(description="Update a profile (self or admin; role and isActive are admin-only)")
    def update_user(
        self, info: ContextInfo, id: strawberry.ID, input: UpdateUserInput
    ) -> UserType:
        ctx = info.context
        return UserType.from_model(
            user_service.update_user(ctx.db, ctx.user, id, supplied_fields(input))
        )

    @strawberry.mutation
    def change_password(self, info: ContextInfo, input: ChangePasswordInput) -> UserType:
        ctx = info.context
        return UserType.from_model(
            user_service.change_password(ctx.db, ctx.user, supplied_fields(input))
        )

    @strawberry.mutation(description="Delete a user and their books (admin only)")
    def delete_user(self, info: ContextInfo, id: strawberry.ID) -> bool:
        ctx = info.context
        return user_service.delete_user(ctx.db, ctx.user, id)

    @strawberry.mutation(description="Activate/deactivate a user (admin only)")
    def toggle_user_status(self, info: ContextInfo, id: strawberry.ID) -> UserType:
        ctx = info.context
        return UserType.from_model(user_service.toggle_user_status(ctx.db, ctx.user, id))

    @strawberry.mutation
    def create_book(self, info: ContextInfo, input: BookInput) -> BookType:
        ctx = info.context
        return BookType.from_model(book_service.create_book(ctx.db, ctx.user, supplied_fields(input)))

    @strawberry.mutation
    def update_book(
        self, info: ContextInfo, id: strawberry.ID, input: BookUpdateInput
    ) -> BookType:
        ctx = info.context
        return BookType.from_model(
            book_service.update_book(ctx.db, ctx.user, id, supplied_fields(input))
        )

    @strawberry.mutation
    def delete_book(self, info: ContextInfo, id: strawberry.ID) -> str:
        ctx = info.context
        return book_service.delete_book(ctx.db, ctx.user, id)


def should_mask_error(error: GraphQLError) -> bool:
    """
    Hide unexpected exceptions from clients. Application errors and GraphQL
    parse/validation errors (no original exception) pass through unchanged.
    """
    original = error.original_error
    return original is not None and not isinstance(original, AppError)


class MaskInternalErrors(MaskErrors):
    """MaskErrors that also tags the generic message with the INTERNAL_ERROR code.

    Registered as a class; Strawberry creates one instance per operation.
    """

    def __init__(self, *, execution_context: ExecutionContext | None = None) -> None:
        super().__init__(
            should_mask_error=should_mask_error,
            error_message=InternalError.default_message,
        )

    def anonymise_error(self, error: GraphQLError) -> GraphQLError:
        return GraphQLError(
            self.error_message,
            nodes=error.nodes,
            source=error.source,
            positions=error.positions,
            path=error.path,
            extensions={"code": InternalError.code},
        )


class CatalogSchema(strawberry.Schema):
    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        """Runs before masking: client errors log at INFO, anything else with its traceback."""
        for error in errors:
            if isinstance(error.original_error, AppError):
                logger.info(
                    "GraphQL %s at %s: %s",
                    error.original_error.code,
                    ".".join(str(p) for p in error.path or ()),
                    error.message,
                )
            else:
                StrawberryLogger.error(error, execution_context)


schema = CatalogSchema(
    query=Query,
    mutation=Mutation,
    extensions=[MaskInternalErrors],
)
