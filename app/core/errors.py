"""Application error taxonomy.

Every error carries a stable ``code`` that is exposed to GraphQL clients as
``extensions.code``. graphql-core copies the ``extensions`` attribute of the
original exception onto the located error, so services raise these directly
without depending on GraphQL.
"""


class AppError(Exception):
    """Base class for errors that are safe to show to API clients."""

    code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def extensions(self) -> dict[str, str]:
        return {"code": self.code}


class AuthenticationError(AppError):
    """Missing, invalid or expired credentials."""

    code = "UNAUTHENTICATED"
    default_message = "You must be logged in to access this resource"


class AuthorizationError(AppError):
    """Valid identity without the required capability."""

    code = "FORBIDDEN"
    default_message = "Access denied"


class ValidationError(AppError):
    """Malformed or missing input."""

    code = "BAD_USER_INPUT"
    default_message = "Invalid input"


class NotFoundError(AppError):
    code = "NOT_FOUND"
    default_message = "Resource not found"


class InternalError(AppError):
    """Unexpected failure (e.g. database unavailable); message stays generic."""

    code = "INTERNAL_ERROR"
