"""Per-request GraphQL context: the database session and the acting user, passed explicitly to every resolver."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from app.core.database import get_db
from app.models import User
from app.services.auth import get_user_from_token

security = HTTPBearer(auto_error=False)


class GraphQLContext(BaseContext):
    """user is None for anonymous requests (no, malformed, expired or revoked token)."""

    def __init__(self, db: Session, user: User | None = None) -> None:
        super().__init__()
        self.db = db
        self.user = user


def get_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> GraphQLContext:
    """Dependency: resolve the Bearer token (if any) into the request context. Never raises."""
    user = get_user_from_token(db, credentials.credentials) if credentials else None
    return GraphQLContext(db=db, user=user)
