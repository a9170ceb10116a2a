"""
Create a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD [role] [--email EMAIL]
Example:
  python -m app.scripts.create_user admin your-secure-password admin
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal, commit_or_raise
from app.core.errors import AppError
from app.core.logging_config import configure_logging
from app.core.security import hash_password
from app.models.user import USER_ROLES, User
from app.schemas.auth import RegisterInput
from app.services.validation import validate_input

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    parser = argparse.ArgumentParser(description="Create a book catalog user (admins cannot self-register).")
    parser.add_argument("username", help="Username (3-30 letters or digits)")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=list(USER_ROLES))
    parser.add_argument("--email", default=None, help="Optional email address")
    args = parser.parse_args(argv)

    try:
        body = validate_input(
            RegisterInput,
            {"username": args.username, "password": args.password, "email": args.email},
        )
    except AppError as e:
        print(e.message, file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.username == body.username).first()
        if existing:
            print(f"User '{body.username}' already exists.", file=sys.stderr)
            return 1
        if body.email and db.query(User).filter(User.email == body.email).first():
            print(f"Email '{body.email}' is already in use.", file=sys.stderr)
            return 1
        user = User(
            username=body.username,
            email=body.email,
            password_hash=hash_password(body.password),
            role=args.role,
        )
        db.add(user)
        try:
            commit_or_raise(db, "Failed to create user", duplicate_message="Username or email already exists")
        except AppError as e:
            print(e.message, file=sys.stderr)
            return 1
        logger.info("Created user id=%s username=%s role=%s", user.id, user.username, user.role)
        print(f"Created user '{body.username}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
