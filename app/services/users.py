"""Credential store: create users and look them up by email or access token."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.core.security import hash_password, issue_access_token, verify_password
from app.models import User

logger = logging.getLogger(__name__)

UNIQUE_FIELDS = ("name", "email")


def _taken_fields(session: Session, name: str, email: str) -> dict[str, str]:
    errors: dict[str, str] = {}
    if session.query(User.id).filter(User.name == name).first() is not None:
        errors["name"] = f"name '{name}' is already taken"
    if session.query(User.id).filter(User.email == email).first() is not None:
        errors["email"] = f"email '{email}' is already registered"
    return errors


def create_user(session: Session, name: str, email: str, password: str) -> User:
    """
    Hash the password, issue an access token and persist a new user.

    Raises ValidationError (duplicate=True) when name or email is already used,
    including when a concurrent registration wins the unique index.
    """
    taken = _taken_fields(session, name, email)
    if taken:
        raise ValidationError("Could not create user. Please try again!", taken, duplicate=True)

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        access_token=issue_access_token(),
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        taken = _taken_fields(session, name, email) or {
            "email": "name or email is already registered"
        }
        raise ValidationError(
            "Could not create user. Please try again!", taken, duplicate=True
        ) from e
    session.refresh(user)
    logger.info("User registered", extra={"user_id": user.id})
    return user


def find_by_email(session: Session, email: str) -> User | None:
    return session.query(User).filter(User.email == email).first()


def find_by_token(session: Session, token: str) -> User | None:
    """Exact-match lookup of the access token; empty tokens never match."""
    if not token:
        return None
    return session.query(User).filter(User.access_token == token).first()


def authenticate_credentials(session: Session, email: str, password: str) -> User | None:
    """Return the user when email exists and password matches; None otherwise."""
    user = find_by_email(session, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login rejected: unknown email or wrong password")
        return None
    return user
