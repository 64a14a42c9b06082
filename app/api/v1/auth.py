"""Login and the access-token dependency that guards protected routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from app.api.v1.deps import get_db
from app.core.errors import UnauthenticatedError
from app.models import User
from app.schemas.auth import LoginNotFound, LoginRequest, LoginResponse
from app.services.users import authenticate_credentials, find_by_token

logger = logging.getLogger(__name__)
router = APIRouter()

# The raw header value is the token; no "Bearer" scheme keyword.
access_token_header = APIKeyHeader(name="Authorization", auto_error=False)


def get_current_user(
    token: Annotated[str | None, Depends(access_token_header)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Dependency: resolve the Authorization header to a user. Raises UnauthenticatedError (401)."""
    user = find_by_token(db, token or "")
    if user is None:
        logger.debug("Rejected request with missing or unknown access token")
        raise UnauthenticatedError()
    return user


def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse | LoginNotFound:
    """
    Check email and password; returns the user's name, id and access token.
    Unknown email or wrong password returns {"notFound": true} rather than an error.
    """
    user = authenticate_credentials(db, body.email, body.password)
    if user is None:
        return LoginNotFound()
    return LoginResponse(name=user.name, user_id=user.id, access_token=user.access_token)


# One handler, two paths: /login is the original name, /sessions the resource-style alias.
for path in ("/login", "/sessions"):
    router.add_api_route(
        path,
        login,
        methods=["POST"],
        response_model=LoginResponse | LoginNotFound,
        tags=["auth"],
    )
