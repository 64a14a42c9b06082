"""Protected sample route."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.auth import get_current_user
from app.models import User
from app.schemas.auth import SecretResponse

router = APIRouter()

SECRET_MESSAGE = "This is a top secret message!"


@router.get("", response_model=SecretResponse)
def get_secret(
    _user: Annotated[User, Depends(get_current_user)],
) -> SecretResponse:
    """Fixed payload, only for requests carrying a valid access token."""
    return SecretResponse(secret=SECRET_MESSAGE)
