"""Registration endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.deps import get_db
from app.schemas.auth import UserCreate, UserCreated
from app.services.users import create_user

router = APIRouter()


@router.post("", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def register_user(
    body: UserCreate,
    db: Annotated[Session, Depends(get_db)],
) -> UserCreated:
    """Create a user and return its id and access token. Name and email must be unused."""
    user = create_user(db, body.name, body.email, body.password)
    return UserCreated(id=user.id, access_token=user.access_token)
