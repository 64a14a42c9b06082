"""Request/response schemas for registration, login and the protected route."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserCreate(BaseModel):
    """Registration payload."""

    name: str = Field(..., min_length=3, max_length=255, description="Unique display name")
    email: str = Field(..., min_length=1, max_length=255, description="Unique email address")
    password: str = Field(..., min_length=1, max_length=128, description="Plain-text password")


class UserCreated(BaseModel):
    """Id and access token of a newly registered user."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    access_token: str


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class LoginResponse(BaseModel):
    """Identity and the token issued at registration."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    user_id: str
    access_token: str


class LoginNotFound(BaseModel):
    """Returned when the email is unknown or the password does not match."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    not_found: Literal[True] = True


class SecretResponse(BaseModel):
    secret: str
