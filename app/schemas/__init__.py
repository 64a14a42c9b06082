"""Pydantic request/response schemas."""

from app.schemas.auth import (
    LoginNotFound,
    LoginRequest,
    LoginResponse,
    SecretResponse,
    UserCreate,
    UserCreated,
)
from app.schemas.health import HealthResponse
from app.schemas.plant import PlantCreate, PlantRead, PlantUpdate

__all__ = [
    "HealthResponse",
    "LoginNotFound",
    "LoginRequest",
    "LoginResponse",
    "PlantCreate",
    "PlantRead",
    "PlantUpdate",
    "SecretResponse",
    "UserCreate",
    "UserCreated",
]
