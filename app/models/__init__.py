"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.plant import Plant
from app.models.user import User

__all__ = ["Base", "Plant", "User"]
