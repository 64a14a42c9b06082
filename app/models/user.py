"""ORM model for registered users."""

from sqlalchemy import Column, DateTime, String

from app.models.base import Base, new_id, utcnow


class User(Base):
    """
    User account authenticated by an opaque access token.

    access_token is generated once at registration and never rotated.
    """

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    access_token = Column(String(256), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
