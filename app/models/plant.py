"""ORM model for plant records."""

from sqlalchemy import Column, DateTime, String

from app.models.base import Base, new_id, utcnow


class Plant(Base):
    """
    A tracked plant. Not linked to the user who created it: the plant list is shared.

    image holds the URL returned by the image store, never the binary itself.
    """

    __tablename__ = "plants"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(20), nullable=False)
    location = Column(String(255), nullable=False)
    acquired_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    type = Column(String(255), nullable=True)
    notes = Column(String(150), nullable=True)
    image = Column(String(2048), nullable=True)
    water_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
