"""Pydantic schemas for plant input and output, independent of the ORM model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.models.base import as_utc

NAME_MIN_LEN = 3
NAME_MAX_LEN = 20
NOTES_MAX_LEN = 150


class PlantCreate(BaseModel):
    """Fields accepted when creating a plant. Dates default to creation time when omitted."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    location: str = Field(..., min_length=1, max_length=255)
    acquired_at: datetime | None = None
    type: str | None = Field(default=None, max_length=255)
    notes: str | None = Field(default=None, max_length=NOTES_MAX_LEN)
    water_at: datetime | None = None


class PlantUpdate(BaseModel):
    """
    Partial update: only fields present in the payload are replaced.

    name, location and the two dates may be omitted but not set to null.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    name: str | None = Field(default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    location: str | None = Field(default=None, min_length=1, max_length=255)
    acquired_at: datetime | None = None
    type: str | None = Field(default=None, max_length=255)
    notes: str | None = Field(default=None, max_length=NOTES_MAX_LEN)
    image: str | None = Field(default=None, max_length=2048)
    water_at: datetime | None = None

    @field_validator("name", "location", "acquired_at", "water_at")
    @classmethod
    def reject_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("may not be null")
        return v


class PlantRead(BaseModel):
    """Plant as returned to clients."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    name: str
    location: str
    acquired_at: datetime
    type: str | None = None
    notes: str | None = None
    image: str | None = None
    water_at: datetime

    @field_validator("acquired_at", "water_at")
    @classmethod
    def attach_utc(cls, v: datetime) -> datetime:
        return as_utc(v)
