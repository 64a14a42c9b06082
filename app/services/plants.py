"""Resource store for plants plus the input validation that precedes it."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError, field_errors
from app.models import Plant
from app.models.base import as_utc, utcnow
from app.schemas.plant import PlantCreate, PlantUpdate

logger = logging.getLogger(__name__)

PLANT_NOT_FOUND = "Plant not found"
DATE_FIELDS = frozenset({"acquired_at", "water_at"})


def parse_plant_create(data: Mapping[str, Any]) -> PlantCreate:
    """Validate untyped input into PlantCreate or raise ValidationError with field details."""
    try:
        return PlantCreate.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError("Could not create plant profile", field_errors(e.errors())) from e


def parse_plant_update(data: Any) -> PlantUpdate:
    """Validate a partial update payload; only keys present are applied later."""
    if not isinstance(data, Mapping):
        raise ValidationError(
            "Could not update plant profile", {"body": "must be a JSON object"}
        )
    try:
        return PlantUpdate.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError("Could not update plant profile", field_errors(e.errors())) from e


def create_plant(session: Session, fields: PlantCreate, image: str | None = None) -> Plant:
    """Persist a new plant. Missing dates default to the creation time. Dates are stored in UTC."""
    now = utcnow()
    plant = Plant(
        name=fields.name,
        location=fields.location,
        acquired_at=as_utc(fields.acquired_at) if fields.acquired_at else now,
        type=fields.type,
        notes=fields.notes,
        image=image,
        water_at=as_utc(fields.water_at) if fields.water_at else now,
        created_at=now,
    )
    session.add(plant)
    session.commit()
    session.refresh(plant)
    logger.info("Plant created", extra={"plant_id": plant.id, "has_image": image is not None})
    return plant


def list_plants(session: Session) -> list[Plant]:
    """All plants in insertion order; no pagination."""
    return session.query(Plant).order_by(Plant.created_at, Plant.id).all()


def get_plant(session: Session, plant_id: str) -> Plant:
    """Fetch one plant. Ids that are malformed or unknown both raise NotFoundError."""
    plant = session.get(Plant, plant_id)
    if plant is None:
        raise NotFoundError(PLANT_NOT_FOUND)
    return plant


def update_plant(session: Session, plant_id: str, changes: PlantUpdate) -> Plant:
    """Replace only the fields present in changes and return the updated plant."""
    plant = get_plant(session, plant_id)
    updated = changes.model_dump(exclude_unset=True)
    for field in DATE_FIELDS & updated.keys():
        updated[field] = as_utc(updated[field])
    for field, value in updated.items():
        setattr(plant, field, value)
    session.commit()
    session.refresh(plant)
    logger.info("Plant updated", extra={"plant_id": plant.id, "fields": sorted(updated)})
    return plant


def delete_plant(session: Session, plant_id: str) -> None:
    plant = get_plant(session, plant_id)
    session.delete(plant)
    session.commit()
    logger.info("Plant deleted", extra={"plant_id": plant_id})
