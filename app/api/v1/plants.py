"""Plant CRUD endpoints. Creation accepts JSON or multipart form data with an optional image."""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from app.api.v1.deps import get_db, get_image_store
from app.core.errors import ValidationError
from app.models import Plant
from app.schemas.plant import PlantRead
from app.services.image_upload import ImageStore
from app.services.plants import (
    create_plant,
    delete_plant,
    get_plant,
    list_plants,
    parse_plant_create,
    parse_plant_update,
    update_plant,
)

router = APIRouter()

IMAGE_FIELD = "image"


def _is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


async def _get_plant_input_from_request(
    request: Request,
) -> tuple[dict[str, Any], UploadFile | None]:
    """Read plant fields and the optional image part from a JSON or form request."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "application/json":
        try:
            body = await request.json()
        except json.JSONDecodeError as e:
            raise ValidationError(
                "Could not create plant profile", {"body": f"Invalid JSON: {e!s}"}
            ) from e
        if not isinstance(body, dict):
            raise ValidationError(
                "Could not create plant profile", {"body": "must be a JSON object"}
            )
        return body, None
    if content_type in ("multipart/form-data", "application/x-www-form-urlencoded"):
        form = await request.form()
        fields: dict[str, Any] = {}
        image: UploadFile | None = None
        for key, value in form.multi_items():
            if _is_upload_file(value):
                if key == IMAGE_FIELD:
                    image = value  # type: ignore[assignment]
                continue
            # Browsers send empty strings for untouched inputs; treat them as omitted.
            if isinstance(value, str) and value.strip() == "":
                continue
            fields[key] = value
        return fields, image
    raise HTTPException(
        status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
        detail="Content-Type must be application/json or multipart/form-data.",
    )


@router.get("", response_model=list[PlantRead])
def get_plants(db: Annotated[Session, Depends(get_db)]) -> list[Plant]:
    """List every plant in creation order."""
    return list_plants(db)


@router.get("/{plant_id}", response_model=PlantRead)
def get_plant_by_id(plant_id: str, db: Annotated[Session, Depends(get_db)]) -> Plant:
    return get_plant(db, plant_id)


@router.post("", response_model=PlantRead, status_code=status.HTTP_201_CREATED)
async def create_plant_profile(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    image_store: Annotated[ImageStore, Depends(get_image_store)],
) -> Plant:
    """
    Create a plant.

    - **JSON body**: `Content-Type: application/json` with the plant fields.
    - **Form upload**: `Content-Type: multipart/form-data` with the plant fields
      and an optional `image` file (JPG or PNG), stored externally; its URL is
      saved on the plant.

    Fields are validated before the image is uploaded, so invalid input never
    leaves an orphaned image behind.
    """
    fields, image = await _get_plant_input_from_request(request)
    plant_input = parse_plant_create(fields)

    image_url: str | None = None
    if image is not None:
        data = await image.read()
        image_url = await image_store.store(
            data,
            filename=image.filename,
            content_type=image.content_type,
        )
    return create_plant(db, plant_input, image=image_url)


@router.put("/{plant_id}", response_model=PlantRead)
def update_plant_profile(
    plant_id: str,
    body: Annotated[dict[str, Any], Body()],
    db: Annotated[Session, Depends(get_db)],
) -> Plant:
    """Replace the given fields of a plant; fields not in the body keep their values."""
    changes = parse_plant_update(body)
    return update_plant(db, plant_id, changes)


@router.delete("/{plant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_plant_profile(plant_id: str, db: Annotated[Session, Depends(get_db)]) -> Response:
    delete_plant(db, plant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
