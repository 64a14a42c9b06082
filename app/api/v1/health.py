"""Liveness endpoint for load balancers: database check plus image storage configuration."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.deps import get_context, get_db
from app.core.context import AppContext
from app.core.database import check_db_connected
from app.schemas.health import HealthResponse
from app.services.image_upload import is_cloudinary_configured

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    ctx: Annotated[AppContext, Depends(get_context)],
    db: Annotated[Session, Depends(get_db)],
) -> HealthResponse:
    """Report whether plants can be stored and whether photos can be uploaded."""
    return HealthResponse(
        environment=ctx.settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        image_storage=(
            "configured" if is_cloudinary_configured(ctx.settings) else "not_configured"
        ),
    )
