"""Request-scoped dependencies resolved from the AppContext on app.state."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.context import AppContext
from app.services.image_upload import ImageStore


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_db(
    ctx: Annotated[AppContext, Depends(get_context)],
) -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = ctx.new_session()
    try:
        yield db
    finally:
        db.close()


def get_image_store(ctx: Annotated[AppContext, Depends(get_context)]) -> ImageStore:
    return ctx.image_store
