"""Per-application context: settings plus the DB engine, HTTP client and image store built from them."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import Settings
from app.core.database import build_engine, build_session_factory
from app.models import Base
from app.services.image_upload import CloudinaryUploader, ImageStore

logger = logging.getLogger(__name__)


class AppContext:
    """
    Resources shared by request handlers, created in startup() and released in shutdown().

    An image_store passed at construction replaces the Cloudinary uploader.
    """

    def __init__(self, settings: Settings, image_store: ImageStore | None = None) -> None:
        self.settings = settings
        self._image_store = image_store
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None
        self._http_client: httpx.AsyncClient | None = None

    @property
    def started(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("AppContext.startup() has not been called")
        return self._engine

    @property
    def image_store(self) -> ImageStore:
        if self._image_store is None:
            raise RuntimeError("AppContext.startup() has not been called")
        return self._image_store

    def startup(self) -> None:
        if self.started:
            return
        self._engine = build_engine(self.settings)
        self._session_factory = build_session_factory(self._engine)
        if self.settings.AUTO_CREATE_TABLES:
            Base.metadata.create_all(self._engine)
            logger.info("Database tables created")
        if self._image_store is None:
            self._http_client = httpx.AsyncClient()
            self._image_store = CloudinaryUploader(self.settings, self._http_client)

    async def shutdown(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            self._image_store = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

    def new_session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("AppContext.startup() has not been called")
        return self._session_factory()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session scope for scripts; closed on exit."""
        db = self.new_session()
        try:
            yield db
        finally:
            db.close()
