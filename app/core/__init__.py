"""Core app configuration, context and errors."""

from app.core.config import Settings, get_settings
from app.core.context import AppContext

__all__ = ["AppContext", "Settings", "get_settings"]
