"""Error kinds raised by stores and adapters; converted to JSON bodies in app.main."""

from collections.abc import Iterable, Mapping
from typing import Any, Literal

_REQUEST_PARTS = frozenset({"body", "query", "path", "header"})

UploadFailureReason = Literal[
    "unsupported_format",
    "too_large",
    "not_configured",
    "storage_unavailable",
    "storage_rejected",
]


class AppError(Exception):
    """Base class for errors that map to a structured HTTP response."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """Raised when a field is missing, violates a constraint, or is already taken."""

    def __init__(
        self,
        message: str,
        errors: dict[str, str] | None = None,
        duplicate: bool = False,
    ) -> None:
        self.errors = errors or {}
        self.duplicate = duplicate
        super().__init__(message)


class NotFoundError(AppError):
    """Raised when an identifier does not resolve to an existing record."""


class UnauthenticatedError(AppError):
    """Raised when the Authorization header is missing or matches no user."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class UploadError(AppError):
    """Raised when an image cannot be accepted or stored; never a plant field error."""

    def __init__(self, message: str, reason: UploadFailureReason) -> None:
        self.reason = reason
        super().__init__(message)


def field_errors(details: Iterable[Mapping[str, Any]]) -> dict[str, str]:
    """
    Flatten pydantic error details to field -> message, dropping the request-part prefix.

    Errors that are not located at a named field (for example malformed JSON, reported
    at a character offset) are keyed as "body".
    """
    errors: dict[str, str] = {}
    for detail in details:
        loc = list(detail.get("loc", ()))
        if loc and loc[0] in _REQUEST_PARTS:
            loc = loc[1:]
        key = ".".join(str(p) for p in loc) if loc and isinstance(loc[0], str) else "body"
        errors.setdefault(key, detail.get("msg", "Invalid value"))
    return errors
