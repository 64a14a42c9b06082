"""Image upload adapter: validate a plant photo and store it on Cloudinary, returning its URL."""

from __future__ import annotations

import hashlib
import io
import logging
import struct
import time
from typing import TYPE_CHECKING, Protocol

import httpx
from PIL import Image, UnidentifiedImageError

from app.core.errors import UploadError

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# Pillow format name -> (Cloudinary format, content type) for the two accepted raster formats.
IMAGE_FORMATS: dict[str, tuple[str, str]] = {
    "JPEG": ("jpg", "image/jpeg"),
    "PNG": ("png", "image/png"),
}
ALLOWED_FORMATS = tuple(fmt for fmt, _ in IMAGE_FORMATS.values())


class ImageStore(Protocol):
    """Anything that can persist image bytes and hand back a retrievable URL."""

    async def store(
        self,
        data: bytes,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> str: ...


def detect_image_format(data: bytes) -> str | None:
    """
    Return 'jpg' or 'png' when Pillow can open and verify the bytes as that format.

    Anything else, including a valid header followed by a corrupt body, returns None.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            pil_format = img.format
            img.verify()
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
        struct.error,
    ):
        return None
    if pil_format not in IMAGE_FORMATS:
        return None
    return IMAGE_FORMATS[pil_format][0]


def _content_type_for(fmt: str) -> str:
    return next(ct for name, ct in IMAGE_FORMATS.values() if name == fmt)


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary request signature: SHA-1 of sorted key=value pairs joined by '&' plus the secret."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1((to_sign + api_secret).encode("utf-8")).hexdigest()


def is_cloudinary_configured(settings: Settings) -> bool:
    if not settings.CLOUD_NAME or not settings.CLOUD_NAME.strip():
        return False
    if not settings.API_KEY or not settings.API_KEY.strip():
        return False
    if settings.API_SECRET is None:
        return False
    return bool(settings.API_SECRET.get_secret_value().strip())


class CloudinaryUploader:
    """
    Signed uploads to the Cloudinary REST API.

    Images are restricted to JPEG/PNG and capped to IMAGE_MAX_WIDTH x IMAGE_MAX_HEIGHT
    with a "limit" crop, which scales down to fit and never upscales.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient) -> None:
        self.settings = settings
        self.client = client

    def _upload_params(self, timestamp: int) -> dict[str, str]:
        s = self.settings
        return {
            "allowed_formats": ",".join(ALLOWED_FORMATS),
            "folder": s.CLOUDINARY_FOLDER,
            "timestamp": str(timestamp),
            "transformation": f"c_limit,h_{s.IMAGE_MAX_HEIGHT},w_{s.IMAGE_MAX_WIDTH}",
        }

    def _check_payload(self, data: bytes) -> str:
        if not data:
            raise UploadError("Uploaded image is empty.", "unsupported_format")
        if len(data) > self.settings.IMAGE_MAX_BYTES:
            raise UploadError(
                f"Image must not exceed {self.settings.IMAGE_MAX_BYTES} bytes.", "too_large"
            )
        fmt = detect_image_format(data)
        if fmt is None:
            raise UploadError("Image must be a JPG or PNG file.", "unsupported_format")
        return fmt

    async def store(
        self,
        data: bytes,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> str:
        """Upload image bytes and return the secure URL. Raises UploadError on any failure."""
        fmt = self._check_payload(data)
        if not is_cloudinary_configured(self.settings):
            raise UploadError(
                "Image storage is not configured (CLOUD_NAME, API_KEY, API_SECRET).",
                "not_configured",
            )
        api_secret = self.settings.API_SECRET.get_secret_value()  # type: ignore[union-attr]

        params = self._upload_params(int(time.time()))
        form = {
            **params,
            "api_key": self.settings.API_KEY,
            "signature": sign_params(params, api_secret),
        }
        url = f"{self.settings.CLOUDINARY_UPLOAD_URL}/{self.settings.CLOUD_NAME}/image/upload"
        files = {
            "file": (
                filename or f"upload.{fmt}",
                data,
                _content_type_for(fmt),
            )
        }
        start = time.perf_counter()
        try:
            resp = await self.client.post(
                url,
                data=form,
                files=files,
                timeout=self.settings.IMAGE_UPLOAD_TIMEOUT_SEC,
            )
        except httpx.TimeoutException as e:
            logger.error("Image upload timed out", extra={"upload_status": "timeout"})
            raise UploadError("Image storage timed out.", "storage_unavailable") from e
        except httpx.RequestError as e:
            logger.error(
                "Image upload failed",
                extra={"upload_status": "unreachable", "reason": str(e)[:200]},
            )
            raise UploadError("Image storage is unreachable.", "storage_unavailable") from e

        latency_ms = round((time.perf_counter() - start) * 1000, 2)
        if resp.status_code >= 500:
            logger.error(
                "Image upload failed",
                extra={"upload_status": resp.status_code, "latency_ms": latency_ms},
            )
            raise UploadError(
                f"Image storage returned status {resp.status_code}.", "storage_unavailable"
            )
        try:
            body = resp.json()
        except ValueError as e:
            raise UploadError("Image storage returned an invalid response.", "storage_rejected") from e
        if resp.status_code >= 400:
            message = (body.get("error") or {}).get("message") if isinstance(body, dict) else None
            logger.warning(
                "Image upload rejected",
                extra={"upload_status": resp.status_code, "reason": (message or "")[:200]},
            )
            raise UploadError(message or "Image storage rejected the upload.", "storage_rejected")

        image_url = (body.get("secure_url") or body.get("url")) if isinstance(body, dict) else None
        if not image_url:
            raise UploadError("Image storage response did not include a URL.", "storage_rejected")
        logger.info(
            "Image uploaded",
            extra={"upload_status": "success", "image_format": fmt, "latency_ms": latency_ms},
        )
        return image_url
