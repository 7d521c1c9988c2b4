"""Unsigned image uploads to Cloudinary over httpx."""

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass

import httpx

from staylist.config import settings
from staylist.listing.errors import MediaNotConfiguredError, MediaUploadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaFile:
    """One file picked by the owner, already read into memory."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class UploadedMedia:
    """Where Cloudinary put the file. ``public_id`` is what a later delete would need."""

    url: str
    public_id: str


class CloudinaryUploader:
    """Uploads images with a fixed unsigned upload preset."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        cloud_name: str,
        upload_preset: str,
        api_base: str = "https://api.cloudinary.com/v1_1",
    ) -> None:
        self.client = client
        self.cloud_name = cloud_name
        self.upload_preset = upload_preset
        self.api_base = api_base.rstrip("/")

    @property
    def upload_url(self) -> str:
        return f"{self.api_base}/{self.cloud_name}/image/upload"

    def _ensure_configured(self) -> None:
        if not self.cloud_name or not self.upload_preset:
            raise MediaNotConfiguredError(
                "Cloudinary is not configured. Please set CLOUDINARY_CLOUD_NAME and "
                "CLOUDINARY_UPLOAD_PRESET in your .env"
            )

    async def upload(self, file: MediaFile) -> UploadedMedia:
        """Upload one file.

        Raises:
            MediaNotConfiguredError: If the cloud name or preset is missing.
            MediaUploadError: On a non-2xx response (the body becomes the detail)
                or when Cloudinary cannot be reached.
        """
        self._ensure_configured()
        try:
            response = await self.client.post(
                self.upload_url,
                data={"upload_preset": self.upload_preset},
                files={"file": (file.filename, file.content, file.content_type)},
            )
        except httpx.HTTPError as exc:
            logger.warning("Cloudinary upload of %s failed: %s", file.filename, exc)
            raise MediaUploadError(f"Cloudinary upload failed: {exc}") from exc

        if not response.is_success:
            raise MediaUploadError(f"Cloudinary upload failed ({response.status_code}): {response.text}")

        data = response.json()
        url = data.get("secure_url") or data.get("url")
        if not url:
            raise MediaUploadError("Cloudinary upload failed: response did not include a URL")

        logger.info("Uploaded %s to Cloudinary as %s", file.filename, data.get("public_id"))
        return UploadedMedia(url=url, public_id=data.get("public_id", ""))

    async def upload_many(self, files: Sequence[MediaFile]) -> list[UploadedMedia]:
        """Upload all *files* concurrently and return results in *files* order.

        One failure fails the whole batch; results of the other files are dropped.
        """
        self._ensure_configured()
        results = await asyncio.gather(*(self.upload(file) for file in files))
        return list(results)


async def get_media_uploader() -> AsyncIterator[CloudinaryUploader]:
    """Yield an uploader bound to a fresh httpx client for FastAPI dependency injection."""
    async with httpx.AsyncClient(timeout=settings.media_upload_timeout_seconds) as client:
        yield CloudinaryUploader(
            client,
            cloud_name=settings.cloudinary_cloud_name,
            upload_preset=settings.cloudinary_upload_preset,
            api_base=settings.cloudinary_api_base,
        )
