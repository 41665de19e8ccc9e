"""
shared/utils/media.py
Media upload bridge to the external image host (Cloudinary REST API).

Uploads return both the secure URL and the host's public_id. Callers store
the public_id next to the URL so an asset can later be removed without
deriving its identity from the URL shape.
"""

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import HTTPException, UploadFile, status

from config.settings import settings

logger = logging.getLogger(__name__)


class MediaStorageError(Exception):
    """The image host rejected or failed an operation."""


@dataclass
class StoredImage:
    url: str
    public_id: str


def _sign(params: dict, api_secret: str) -> str:
    """Cloudinary request signature: SHA-1 of sorted params + secret."""
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params) if params[k] not in (None, ""))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


class MediaStorage:
    """Thin async client for signed uploads and deletes."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        api_base: str = "https://api.cloudinary.com/v1_1",
        root_folder: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.api_base = api_base.rstrip("/")
        self.root_folder = root_folder.strip("/")
        self.timeout = timeout
        self.transport = transport

    def _url(self, action: str) -> str:
        return f"{self.api_base}/{self.cloud_name}/image/{action}"

    def _folder(self, folder: str) -> str:
        return f"{self.root_folder}/{folder}" if self.root_folder else folder

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str,
        folder: str,
    ) -> StoredImage:
        """Push raw bytes to the host. Raises MediaStorageError on any failure."""
        if not self.cloud_name:
            raise MediaStorageError("Media host is not configured")

        params = {"folder": self._folder(folder), "timestamp": int(time.time())}
        data = {
            **params,
            "api_key": self.api_key,
            "signature": _sign(params, self.api_secret),
        }
        try:
            async with self._client() as client:
                response = await client.post(
                    self._url("upload"),
                    data=data,
                    files={"file": (filename, content, content_type)},
                )
        except httpx.HTTPError as e:
            raise MediaStorageError(f"Upload request failed: {e}") from e

        if response.status_code != 200:
            raise MediaStorageError(
                f"Upload rejected ({response.status_code}): {response.text[:200]}"
            )
        body = response.json()
        if "secure_url" not in body or "public_id" not in body:
            raise MediaStorageError("Upload response missing secure_url/public_id")
        return StoredImage(url=body["secure_url"], public_id=body["public_id"])

    async def delete(self, public_id: str) -> None:
        """Remove an asset by public_id. Raises MediaStorageError on failure."""
        params = {"public_id": public_id, "timestamp": int(time.time())}
        data = {
            **params,
            "api_key": self.api_key,
            "signature": _sign(params, self.api_secret),
        }
        try:
            async with self._client() as client:
                response = await client.post(self._url("destroy"), data=data)
        except httpx.HTTPError as e:
            raise MediaStorageError(f"Destroy request failed: {e}") from e
        if response.status_code != 200:
            raise MediaStorageError(f"Destroy rejected ({response.status_code})")


_storage: Optional[MediaStorage] = None


def get_media_storage() -> MediaStorage:
    """FastAPI dependency returning the process-wide media client."""
    global _storage
    if _storage is None:
        _storage = MediaStorage(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            api_base=settings.CLOUDINARY_API_BASE,
            root_folder=settings.MEDIA_ROOT_FOLDER,
            timeout=settings.MEDIA_TIMEOUT_SECONDS,
        )
    return _storage


async def read_image(file: UploadFile) -> bytes:
    """Validate an uploaded image field and return its bytes."""
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only image uploads are supported",
        )
    content = await file.read(settings.MEDIA_MAX_UPLOAD_BYTES + 1)
    if len(content) > settings.MEDIA_MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Image exceeds {settings.MEDIA_MAX_UPLOAD_BYTES // (1024 * 1024)} MB limit",
        )
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty file")
    return content


async def upload_image(storage: MediaStorage, file: UploadFile, folder: str) -> StoredImage:
    """Validate `file` and forward it to the image host under `folder`."""
    content = await read_image(file)
    stored = await storage.upload(
        content,
        filename=file.filename or "upload",
        content_type=file.content_type or "application/octet-stream",
        folder=folder,
    )
    logger.info("Uploaded image to %s as %s", folder, stored.public_id)
    return stored


async def discard_image(storage: MediaStorage, public_id: Optional[str]) -> None:
    """Best-effort removal of a replaced asset. Failures are logged, never raised."""
    if not public_id:
        return
    try:
        await storage.delete(public_id)
    except MediaStorageError as e:
        logger.warning("Could not remove image %s: %s", public_id, e)
