"""Image storage backends.

Callers only depend on ``store(data, filename, content_type) -> url`` and
``delete(url)``; the backend is picked from ``STORAGE_BACKEND``.
"""

import asyncio
import hashlib
from pathlib import Path
from typing import Protocol
from uuid import uuid4

import aioboto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from pawmarket.utils.logger import get_logger
from pawmarket.utils.settings.storage import StorageSettings

logger = get_logger(__name__)


class ImageStorage(Protocol):
    async def store(
        self, data: bytes, filename: str, content_type: str, folder: str = "images"
    ) -> str | None: ...

    async def delete(self, url: str) -> bool: ...


def _object_name(data: bytes, extension: str) -> str:
    digest = hashlib.sha256(data).hexdigest()[:12]
    return f"{uuid4().hex}-{digest}{extension}"


class LocalStorage:
    """Writes files below ``UPLOAD_DIR``; they are served under ``UPLOAD_URL_PREFIX``."""

    def __init__(self, settings: StorageSettings | None = None):
        self.settings = settings or StorageSettings()
        self.base_path = Path(self.settings.UPLOAD_DIR).resolve()
        self.url_prefix = self.settings.UPLOAD_URL_PREFIX.rstrip("/")

    async def store(
        self, data: bytes, filename: str, content_type: str, folder: str = "images"
    ) -> str | None:
        extension = Path(filename).suffix.lower() or ".bin"
        name = _object_name(data, extension)
        target = self.base_path / folder / name

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

        await asyncio.to_thread(_write)
        logger.info("Stored image locally", path=str(target), size=len(data))
        return f"{self.url_prefix}/{folder}/{name}"

    def _path_for(self, url: str) -> Path | None:
        if not url.startswith(self.url_prefix + "/"):
            return None
        candidate = (self.base_path / url[len(self.url_prefix) + 1 :]).resolve()
        # Reject anything that escapes the upload directory
        if self.base_path not in candidate.parents:
            return None
        return candidate

    async def delete(self, url: str) -> bool:
        path = self._path_for(url)
        if path is None:
            return False

        def _unlink() -> bool:
            if not path.is_file():
                return False
            path.unlink()
            return True

        return await asyncio.to_thread(_unlink)


class R2Storage:
    """Cloudflare R2 (S3-compatible) storage."""

    def __init__(self, settings: StorageSettings | None = None):
        self.settings = settings or StorageSettings()
        self._session: aioboto3.Session | None = None

    def _get_session(self) -> aioboto3.Session:
        """Get or create aioboto3 session."""
        if self._session is None:
            self._session = aioboto3.Session(
                aws_access_key_id=self.settings.R2_ACCESS_KEY,
                aws_secret_access_key=self.settings.R2_SECRET_KEY.get_secret_value(),
            )
        return self._session

    def _client(self):
        # R2 requires SigV4
        return self._get_session().client(
            "s3",
            endpoint_url=self.settings.R2_ENDPOINT,
            config=Config(signature_version="s3v4"),
        )

    def _public_url(self, key: str) -> str:
        if self.settings.R2_PUBLIC_URL:
            return f"{self.settings.R2_PUBLIC_URL.rstrip('/')}/{key}"
        return f"{self.settings.R2_ENDPOINT}/{self.settings.R2_BUCKET}/{key}"

    def _key_for(self, url: str) -> str | None:
        for prefix in (
            self.settings.R2_PUBLIC_URL.rstrip("/") if self.settings.R2_PUBLIC_URL else None,
            f"{self.settings.R2_ENDPOINT}/{self.settings.R2_BUCKET}",
        ):
            if prefix and url.startswith(prefix + "/"):
                return url[len(prefix) + 1 :]
        return None

    async def store(
        self, data: bytes, filename: str, content_type: str, folder: str = "images"
    ) -> str | None:
        extension = Path(filename).suffix.lower() or ".bin"
        key = f"{folder}/{_object_name(data, extension)}"
        try:
            async with self._client() as s3_client:
                await s3_client.put_object(
                    Bucket=self.settings.R2_BUCKET,
                    Key=key,
                    Body=data,
                    ContentType=content_type,
                    Metadata={"original-filename": filename},
                )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to upload image to R2: {e}")
            return None
        return self._public_url(key)

    async def delete(self, url: str) -> bool:
        key = self._key_for(url)
        if key is None:
            return False
        try:
            async with self._client() as s3_client:
                await s3_client.delete_object(Bucket=self.settings.R2_BUCKET, Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to delete image from R2: {e}")
            return False
        return True


def build_storage(settings: StorageSettings | None = None) -> ImageStorage:
    settings = settings or StorageSettings()
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "r2":
        return R2Storage(settings)
    if backend == "local":
        return LocalStorage(settings)
    raise ValueError(f"Unknown STORAGE_BACKEND '{settings.STORAGE_BACKEND}'")
