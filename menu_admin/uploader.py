"""Image upload collaborator producing public URLs."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Protocol
from uuid import uuid4

import httpx
from storage3.utils import StorageException
from supabase import AsyncClient, acreate_client

from menu_admin.errors import StoreError

logger = logging.getLogger(__name__)


class ImageAssetUploader(Protocol):
    async def upload(self, path: str | Path) -> str: ...


def public_object_url(base_url: str, bucket: str, object_name: str) -> str:
    return f"{base_url.rstrip('/')}/storage/v1/object/public/{bucket}/{object_name}"


class SupabaseImageUploader:
    """Uploads images into a public Supabase Storage bucket."""

    def __init__(self, url: str, key: str, bucket: str) -> None:
        self.url = url
        self.key = key
        self.bucket = bucket
        self._client: AsyncClient | None = None

    async def _connect(self) -> AsyncClient:
        if self._client is None:
            self._client = await acreate_client(self.url, self.key)
        return self._client

    async def upload(self, path: str | Path) -> str:
        source = Path(path).expanduser()
        if not source.is_file():
            raise StoreError(f"image not found: {source}")

        object_name = f"{uuid4().hex}{source.suffix.lower()}"
        content_type = mimetypes.guess_type(source.name)[0] or "application/octet-stream"

        client = await self._connect()
        try:
            await client.storage.from_(self.bucket).upload(
                object_name,
                source.read_bytes(),
                {"content-type": content_type},
            )
        except (StorageException, httpx.HTTPError) as exc:
            raise StoreError(f"upload of {source.name} failed: {exc}") from exc

        logger.debug("uploaded %s as %s/%s", source, self.bucket, object_name)
        return public_object_url(self.url, self.bucket, object_name)
