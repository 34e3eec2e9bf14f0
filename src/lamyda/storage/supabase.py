"""Object storage backed by the hosted backend's storage REST API."""

from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from urllib.parse import quote

import httpx

from src.lamyda.core.config import Settings
from src.lamyda.core.exceptions import StorageError
from src.lamyda.core.logging import get_logger

logger = get_logger(__name__)


class SupabaseStorage:
    """Upload, resolve and delete objects in one storage bucket."""

    def __init__(
        self,
        base_url: str,
        service_role_key: str,
        bucket: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket
        self.timeout = timeout
        self.api_url = f"{self.base_url}/storage/v1"
        self.headers = {
            "Authorization": f"Bearer {service_role_key}",
            "apikey": service_role_key,
        }
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseStorage":
        return cls(
            base_url=settings.supabase_url,
            service_role_key=settings.supabase_service_role_key,
            bucket=settings.storage_bucket,
            timeout=settings.storage_timeout_seconds,
        )

    @asynccontextmanager
    async def _http(self) -> AsyncGenerator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                yield client

    def _object_url(self, path: str) -> str:
        return f"{self.api_url}/object/{self.bucket}/{quote(path)}"

    async def upload(self, path: str, content: bytes, content_type: str) -> None:
        """Upload bytes to ``path`` in the bucket.

        Raises:
            StorageError: On transport failure or a non-2xx response.
        """
        try:
            async with self._http() as client:
                response = await client.post(
                    self._object_url(path),
                    headers={
                        **self.headers,
                        "Content-Type": content_type,
                        "x-upsert": "false",
                    },
                    content=content,
                )
        except httpx.HTTPError as e:
            raise StorageError(f"Storage upload error: {e}", original_error=e) from e

        if not response.is_success:
            logger.error(
                "Storage upload rejected",
                bucket=self.bucket,
                path=path,
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise StorageError(f"Upload failed with status {response.status_code}")

    def public_url(self, path: str) -> str:
        return f"{self.api_url}/object/public/{self.bucket}/{quote(path)}"

    async def remove(self, paths: Sequence[str]) -> None:
        """Delete objects from the bucket.

        Raises:
            StorageError: On transport failure or a non-2xx response.
        """
        if not paths:
            return
        try:
            async with self._http() as client:
                response = await client.request(
                    "DELETE",
                    f"{self.api_url}/object/{self.bucket}",
                    headers=self.headers,
                    json={"prefixes": list(paths)},
                )
        except httpx.HTTPError as e:
            raise StorageError(f"Storage remove error: {e}", original_error=e) from e

        if not response.is_success:
            raise StorageError(f"Remove failed with status {response.status_code}")
