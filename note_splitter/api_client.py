"""API client for a remote vault service."""

import httpx
import logging
from typing import Optional
from urllib.parse import quote

from .config import CONFIG
from .exceptions import ItemNotFoundError, StorageError
from .naming import normalize_path
from .storage.base import VaultStorage, WriteOutcome

logger = logging.getLogger(__name__)


class VaultAPIClient(VaultStorage):
    """
    Vault storage served over HTTP.

    Endpoints:
        PUT    /api/vault/files/{path}    create (If-None-Match: * never overwrites)
        GET    /api/vault/files/{path}    read
        HEAD   /api/vault/files/{path}    existence check
        DELETE /api/vault/files/{path}    delete
        PUT    /api/vault/folders/{path}  create folder (409 when present)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or CONFIG.VAULT_API_URL).rstrip("/")
        self.headers = {
            "X-API-Key": api_key or CONFIG.VAULT_API_KEY,
        }
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=CONFIG.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )

    @staticmethod
    def _file_url(path: str) -> str:
        return f"/api/vault/files/{quote(normalize_path(path))}"

    @staticmethod
    def _folder_url(path: str) -> str:
        return f"/api/vault/folders/{quote(normalize_path(path))}"

    async def create_if_absent(self, path: str, content: str) -> WriteOutcome:
        try:
            response = await self._client.put(
                self._file_url(path),
                content=content.encode("utf-8"),
                headers={"If-None-Match": "*", "Content-Type": "text/markdown; charset=utf-8"},
            )
        except httpx.HTTPError as e:
            logger.warning(f"Request to create {path} failed: {e}")
            return WriteOutcome.failed(path, str(e))

        if response.status_code in (409, 412):
            return WriteOutcome.exists(path)
        if response.is_error:
            logger.error(f"{response.status_code} error creating {path}: {response.text[:500]}")
            return WriteOutcome.failed(path, f"HTTP {response.status_code}: {response.text[:200]}")

        logger.debug(f"Created {path} via vault API")
        return WriteOutcome.ok(path)

    async def ensure_folder(self, path: str) -> None:
        if not normalize_path(path):
            return
        try:
            response = await self._client.put(self._folder_url(path))
        except httpx.HTTPError as e:
            raise StorageError(str(e)) from e

        if response.status_code == 409:
            logger.debug(f"Folder {path} already exists")
            return
        if response.is_error:
            raise StorageError(f"HTTP {response.status_code}: {response.text[:200]}")

    async def delete(self, path: str) -> None:
        try:
            response = await self._client.delete(self._file_url(path))
        except httpx.HTTPError as e:
            raise StorageError(str(e)) from e

        if response.status_code == 404:
            raise ItemNotFoundError(path)
        if response.is_error:
            raise StorageError(f"HTTP {response.status_code}: {response.text[:200]}")
        logger.info(f"Deleted {path} via vault API")

    async def read(self, path: str) -> str:
        try:
            response = await self._client.get(self._file_url(path))
        except httpx.HTTPError as e:
            raise StorageError(str(e)) from e

        if response.status_code == 404:
            raise ItemNotFoundError(path)
        if response.is_error:
            raise StorageError(f"HTTP {response.status_code}: {response.text[:200]}")
        return response.text

    async def exists(self, path: str) -> bool:
        try:
            response = await self._client.head(self._file_url(path))
        except httpx.HTTPError as e:
            raise StorageError(str(e)) from e
        return response.status_code == 200

    async def aclose(self) -> None:
        await self._client.aclose()
