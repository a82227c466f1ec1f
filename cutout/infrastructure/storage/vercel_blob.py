"""Vercel Blob adapter for BlobStorePort, over its HTTP API."""

import logging

import httpx

from cutout.config import VercelBlobConfig
from cutout.domain.media.model.value import AssetKey, BlobPage, StoredAsset
from cutout.domain.media.port.storage import BlobStorePort
from cutout.domain.shared.error import StorageError

logger = logging.getLogger(__name__)

LIST_PAGE_SIZE = 1000


class VercelBlobStore(BlobStorePort):
    """Stores processed images as public objects in a Vercel Blob store."""

    def __init__(self, config: VercelBlobConfig, http_client: httpx.AsyncClient) -> None:
        self._config = config
        self._http = http_client

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = {
            "authorization": f"Bearer {self._config.token}",
            "x-api-version": self._config.api_version,
        }
        headers.update(extra or {})
        return headers

    async def _send(self, operation: str, request: httpx.Request) -> httpx.Response:
        try:
            response = await self._http.send(request)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Blob %s failed: status=%d, body=%s",
                operation,
                e.response.status_code,
                e.response.text,
            )
            raise StorageError(f"Blob {operation} failed", details=e.response.text) from e
        except httpx.RequestError as e:
            logger.exception("Blob %s request failed: %s", operation, e)
            raise StorageError(
                f"Blob {operation} failed", details=str(e) or type(e).__name__
            ) from e
        return response

    async def put(self, key: AssetKey, content: bytes, content_type: str) -> StoredAsset:
        request = self._http.build_request(
            "PUT",
            f"{self._config.api_url}/",
            params={"pathname": str(key)},
            content=content,
            headers=self._headers(
                {"x-content-type": content_type, "x-add-random-suffix": "0"}
            ),
        )
        response = await self._send("upload", request)
        body = response.json()
        return StoredAsset(url=body["url"], pathname=body.get("pathname", str(key)))

    async def delete(self, key: AssetKey) -> None:
        request = self._http.build_request(
            "POST",
            f"{self._config.api_url}/delete",
            json={"urls": [str(key)]},
            headers=self._headers(),
        )
        await self._send("delete", request)

    async def list(self, prefix: str, cursor: str | None = None) -> BlobPage:
        params = {"prefix": prefix, "limit": str(LIST_PAGE_SIZE)}
        if cursor:
            params["cursor"] = cursor
        request = self._http.build_request(
            "GET",
            self._config.api_url,
            params=params,
            headers=self._headers(),
        )
        response = await self._send("list", request)
        body = response.json()
        return BlobPage(
            blobs=body.get("blobs", []),
            cursor=body.get("cursor") if body.get("hasMore") else None,
        )
