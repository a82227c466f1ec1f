"""DI provider for the blob store."""

from collections.abc import AsyncIterator

import httpx
from dishka import provide

from cutout.config import Config
from cutout.domain.media.port.storage import BlobStorePort
from cutout.domain.shared.error import ConfigurationError
from cutout.infrastructure.storage.local import LocalBlobStore
from cutout.infrastructure.storage.vercel_blob import VercelBlobStore
from cutout.util.di.base import Provider
from cutout.util.di.scope import Scope


class StorageProvider(Provider):
    """Selects the blob store backend named by ``config.storage.backend``."""

    @provide(scope=Scope.APP)
    async def get_blob_store(self, config: Config) -> AsyncIterator[BlobStorePort]:
        storage = config.storage
        if storage.backend == "local":
            yield LocalBlobStore(base_path=storage.local.path, public_url=storage.local.public_url)
            return

        if not storage.vercel.token:
            raise ConfigurationError(
                "Vercel Blob backend selected but CUTOUT_STORAGE__VERCEL__TOKEN is not set",
                code="missing_blob_token",
            )
        timeout = httpx.Timeout(storage.vercel.timeout, connect=5.0)
        async with httpx.AsyncClient(timeout=timeout) as client:
            yield VercelBlobStore(config=storage.vercel, http_client=client)
