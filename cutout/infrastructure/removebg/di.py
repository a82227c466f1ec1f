"""DI provider for the background-removal service."""

from collections.abc import AsyncIterator
from typing import NewType

import httpx
from dishka import provide

from cutout.config import Config
from cutout.domain.media.port.background_remover import BackgroundRemover
from cutout.infrastructure.removebg.client import RemoveBgClient
from cutout.util.di.base import Provider
from cutout.util.di.scope import Scope

# Disambiguate from the blob store's httpx.AsyncClient
RemovalHttpClient = NewType("RemovalHttpClient", httpx.AsyncClient)


class RemovalProvider(Provider):
    """DI provider for the remove.bg adapter."""

    @provide(scope=Scope.APP)
    async def get_removal_http_client(self, config: Config) -> AsyncIterator[RemovalHttpClient]:
        """Dedicated HTTP client for remove.bg; closed with the container."""
        timeout = httpx.Timeout(connect=5.0, read=config.removal.timeout, write=10.0, pool=5.0)
        async with httpx.AsyncClient(timeout=timeout) as client:
            yield RemovalHttpClient(client)

    @provide(scope=Scope.APP, provides=BackgroundRemover)
    def get_background_remover(self, config: Config, client: RemovalHttpClient) -> RemoveBgClient:
        return RemoveBgClient(config=config.removal, http_client=client)
