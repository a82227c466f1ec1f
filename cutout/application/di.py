from dishka import AsyncContainer, make_async_container

from cutout.config import Config
from cutout.domain.identity.util.di.provider import IdentityProvider
from cutout.domain.media.util.di.provider import MediaProvider
from cutout.infrastructure.removebg.di import RemovalProvider
from cutout.infrastructure.storage.di import StorageProvider
from cutout.util.di.base import ContextProvider
from cutout.util.di.scope import Scope


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ContextProvider(),
        IdentityProvider(),
        MediaProvider(),
        RemovalProvider(),
        StorageProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
