from dishka import provide

from cutout.config import Config
from cutout.domain.identity.service.resolver import IdentityResolver
from cutout.util.di.base import Provider
from cutout.util.di.scope import Scope


class IdentityProvider(Provider):
    @provide(scope=Scope.APP)
    def get_identity_resolver(self, config: Config) -> IdentityResolver:
        return IdentityResolver(config=config.identity)
