from dishka import Provider as DishkaProvider
from dishka import from_context, provide

from cutout.config import Config
from cutout.domain.identity.model.value import OwnerId, ResolvedIdentity
from cutout.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for Cutout DI providers; dependencies default to APP scope."""

    scope = Scope.APP


class ContextProvider(Provider):
    """Values handed to the container rather than built by it.

    Config is passed once when the container is created. The resolved
    identity is passed by the request middleware when it opens the REQUEST
    scope, so every consumer in a request sees the same owner.
    """

    config = from_context(provides=Config, scope=Scope.APP)
    identity = from_context(provides=ResolvedIdentity, scope=Scope.REQUEST)

    @provide(scope=Scope.REQUEST)
    def get_owner_id(self, identity: ResolvedIdentity) -> OwnerId:
        return identity.owner_id
