"""Per-request context: anonymous identity plus a REQUEST-scoped DI container."""

from dishka import AsyncContainer
from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from cutout.domain.identity.model.value import ResolvedIdentity
from cutout.domain.identity.service.resolver import IdentityResolver
from cutout.util.di.scope import Scope as CutoutScope


class RequestContextMiddleware:
    """ASGI middleware that resolves the caller's identity once per request.

    The resolved identity is passed as context into a Scope.REQUEST container,
    and when a new identity was issued its Set-Cookie header is added to
    whatever response the request produces, error responses included.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request = Request(scope, receive=receive, send=send)
        container: AsyncContainer = request.app.state.dishka_container

        resolver = await container.get(IdentityResolver)
        identity = resolver.resolve(request.cookies, request.headers.get("cookie"))
        request.state.identity = identity

        async def send_with_identity(message: Message) -> None:
            if message["type"] == "http.response.start" and identity.directive is not None:
                headers = MutableHeaders(scope=message)
                headers.append("set-cookie", identity.directive.header_value())
            await send(message)

        async with container(
            {ResolvedIdentity: identity},
            scope=CutoutScope.REQUEST,
        ) as request_container:
            request.state.dishka_container = request_container
            return await self.app(scope, receive, send_with_identity)


def setup_request_context(container: AsyncContainer, app) -> None:
    """Install the request-context middleware and the APP container.

    Args:
        container: The async DI container
        app: FastAPI or Starlette application
    """
    app.add_middleware(RequestContextMiddleware)
    app.state.dishka_container = container
