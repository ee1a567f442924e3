"""Dishka FastAPI integration opening a Scope.UOW container per request."""

from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Send
from starlette.types import Scope as ASGIScope

from dishka import AsyncContainer

from solrbridge.util.di.scope import Scope


class ContainerMiddleware:
    """ASGI middleware that creates a Scope.UOW container for each HTTP request.

    dishka.integrations.starlette.ContainerMiddleware opens Scope.REQUEST,
    which does not exist in our scope hierarchy.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: ASGIScope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request = Request(scope, receive=receive, send=send)
        async with request.app.state.dishka_container(
            {Request: request},
            scope=Scope.UOW,
        ) as request_container:
            request.state.dishka_container = request_container
            return await self.app(scope, receive, send)


def setup_dishka(container: AsyncContainer, app) -> None:
    """Attach the container and the per-request middleware to ``app``."""
    app.add_middleware(ContainerMiddleware)
    app.state.dishka_container = container
