"""Dishka wiring for FastAPI: one Scope.UOW container per HTTP request."""

from dishka import AsyncContainer
from fastapi import FastAPI
from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Send
from starlette.types import Scope as ASGIScope

from surprise.util.di.scope import Scope


class UnitOfWorkMiddleware:
    """Opens a Scope.UOW child container around every HTTP request.

    Replaces dishka's stock middleware, which enters dishka.Scope.REQUEST.
    The child container closes (committing the DB session) once the
    response has been produced.
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
        ) as uow_container:
            request.state.dishka_container = uow_container
            return await self.app(scope, receive, send)


def setup_dishka(container: AsyncContainer, app: FastAPI) -> None:
    """Attach the APP container and the per-request UOW middleware."""
    app.add_middleware(UnitOfWorkMiddleware)
    app.state.dishka_container = container
