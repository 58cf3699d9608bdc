from dishka import AsyncContainer, Provider, from_context, make_async_container
from starlette.requests import Request

from surprise.config import Config
from surprise.domain.surprise.util.di import SurpriseProvider
from surprise.infrastructure.codeimage.di import CodeImageProvider
from surprise.infrastructure.persistence import BlobStorageProvider, record_store_provider
from surprise.infrastructure.security.di import SecurityProvider
from surprise.util.di.scope import Scope


class ContextProvider(Provider):
    """Values handed to the container rather than built by it."""

    config = from_context(provides=Config, scope=Scope.APP)
    request = from_context(provides=Request, scope=Scope.UOW)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ContextProvider(),
        record_store_provider(config),
        BlobStorageProvider(),
        SecurityProvider(),
        CodeImageProvider(),
        SurpriseProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
