import logging
from typing import AsyncIterable

from dishka import Provider, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from surprise.config import Config
from surprise.domain.shared.error import ConfigurationError
from surprise.domain.surprise.port.repository import SurpriseRepository
from surprise.domain.surprise.port.storage import BlobStoragePort
from surprise.infrastructure.persistence.adapter.s3 import S3StorageAdapter
from surprise.infrastructure.persistence.adapter.storage import LocalFileStorageAdapter
from surprise.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from surprise.infrastructure.persistence.repository.memory import InMemorySurpriseRepository
from surprise.infrastructure.persistence.repository.surprise import (
    SQLAlchemySurpriseRepository,
)
from surprise.util.di.scope import Scope

logger = logging.getLogger(__name__)


class PersistenceProvider(Provider):
    """SQL record store (database.backend = "sql")."""

    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session
            # Writes commit themselves; this closes read transactions
            if session.in_transaction():
                await session.commit()

    surprise_repo = provide(
        SQLAlchemySurpriseRepository, scope=Scope.UOW, provides=SurpriseRepository
    )


class MemoryPersistenceProvider(Provider):
    """Process-local record store (database.backend = "memory")."""

    surprise_repo = provide(
        InMemorySurpriseRepository, scope=Scope.APP, provides=SurpriseRepository
    )


class BlobStorageProvider(Provider):
    @provide(scope=Scope.APP)
    def get_blob_storage(self, config: Config) -> BlobStoragePort:
        storage = config.storage
        if storage.backend == "local":
            return LocalFileStorageAdapter(base_path=storage.base_path)
        if storage.backend == "s3":
            if not storage.s3.bucket:
                raise ConfigurationError("storage.s3.bucket must be set for the s3 backend")
            adapter = S3StorageAdapter(storage.s3, timeout=storage.timeout)
            if not adapter.verify_connection():
                logger.warning("S3 bucket %s is not reachable yet", storage.s3.bucket)
            return adapter
        raise ConfigurationError(f"Unknown storage backend: {storage.backend}")


def record_store_provider(config: Config) -> Provider:
    """Pick the record store implementation configured by database.backend."""
    if config.database.backend == "memory":
        return MemoryPersistenceProvider()
    return PersistenceProvider()
