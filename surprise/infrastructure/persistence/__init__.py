from surprise.infrastructure.persistence.di import (
    BlobStorageProvider,
    MemoryPersistenceProvider,
    PersistenceProvider,
    record_store_provider,
)

__all__ = [
    "BlobStorageProvider",
    "MemoryPersistenceProvider",
    "PersistenceProvider",
    "record_store_provider",
]
