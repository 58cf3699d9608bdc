from abc import abstractmethod
from typing import Protocol

from surprise.domain.shared.port import Port


class BlobStoragePort(Port, Protocol):
    @abstractmethod
    async def put(self, key: str, content: bytes, content_type: str) -> str:
        """Persist content under key and return a reference resolvable later.

        Raises BlobWriteError on I/O or remote-service failure. Any failure
        is total: callers never see a partially written blob.
        """
        ...

    @abstractmethod
    async def get(self, reference: str) -> bytes | None:
        """Return the stored bytes, or None if nothing exists at reference."""
        ...

    @abstractmethod
    def public_url(self, reference: str) -> str:
        """URL a client can fetch the content from."""
        ...
