"""SurpriseRepository port - persistence interface for surprises."""

from abc import abstractmethod
from typing import Protocol

from surprise.domain.shared.port import Port
from surprise.domain.surprise.model.aggregate import Surprise
from surprise.domain.surprise.model.value import NewSurprise


class SurpriseRepository(Port, Protocol):
    @abstractmethod
    async def create(self, new: NewSurprise) -> Surprise:
        """Assign id and created_at, persist, and return the full record.

        Raises DuplicateSlugError if the slug is taken and
        StorageUnavailableError if the backing store cannot be reached.
        """
        ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Surprise | None: ...
