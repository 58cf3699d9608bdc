"""In-memory implementation of SurpriseRepository.

State lives for the process lifetime only; useful for development and tests.
"""

from datetime import UTC, datetime
from uuid import uuid4

from surprise.domain.shared.error import DuplicateSlugError
from surprise.domain.surprise.model.aggregate import Surprise
from surprise.domain.surprise.model.value import NewSurprise, SurpriseId
from surprise.domain.surprise.port.repository import SurpriseRepository


class InMemorySurpriseRepository(SurpriseRepository):
    def __init__(self) -> None:
        self._by_slug: dict[str, Surprise] = {}

    async def create(self, new: NewSurprise) -> Surprise:
        # No await between check and insert, so this is atomic on the event loop
        if new.slug in self._by_slug:
            raise DuplicateSlugError(f"Slug already taken: {new.slug}")
        surprise = Surprise(
            id=SurpriseId(str(uuid4())),
            created_at=datetime.now(UTC),
            **new.model_dump(),
        )
        self._by_slug[new.slug] = surprise
        return surprise

    async def get_by_slug(self, slug: str) -> Surprise | None:
        return self._by_slug.get(slug)

    def __len__(self) -> int:
        return len(self._by_slug)
