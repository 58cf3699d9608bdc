"""SQLAlchemy implementation of SurpriseRepository."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from surprise.domain.shared.error import DuplicateSlugError, StorageUnavailableError
from surprise.domain.surprise.model.aggregate import Surprise
from surprise.domain.surprise.model.value import NewSurprise, SurpriseId
from surprise.domain.surprise.port.repository import SurpriseRepository
from surprise.infrastructure.persistence.mappers.surprise import (
    row_to_surprise,
    surprise_to_dict,
)
from surprise.infrastructure.persistence.tables import surprises_table

logger = logging.getLogger(__name__)


class SQLAlchemySurpriseRepository(SurpriseRepository):
    """SurpriseRepository over an async SQLAlchemy session (PostgreSQL or SQLite)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, new: NewSurprise) -> Surprise:
        """Insert a surprise. Surprises are immutable, so this is insert-only."""
        surprise = Surprise(
            id=SurpriseId(str(uuid4())),
            created_at=datetime.now(UTC),
            **new.model_dump(),
        )
        stmt = insert(surprises_table).values(**surprise_to_dict(surprise))
        try:
            await self.session.execute(stmt)
            # Durable before the caller hands the slug out
            await self.session.commit()
        except IntegrityError as e:
            # Leave the session usable so the caller can retry with a new slug
            await self.session.rollback()
            raise DuplicateSlugError(f"Slug already taken: {new.slug}") from e
        except OperationalError as e:
            logger.error("Database unavailable during insert: %s", e.orig)
            await self.session.rollback()
            raise StorageUnavailableError("Database unavailable") from e
        return surprise

    async def get_by_slug(self, slug: str) -> Surprise | None:
        stmt = select(surprises_table).where(surprises_table.c.slug == slug)
        try:
            result = await self.session.execute(stmt)
        except OperationalError as e:
            logger.error("Database unavailable during lookup: %s", e.orig)
            raise StorageUnavailableError("Database unavailable") from e
        row = result.mappings().first()
        return row_to_surprise(dict(row)) if row else None
