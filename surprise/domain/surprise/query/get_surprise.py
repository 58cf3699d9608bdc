"""GetSurprise query handler - public read access by slug."""

from datetime import datetime

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from surprise.domain.shared.query import Query, QueryHandler, Result
from surprise.domain.surprise.service.surprise import SurpriseService


class GetSurprise(Query):
    slug: str


class SurpriseDetail(Result):
    """Public view of a surprise. Deliberately has no password field."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    slug: str
    filename: str
    original_name: str
    mime_type: str
    message: str
    created_at: datetime
    has_password: bool
    file_url: str


class GetSurpriseHandler(QueryHandler[GetSurprise, SurpriseDetail]):
    surprise_service: SurpriseService

    async def run(self, cmd: GetSurprise) -> SurpriseDetail:
        surprise = await self.surprise_service.get_by_slug(cmd.slug)
        return SurpriseDetail(
            id=surprise.id,
            slug=surprise.slug,
            filename=surprise.content_ref,
            original_name=surprise.original_name,
            mime_type=surprise.mime_type,
            message=surprise.message,
            created_at=surprise.created_at,
            has_password=surprise.has_password,
            file_url=self.surprise_service.file_url(surprise),
        )
