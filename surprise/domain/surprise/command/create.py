import base64

import logfire
from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from surprise.domain.shared.command import Command, CommandHandler, Result
from surprise.domain.surprise.port.code_image import CodeImageGenerator
from surprise.domain.surprise.service.surprise import SurpriseService


def share_url(base_url: str, slug: str) -> str:
    return f"{base_url.rstrip('/')}/surprise/{slug}"


class CreateSurprise(Command):
    filename: str | None = None
    content: bytes | None = Field(default=None, repr=False)
    content_type: str | None = None
    message: str | None = None
    password: str | None = Field(default=None, repr=False)
    base_url: str  # Origin that share links are built on


class SurpriseCreated(Result):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    slug: str
    share_url: str
    qr_code: str  # data:image/png;base64,...
    has_password: bool
    file_url: str


class CreateSurpriseHandler(CommandHandler[CreateSurprise, SurpriseCreated]):
    surprise_service: SurpriseService
    code_image: CodeImageGenerator

    async def run(self, cmd: CreateSurprise) -> SurpriseCreated:
        with logfire.span("CreateSurprise"):
            surprise = await self.surprise_service.create(
                filename=cmd.filename,
                content=cmd.content,
                content_type=cmd.content_type,
                message=cmd.message,
                password=cmd.password,
            )

            url = share_url(cmd.base_url, surprise.slug)
            image = self.code_image.encode(url)
            encoded = base64.b64encode(image).decode("ascii")

            return SurpriseCreated(
                id=surprise.id,
                slug=surprise.slug,
                share_url=url,
                qr_code=f"data:{self.code_image.media_type};base64,{encoded}",
                has_password=surprise.has_password,
                file_url=self.surprise_service.file_url(surprise),
            )
