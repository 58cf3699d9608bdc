import logfire
from pydantic import Field

from surprise.domain.shared.command import Command, CommandHandler, Result
from surprise.domain.surprise.service.surprise import SurpriseService


class VerifyPassword(Command):
    slug: str
    password: str | None = Field(default=None, repr=False)


class PasswordVerified(Result):
    success: bool = True


class VerifyPasswordHandler(CommandHandler[VerifyPassword, PasswordVerified]):
    surprise_service: SurpriseService

    async def run(self, cmd: VerifyPassword) -> PasswordVerified:
        with logfire.span("VerifyPassword", slug=cmd.slug):
            await self.surprise_service.verify_password(cmd.slug, cmd.password)
            return PasswordVerified()
