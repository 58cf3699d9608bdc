"""Surprise REST routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, File, Form, Request, UploadFile

from surprise.config import Config
from surprise.domain.surprise.command.create import (
    CreateSurprise,
    CreateSurpriseHandler,
    SurpriseCreated,
)
from surprise.domain.surprise.command.verify_password import (
    PasswordVerified,
    VerifyPassword,
    VerifyPasswordHandler,
)
from surprise.domain.surprise.query.get_surprise import (
    GetSurprise,
    GetSurpriseHandler,
    SurpriseDetail,
)

router = APIRouter(prefix="/surprises", tags=["Surprises"], route_class=DishkaRoute)


def resolve_base_url(request: Request, config: Config) -> str:
    """Origin for share links: configured public URL, then Origin header, then request."""
    if config.server.public_url:
        return config.server.public_url.rstrip("/")
    if origin := request.headers.get("origin"):
        return origin.rstrip("/")
    return str(request.base_url).rstrip("/")


@router.post("", response_model=SurpriseCreated)
async def create_surprise(
    request: Request,
    handler: FromDishka[CreateSurpriseHandler],
    config: FromDishka[Config],
    file: UploadFile | None = File(None),
    message: str | None = Form(None),
    password: str | None = Form(None),
) -> SurpriseCreated:
    content = None
    if file is not None:
        # One byte past the limit is enough for the size check to reject it
        content = await file.read(config.uploads.max_file_size + 1)
    return await handler.run(
        CreateSurprise(
            filename=file.filename if file is not None else None,
            content=content,
            content_type=file.content_type if file is not None else None,
            message=message,
            password=password,
            base_url=resolve_base_url(request, config),
        )
    )


@router.get("/{slug}", response_model=SurpriseDetail)
async def get_surprise(
    slug: str,
    handler: FromDishka[GetSurpriseHandler],
) -> SurpriseDetail:
    return await handler.run(GetSurprise(slug=slug))


@router.post("/{slug}/verify-password", response_model=PasswordVerified)
async def verify_password(
    slug: str,
    request: Request,
    handler: FromDishka[VerifyPasswordHandler],
) -> PasswordVerified:
    password = await _password_from(request)
    return await handler.run(VerifyPassword(slug=slug, password=password))


async def _password_from(request: Request) -> str | None:
    """Read `password` from a JSON body, treating anything malformed as absent.

    The body is parsed by hand so that an unknown slug still answers 404
    whatever the payload looks like.
    """
    try:
        body = await request.json()
    except ValueError:
        return None
    password = body.get("password") if isinstance(body, dict) else None
    return password if isinstance(password, str) else None
