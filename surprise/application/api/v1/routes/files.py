"""Uploaded media, served only when blobs are stored on local disk."""

import re

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from fastapi.responses import Response

from surprise.domain.surprise.query.download_file import DownloadFile, DownloadFileHandler

router = APIRouter(prefix="/files", tags=["Files"], route_class=DishkaRoute)


@router.get("/{filename}")
async def download_file(
    filename: str,
    handler: FromDishka[DownloadFileHandler],
) -> Response:
    result = await handler.run(DownloadFile(filename=filename))
    safe_name = _sanitize_header_filename(result.filename)
    return Response(
        content=result.content,
        media_type=result.content_type,
        headers={"Content-Disposition": f'inline; filename="{safe_name}"'},
    )


def _sanitize_header_filename(filename: str) -> str:
    """Strip characters that could break Content-Disposition headers."""
    return re.sub(r'[\r\n"]', "_", filename)
