import mimetypes

from surprise.domain.shared.query import Query, QueryHandler, Result
from surprise.domain.surprise.service.surprise import SurpriseService


class DownloadFile(Query):
    filename: str


class FileContent(Result):
    filename: str
    content: bytes
    content_type: str


class DownloadFileHandler(QueryHandler[DownloadFile, FileContent]):
    surprise_service: SurpriseService

    async def run(self, cmd: DownloadFile) -> FileContent:
        content = await self.surprise_service.read_file(cmd.filename)
        content_type, _ = mimetypes.guess_type(cmd.filename)
        return FileContent(
            filename=cmd.filename,
            content=content,
            content_type=content_type or "application/octet-stream",
        )
