"""End-to-end tests for the surprise endpoints."""

import base64
from pathlib import Path
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile as StarletteUploadFile

from surprise.config import (
    Config,
    DatabaseConfig,
    S3Config,
    Server,
    StorageConfig,
    UploadConfig,
)
from surprise.domain.surprise.model.value import SLUG_ALPHABET
from surprise.infrastructure.persistence.migrate import run_migrations
from surprise.infrastructure.persistence.tables import surprises_table

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


async def _create(
    client: httpx.AsyncClient,
    *,
    filename: str = "beach.png",
    content: bytes = PNG,
    content_type: str = "image/png",
    message: str = "Happy birthday!",
    password: str | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    data = {"message": message}
    if password is not None:
        data["password"] = password
    return await client.post(
        "/api/surprises",
        files={"file": (filename, content, content_type)},
        data=data,
        headers=headers,
    )


class TestIndex:
    @pytest.mark.asyncio
    async def test_index_describes_api(self, client):
        response = await client.get("/api")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "running"
        assert "POST /api/surprises" in body["endpoints"]


class TestCreateSurprise:
    @pytest.mark.asyncio
    async def test_create_unprotected(self, client):
        response = await _create(client, headers={"Origin": "https://app.example"})

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"id", "slug", "shareUrl", "qrCode", "hasPassword", "fileUrl"}
        assert len(body["slug"]) == 12
        assert set(body["slug"]) <= set(SLUG_ALPHABET)
        assert body["shareUrl"] == f"https://app.example/surprise/{body['slug']}"
        assert body["hasPassword"] is False

        prefix = "data:image/png;base64,"
        assert body["qrCode"].startswith(prefix)
        assert base64.b64decode(body["qrCode"][len(prefix) :]).startswith(b"\x89PNG")

    @pytest.mark.asyncio
    async def test_share_url_falls_back_to_request_base(self, client):
        body = (await _create(client)).json()
        assert body["shareUrl"] == f"http://testserver/surprise/{body['slug']}"

    @pytest.mark.asyncio
    async def test_configured_public_url_wins(self, api_client, memory_config):
        config = memory_config(server=Server(public_url="https://surprise.example/"))
        async with api_client(config) as client:
            body = (await _create(client, headers={"Origin": "https://other.example"})).json()

        assert body["shareUrl"] == f"https://surprise.example/surprise/{body['slug']}"

    @pytest.mark.asyncio
    async def test_created_surprise_is_retrievable(self, client):
        created = (await _create(client, message="  Happy birthday!  ")).json()

        response = await client.get(f"/api/surprises/{created['slug']}")

        assert response.status_code == 200
        detail = response.json()
        assert detail["id"] == created["id"]
        assert detail["message"] == "Happy birthday!"
        assert detail["originalName"] == "beach.png"
        assert detail["mimeType"] == "image/png"
        assert detail["hasPassword"] is False
        assert detail["fileUrl"] == created["fileUrl"]
        assert detail["filename"].startswith(created["slug"] + "-")
        assert "createdAt" in detail

    @pytest.mark.asyncio
    async def test_slugs_are_unique(self, client):
        slugs = {(await _create(client)).json()["slug"] for _ in range(5)}
        assert len(slugs) == 5

    @pytest.mark.asyncio
    async def test_uploaded_bytes_are_served(self, client):
        created = (await _create(client)).json()

        response = await client.get(created["fileUrl"])

        assert response.status_code == 200
        assert response.content == PNG
        assert response.headers["content-type"] == "image/png"

    @pytest.mark.asyncio
    async def test_video_accepted(self, client):
        response = await _create(client, filename="clip.mp4", content_type="video/mp4")
        assert response.status_code == 200


class TestCreateValidation:
    @pytest.mark.asyncio
    async def test_missing_file(self, client):
        response = await client.post("/api/surprises", data={"message": "hello"})

        assert response.status_code == 400
        assert response.json()["message"] == "No file uploaded"

    @pytest.mark.asyncio
    async def test_wrong_type_stores_nothing(self, client, tmp_path: Path):
        response = await _create(client, filename="notes.txt", content_type="text/plain")

        assert response.status_code == 400
        assert response.json()["message"] == "Only image and video files are allowed"
        assert list((tmp_path / "files").iterdir()) == []

    @pytest.mark.asyncio
    async def test_blank_message(self, client):
        response = await _create(client, message="   ")

        assert response.status_code == 400
        assert response.json()["message"] == "Message is required"

    @pytest.mark.asyncio
    async def test_oversize_upload(self, api_client, memory_config):
        config = memory_config(uploads=UploadConfig(max_file_size=1024))
        async with api_client(config) as client:
            response = await _create(client, content=b"x" * 1025, content_type="text/plain")

        assert response.status_code == 413
        assert "too large" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_oversize_upload_is_not_buffered(
        self, api_client, memory_config, monkeypatch: pytest.MonkeyPatch
    ):
        bytes_read: list[int] = []
        original_read = StarletteUploadFile.read

        async def recording_read(self, size: int = -1) -> bytes:
            data = await original_read(self, size)
            bytes_read.append(len(data))
            return data

        monkeypatch.setattr(StarletteUploadFile, "read", recording_read)
        config = memory_config(uploads=UploadConfig(max_file_size=1024))

        async with api_client(config) as client:
            response = await _create(client, content=b"x" * 500_000)

        assert response.status_code == 413
        assert bytes_read
        assert max(bytes_read) <= 1025


class TestGetSurprise:
    @pytest.mark.asyncio
    async def test_unknown_slug(self, client):
        response = await client.get("/api/surprises/doesnotexist")

        assert response.status_code == 404
        assert response.json() == {"code": "NotFoundError", "message": "Surprise not found"}

    @pytest.mark.asyncio
    async def test_protected_detail_hides_hash(self, client):
        created = (await _create(client, password="secret123")).json()

        response = await client.get(f"/api/surprises/{created['slug']}")

        detail = response.json()
        assert detail["hasPassword"] is True
        assert "password" not in detail
        assert "argon2" not in response.text

    @pytest.mark.asyncio
    async def test_repeated_fetch_is_identical(self, client):
        slug = (await _create(client, password="secret123")).json()["slug"]

        first = await client.get(f"/api/surprises/{slug}")
        second = await client.get(f"/api/surprises/{slug}")

        assert first.status_code == second.status_code == 200
        assert first.content == second.content

    @pytest.mark.asyncio
    async def test_unknown_file(self, client):
        response = await client.get("/api/files/missing.png")
        assert response.status_code == 404


class TestVerifyPassword:
    @pytest.mark.asyncio
    async def test_correct_password(self, client):
        slug = (await _create(client, password="secret123")).json()["slug"]

        response = await client.post(
            f"/api/surprises/{slug}/verify-password", json={"password": "secret123"}
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}

    @pytest.mark.asyncio
    async def test_wrong_password(self, client):
        slug = (await _create(client, password="secret123")).json()["slug"]

        response = await client.post(
            f"/api/surprises/{slug}/verify-password", json={"password": "secret124"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid password"

    @pytest.mark.asyncio
    async def test_missing_password(self, client):
        slug = (await _create(client, password="secret123")).json()["slug"]

        response = await client.post(f"/api/surprises/{slug}/verify-password", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "Password is required"

    @pytest.mark.asyncio
    async def test_unprotected_surprise(self, client):
        slug = (await _create(client)).json()["slug"]

        response = await client.post(
            f"/api/surprises/{slug}/verify-password", json={"password": "anything"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Surprise is not password protected"

    @pytest.mark.asyncio
    async def test_unknown_slug(self, client):
        response = await client.post(
            "/api/surprises/doesnotexist/verify-password", json={"password": "x"}
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"json": {"password": 5}},
            {"json": ["secret123"]},
            {"content": b"not json", "headers": {"Content-Type": "application/json"}},
            {},
        ],
    )
    async def test_unknown_slug_beats_malformed_body(self, client, payload):
        response = await client.post("/api/surprises/doesnotexist/verify-password", **payload)

        assert response.status_code == 404
        assert response.json()["message"] == "Surprise not found"

    @pytest.mark.asyncio
    async def test_non_string_password_is_missing(self, client):
        slug = (await _create(client, password="secret123")).json()["slug"]

        response = await client.post(
            f"/api/surprises/{slug}/verify-password", json={"password": 123}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Password is required"

    @pytest.mark.asyncio
    async def test_empty_password_creates_unprotected(self, client):
        body = (await _create(client, password="")).json()
        assert body["hasPassword"] is False


class TestSqlBackend:
    @pytest.mark.asyncio
    async def test_create_and_fetch_through_sqlite(self, api_client, tmp_path: Path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'surprise.db'}"
        run_migrations(url)
        config = Config(
            database=DatabaseConfig(backend="sql", url=url),
            storage=StorageConfig(base_path=str(tmp_path / "files")),
        )

        async with api_client(config) as client:
            created = (await _create(client, password="secret123")).json()
            detail = (await client.get(f"/api/surprises/{created['slug']}")).json()
            verified = await client.post(
                f"/api/surprises/{created['slug']}/verify-password",
                json={"password": "secret123"},
            )

        assert detail["id"] == created["id"]
        assert detail["hasPassword"] is True
        assert verified.status_code == 200

    @pytest.mark.asyncio
    async def test_repeated_fetch_is_identical(self, api_client, tmp_path: Path):
        config = _sqlite_config(tmp_path)

        async with api_client(config) as client:
            slug = (await _create(client)).json()["slug"]
            first = await client.get(f"/api/surprises/{slug}")
            second = await client.get(f"/api/surprises/{slug}")

        assert first.status_code == 200
        assert first.content == second.content

    @pytest.mark.asyncio
    async def test_failed_commit_is_reported_not_acknowledged(self, api_client, tmp_path: Path):
        config = _sqlite_config(tmp_path)
        locked = OperationalError("COMMIT", {}, Exception("database is locked"))

        async with api_client(config) as client:
            with patch.object(AsyncSession, "commit", AsyncMock(side_effect=locked)):
                response = await _create(client)

        assert response.status_code == 500
        assert response.json()["code"] == "StorageUnavailableError"

        engine = create_engine(f"sqlite:///{tmp_path / 'surprise.db'}")
        try:
            with engine.connect() as conn:
                assert conn.execute(select(func.count()).select_from(surprises_table)).scalar() == 0
        finally:
            engine.dispose()


def _sqlite_config(tmp_path: Path) -> Config:
    url = f"sqlite+aiosqlite:///{tmp_path / 'surprise.db'}"
    run_migrations(url)
    return Config(
        database=DatabaseConfig(backend="sql", url=url),
        storage=StorageConfig(base_path=str(tmp_path / "files")),
    )


class TestS3Backend:
    @pytest.mark.asyncio
    async def test_files_route_not_registered(self, api_client, memory_config):
        config = memory_config(storage=StorageConfig(backend="s3", s3=S3Config(bucket="media")))

        async with api_client(config) as client:
            response = await client.get("/api/files/anything.png")

        assert response.status_code == 404
        assert response.json() == {"detail": "Not Found"}
