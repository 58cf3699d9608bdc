"""SurpriseService - validates uploads and orchestrates blob, hash and record stores."""

import asyncio
import logging
import time
from collections.abc import Awaitable
from pathlib import PurePath
from typing import TypeVar, cast

from surprise.domain.shared.error import (
    AuthenticationError,
    BlobWriteError,
    DuplicateSlugError,
    NotFoundError,
    PayloadTooLargeError,
    StorageUnavailableError,
    ValidationError,
)
from surprise.domain.shared.service import Service
from surprise.domain.surprise.model.aggregate import Surprise
from surprise.domain.surprise.model.value import NewSurprise, UploadLimits, generate_slug
from surprise.domain.surprise.port.password import PasswordHasher
from surprise.domain.surprise.port.repository import SurpriseRepository
from surprise.domain.surprise.port.storage import BlobStoragePort

logger = logging.getLogger(__name__)

T = TypeVar("T")


def blob_key(slug: str, original_name: str, now_ms: int | None = None) -> str:
    """Storage key for an upload: `{slug}-{epoch millis}{original extension}`."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{slug}-{now_ms}{PurePath(original_name).suffix}"


class SurpriseService(Service):
    """Creates surprises and answers slug lookups and password checks.

    Blob and record stores share no transaction: if the record insert fails
    after the blob was written, the blob is left orphaned and logged.
    """

    surprise_repo: SurpriseRepository
    blob_storage: BlobStoragePort
    password_hasher: PasswordHasher
    limits: UploadLimits
    slug_length: int = 12
    slug_attempts: int = 3
    io_timeout: float = 30.0

    def validate_upload(
        self,
        filename: str | None,
        content: bytes | None,
        content_type: str | None,
        message: str | None,
    ) -> str:
        """Check an upload in order (file, size, type, message).

        Returns:
            The trimmed message.
        """
        if content is None or not filename:
            raise ValidationError("No file uploaded", field="file")

        if len(content) > self.limits.max_file_size:
            limit_mb = self.limits.max_file_size // (1024 * 1024)
            raise PayloadTooLargeError(
                f"File is too large (maximum {limit_mb}MB)", field="file"
            )

        if not content_type or not self.limits.accepts_type(content_type):
            raise ValidationError("Only image and video files are allowed", field="file")

        if message is None or not message.strip():
            raise ValidationError("Message is required", field="message")

        return message.strip()

    async def create(
        self,
        *,
        filename: str | None,
        content: bytes | None,
        content_type: str | None,
        message: str | None,
        password: str | None = None,
    ) -> Surprise:
        text = self.validate_upload(filename, content, content_type, message)
        # validate_upload has rejected the None cases
        filename, content, content_type = (
            cast(str, filename),
            cast(bytes, content),
            cast(str, content_type),
        )

        slug = generate_slug(self.slug_length)
        reference = await self._bounded(
            self.blob_storage.put(blob_key(slug, filename), content, content_type),
            BlobWriteError,
            "Blob write",
        )
        logger.debug("Stored blob %s (%d bytes, %s)", reference, len(content), content_type)

        password_hash = None
        if password:
            password_hash = await asyncio.to_thread(self.password_hasher.hash, password)

        try:
            surprise = await self._insert(
                NewSurprise(
                    slug=slug,
                    content_ref=reference,
                    original_name=filename,
                    mime_type=content_type,
                    message=text,
                    password_hash=password_hash,
                )
            )
        except Exception:
            logger.warning("Record insert failed; blob %s is orphaned", reference)
            raise

        logger.info(
            "Surprise created: slug=%s protected=%s", surprise.slug, surprise.has_password
        )
        return surprise

    async def get_by_slug(self, slug: str) -> Surprise:
        surprise = await self._bounded(
            self.surprise_repo.get_by_slug(slug),
            StorageUnavailableError,
            "Record lookup",
        )
        if surprise is None:
            raise NotFoundError("Surprise not found")
        return surprise

    async def verify_password(self, slug: str, password: str | None) -> None:
        """Raise unless password unlocks the surprise.

        Order matters: unknown slug (404) beats unprotected (400) beats
        missing password (400) beats mismatch (401).
        """
        surprise = await self.get_by_slug(slug)

        if surprise.password_hash is None:
            raise ValidationError("Surprise is not password protected")

        if not password:
            raise ValidationError("Password is required", field="password")

        matches = await asyncio.to_thread(
            self.password_hasher.verify, password, surprise.password_hash
        )
        if not matches:
            logger.info("Password mismatch for slug=%s", slug)
            raise AuthenticationError("Invalid password")

    def file_url(self, surprise: Surprise) -> str:
        return self.blob_storage.public_url(surprise.content_ref)

    async def read_file(self, reference: str) -> bytes:
        try:
            content = await self._bounded(
                self.blob_storage.get(reference),
                StorageUnavailableError,
                "Blob read",
            )
        except ValueError:
            content = None  # Unsafe reference, e.g. path traversal
        if content is None:
            raise NotFoundError("File not found")
        return content

    async def _insert(self, new: NewSurprise) -> Surprise:
        """Insert, regenerating the slug on collision up to slug_attempts times."""
        for attempt in range(1, self.slug_attempts + 1):
            try:
                return await self._bounded(
                    self.surprise_repo.create(new),
                    StorageUnavailableError,
                    "Record insert",
                )
            except DuplicateSlugError:
                logger.warning(
                    "Slug collision on attempt %d/%d", attempt, self.slug_attempts
                )
                if attempt == self.slug_attempts:
                    raise
                new = new.model_copy(update={"slug": generate_slug(self.slug_length)})
        raise DuplicateSlugError("Could not allocate a unique slug")

    async def _bounded(
        self,
        call: Awaitable[T],
        error: type[BlobWriteError] | type[StorageUnavailableError],
        what: str,
    ) -> T:
        try:
            async with asyncio.timeout(self.io_timeout):
                return await call
        except TimeoutError as e:
            raise error(f"{what} timed out after {self.io_timeout}s") from e
