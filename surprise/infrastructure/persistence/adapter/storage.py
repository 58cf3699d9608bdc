import asyncio
import logging
import tempfile
from pathlib import Path

from surprise.domain.shared.error import BlobWriteError
from surprise.domain.surprise.port.storage import BlobStoragePort

logger = logging.getLogger(__name__)


class LocalFileStorageAdapter(BlobStoragePort):
    """Local filesystem implementation of BlobStoragePort.

    References are bare filenames inside base_path, served back through
    GET /api/files/{filename}.
    """

    def __init__(self, base_path: str, url_prefix: str = "/api/files") -> None:
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.url_prefix = url_prefix.rstrip("/")

    def _safe_path(self, filename: str) -> Path:
        """Resolve filename within base_path, rejecting path traversal attempts."""
        safe_name = Path(filename).name
        if not safe_name or safe_name != filename or safe_name in (".", ".."):
            raise ValueError(f"Invalid filename: {filename}")
        target = self.base_path / safe_name
        if not target.resolve().is_relative_to(self.base_path.resolve()):
            raise ValueError(f"Invalid filename: {filename}")
        return target

    async def put(self, key: str, content: bytes, content_type: str) -> str:
        target = self._safe_path(key)
        try:
            await asyncio.to_thread(self._write_atomic, target, content)
        except OSError as e:
            logger.error("Failed to write blob %s: %s", key, e)
            raise BlobWriteError(f"Failed to store file: {key}") from e
        return key

    def _write_atomic(self, target: Path, content: bytes) -> None:
        # Write to temp file then rename, so readers never see a partial blob
        fd, tmp_path = tempfile.mkstemp(dir=self.base_path)
        try:
            with open(fd, "wb") as f:
                f.write(content)
            Path(tmp_path).replace(target)
        except Exception:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    async def get(self, reference: str) -> bytes | None:
        target = self._safe_path(reference)
        if not target.is_file():
            return None
        return await asyncio.to_thread(target.read_bytes)

    def public_url(self, reference: str) -> str:
        return f"{self.url_prefix}/{reference}"
