"""S3-compatible object storage implementation of BlobStoragePort."""

import asyncio
import logging
from urllib.parse import quote, unquote, urlsplit

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from surprise.config import S3Config
from surprise.domain.shared.error import BlobWriteError, StorageUnavailableError
from surprise.domain.surprise.port.storage import BlobStoragePort

logger = logging.getLogger(__name__)


class S3StorageAdapter(BlobStoragePort):
    """Stores uploads as public objects; references are the object URLs.

    Clients fetch media straight from the object host, so the API never
    proxies these bytes. Retries are disabled: a failed put surfaces
    immediately as BlobWriteError.
    """

    def __init__(self, config: S3Config, timeout: float = 30.0, client=None) -> None:
        self.bucket = config.bucket
        self.region = config.region
        self._public_base = (
            config.public_url.rstrip("/")
            if config.public_url
            else f"https://{config.bucket}.s3.{config.region}.amazonaws.com"
        )
        self.client = client or boto3.client(
            "s3",
            aws_access_key_id=config.access_key or None,
            aws_secret_access_key=config.secret_key or None,
            region_name=config.region,
            endpoint_url=config.endpoint_url,
            config=BotoConfig(
                connect_timeout=timeout,
                read_timeout=timeout,
                retries={"max_attempts": 1, "mode": "standard"},
            ),
        )

    def verify_connection(self) -> bool:
        try:
            self.client.head_bucket(Bucket=self.bucket)
            return True
        except ClientError as e:
            # An AccessDenied error still means credentials are valid
            if e.response["Error"]["Code"] in ("AccessDenied", "403"):
                return True
            return False
        except BotoCoreError:
            return False

    async def put(self, key: str, content: bytes, content_type: str) -> str:
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("S3 upload failed for %s: %s", key, e)
            raise BlobWriteError(f"Failed to upload file: {key}") from e
        return self.public_url(key)

    async def get(self, reference: str) -> bytes | None:
        key = self._key_from_reference(reference)
        try:
            response = await asyncio.to_thread(
                self.client.get_object, Bucket=self.bucket, Key=key
            )
        except ClientError as e:
            if e.response["Error"]["Code"] in ("NoSuchKey", "404"):
                return None
            raise StorageUnavailableError(f"Failed to read file: {key}") from e
        except BotoCoreError as e:
            raise StorageUnavailableError(f"Failed to read file: {key}") from e
        return await asyncio.to_thread(response["Body"].read)

    def public_url(self, reference: str) -> str:
        if reference.startswith(("http://", "https://")):
            return reference
        return f"{self._public_base}/{quote(reference)}"

    def _key_from_reference(self, reference: str) -> str:
        if reference.startswith(self._public_base + "/"):
            return unquote(reference[len(self._public_base) + 1 :])
        if reference.startswith(("http://", "https://")):
            return unquote(urlsplit(reference).path.lstrip("/"))
        return reference
