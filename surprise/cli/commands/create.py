"""Compose a surprise and print its share link."""

import base64
import mimetypes
import sys
from pathlib import Path

import cyclopts

from surprise.cli.client import ClientError, SurpriseClient
from surprise.cli.console import get_console

app = cyclopts.App(name="create", help="Upload media with a message")

MAX_FILE_SIZE = 50 * 1024 * 1024
MIN_MESSAGE_LENGTH = 10


def check_upload(file: Path, message: str) -> str:
    """Validate an upload before sending it.

    Returns:
        The guessed content type.

    Raises:
        ValueError: With a user-facing reason.
    """
    if not file.is_file():
        raise ValueError(f"File not found: {file}")

    if file.stat().st_size > MAX_FILE_SIZE:
        raise ValueError("File is too large (maximum 50MB)")

    content_type, _ = mimetypes.guess_type(file.name)
    if not content_type or not content_type.startswith(("image/", "video/")):
        raise ValueError("Only image and video files are allowed")

    if len(message.strip()) < MIN_MESSAGE_LENGTH:
        raise ValueError(f"Message must be at least {MIN_MESSAGE_LENGTH} characters")

    return content_type


def decode_data_url(data_url: str) -> bytes:
    """Bytes carried by a base64 data: URL."""
    _, _, payload = data_url.partition(";base64,")
    return base64.b64decode(payload)


@app.default
def create(
    file: Path,
    /,
    *,
    message: str,
    password: str | None = None,
    qr_out: Path | None = None,
) -> None:
    """Create a surprise from a photo or video.

    Args:
        file: Image or video to share.
        message: Message shown alongside the media.
        password: Optional password visitors must enter first.
        qr_out: Write the share-link QR code PNG here.
    """
    console = get_console()

    try:
        content_type = check_upload(file, message)
    except ValueError as e:
        console.error(str(e))
        sys.exit(1)

    try:
        with SurpriseClient() as client, console.status("Uploading..."):
            created = client.create(file, message, content_type, password=password)
    except ClientError as e:
        console.error(e.message)
        sys.exit(1)

    console.success("Surprise created")
    console.print(f"  [dim]Share URL:[/dim] {created['shareUrl']}")
    console.print(f"  [dim]Protected:[/dim] {'yes' if created['hasPassword'] else 'no'}")

    if qr_out is not None:
        qr_out.write_bytes(decode_data_url(created["qrCode"]))
        console.print(f"  [dim]QR code:[/dim] {qr_out}")
