"""Open a surprise, unlocking it first if it is protected."""

import sys
from pathlib import Path

import cyclopts

from surprise.cli.client import ClientError, SurpriseClient
from surprise.cli.console import Console, get_console

app = cyclopts.App(name="view", help="View a surprise by slug")

MAX_PASSWORD_ATTEMPTS = 3


def unlock(client: SurpriseClient, console: Console, slug: str) -> bool:
    """Prompt for the password until the server accepts it.

    Returns:
        True once verified, False after MAX_PASSWORD_ATTEMPTS rejections.
    """
    for attempt in range(1, MAX_PASSWORD_ATTEMPTS + 1):
        password = console.ask_password()
        try:
            client.verify_password(slug, password)
            return True
        except ClientError as e:
            # Anything but a wrong password (401) is not worth retrying
            if e.status_code != 401:
                raise
            remaining = MAX_PASSWORD_ATTEMPTS - attempt
            console.error(e.message, hint=f"{remaining} attempt(s) left" if remaining else None)
    return False


@app.default
def view(slug: str, /, *, download: Path | None = None) -> None:
    """Show a surprise's message and media link.

    Args:
        slug: Identifier from the share link.
        download: Save the media to this path.
    """
    console = get_console()

    try:
        with SurpriseClient() as client:
            detail = client.get(slug)

            if detail.get("hasPassword") and not unlock(client, console, slug):
                console.error("Too many incorrect passwords")
                sys.exit(1)

            media_url = client.media_url(detail["fileUrl"])
            console.surprise(detail, media_url)

            if download is not None:
                written = client.download(detail["fileUrl"], download)
                console.success(f"Saved {written} bytes to {download}")
    except ClientError as e:
        console.error(e.message)
        sys.exit(1)
