"""HTTP client for the Digital Surprise API."""

import os
from pathlib import Path
from typing import Any

import httpx

SERVER_ENV = "SURPRISE_SERVER"


def get_server_url() -> str:
    """Get server URL from environment."""
    return os.environ.get(SERVER_ENV, "http://localhost:8000")


class ClientError(Exception):
    """A failed API call, carrying the server's message when it sent one."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class SurpriseClient:
    """Synchronous client for the surprise endpoints.

    Args:
        base_url: Server origin, e.g. http://localhost:8000.
        transport: Optional httpx transport, used to stub the server in tests.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or get_server_url()).rstrip("/")
        self._http = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def __enter__(self) -> "SurpriseClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def create(
        self,
        path: Path,
        message: str,
        content_type: str,
        password: str | None = None,
    ) -> dict[str, Any]:
        data = {"message": message}
        if password:
            data["password"] = password
        with path.open("rb") as fh:
            response = self._send(
                "POST",
                "/api/surprises",
                data=data,
                files={"file": (path.name, fh, content_type)},
                # Share links point at the server the CLI talked to
                headers={"Origin": self.base_url},
            )
        return response.json()

    def get(self, slug: str) -> dict[str, Any]:
        return self._send("GET", f"/api/surprises/{slug}").json()

    def verify_password(self, slug: str, password: str) -> dict[str, Any]:
        return self._send(
            "POST", f"/api/surprises/{slug}/verify-password", json={"password": password}
        ).json()

    def media_url(self, file_url: str) -> str:
        """Absolute URL for a fileUrl, which is server-relative for local blobs."""
        if file_url.startswith(("http://", "https://")):
            return file_url
        return f"{self.base_url}/{file_url.lstrip('/')}"

    def download(self, file_url: str, dest: Path) -> int:
        """Stream media to dest. Returns the number of bytes written."""
        written = 0
        try:
            with self._http.stream("GET", self.media_url(file_url)) as response:
                if response.is_error:
                    response.read()
                    raise _error_from(response)
                with dest.open("wb") as fh:
                    for chunk in response.iter_bytes():
                        fh.write(chunk)
                        written += len(chunk)
        except httpx.TransportError as e:
            raise ClientError(f"Could not reach {self.base_url}: {e}") from e
        return written

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.TransportError as e:
            raise ClientError(f"Could not reach {self.base_url}: {e}") from e
        if response.is_error:
            raise _error_from(response)
        return response


def _error_from(response: httpx.Response) -> ClientError:
    try:
        body = response.json()
    except ValueError:
        body = None
    message = body.get("message") if isinstance(body, dict) else None
    return ClientError(message or f"Request failed ({response.status_code})", response.status_code)
